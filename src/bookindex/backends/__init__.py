"""Rendering backends for the layout driver.

- RenderingBackend - protocol the layout core talks to
- MemoryBackend - records commands, simulated page count (tests, previews)
- PdfBackend - multi-column PDF output via PyMuPDF
"""

from .base import RenderingBackend
from .memory import MemoryBackend
from .pdf import PdfBackend, base14_font

__all__ = [
    "RenderingBackend",
    "MemoryBackend",
    "PdfBackend",
    "base14_font",
]
