"""Build print-ready, sectioned book indexes from topic/page records."""

from bookindex.exceptions import BackendError, BookIndexError, EmptyTopicError, InputFormatError
from bookindex.pipeline import LayoutDriver, layout

__version__ = "0.1.0"

__all__ = [
    "BackendError",
    "BookIndexError",
    "EmptyTopicError",
    "InputFormatError",
    "LayoutDriver",
    "layout",
]
