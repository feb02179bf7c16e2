"""PDF backend - Multi-column index pages written with PyMuPDF (fitz).

Styled runs are word-wrapped into fixed-width columns using the PDF
base-14 fonts, so text metrics are known without embedding font files.
Text flows down each column, then across columns, then onto a new page.
"""

import logging
import math
import re
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence

import fitz  # PyMuPDF

from bookindex.config import Settings
from bookindex.config import settings as default_settings
from bookindex.exceptions import BackendError
from bookindex.models import Alignment, StyledRun

logger = logging.getLogger(__name__)


# Font name (casefolded) -> base-14 family
FONT_FAMILIES = {
    "times new roman": "times",
    "times": "times",
    "times-roman": "times",
    "serif": "times",
    "arial": "helvetica",
    "helvetica": "helvetica",
    "sans-serif": "helvetica",
    "courier new": "courier",
    "courier": "courier",
    "monospace": "courier",
}

# (family, bold, italic) -> PyMuPDF base-14 font code
BASE14_FONTS = {
    ("times", False, False): "tiro",
    ("times", True, False): "tibo",
    ("times", False, True): "tiit",
    ("times", True, True): "tibi",
    ("helvetica", False, False): "helv",
    ("helvetica", True, False): "hebo",
    ("helvetica", False, True): "heit",
    ("helvetica", True, True): "hebi",
    ("courier", False, False): "cour",
    ("courier", True, False): "cobo",
    ("courier", False, True): "coit",
    ("courier", True, True): "cobi",
}

_TOKEN_RE = re.compile(r"\S+|\s+")


def base14_font(font_name: Optional[str], bold: bool = False, italic: bool = False) -> str:
    """Map a font family name plus style to a base-14 font code.

    Unknown families fall back to Times.
    """
    family = FONT_FAMILIES.get((font_name or "").strip().casefold(), "times")
    return BASE14_FONTS[(family, bold, italic)]


@dataclass
class _Fragment:
    """Piece of a line drawn in a single font."""

    text: str
    fontname: str
    fontsize: float
    width: float

    @property
    def is_space(self) -> bool:
        return self.text.isspace()


@contextmanager
def _backend_errors(action: str) -> Iterator[None]:
    try:
        yield
    except (RuntimeError, ValueError, OSError) as exc:
        raise BackendError(f"PDF backend failed to {action}: {exc}") from exc


class PdfBackend:
    """Lays out styled runs into a multi-column PDF.

    Page geometry, margins and column setup come from Settings. The page
    count is exact for all paragraphs emitted so far, which is what the
    pagination planner relies on.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize backend with an empty first page.

        Args:
            settings: Page geometry and fonts (default: module settings).
        """
        self.settings = settings or default_settings
        if self.settings.column_width <= 0:
            raise ValueError("Margins and column gap leave no room for text")

        self.column_width = self.settings.column_width
        self.top = self.settings.margin_top_pt
        self.bottom = self.settings.page_height_pt - self.settings.margin_bottom_pt

        filler_height = self.filler_height()
        if filler_height > self.bottom - self.top:
            raise ValueError(
                f"Filler page needs {filler_height:.1f}pt but a column holds "
                f"{self.bottom - self.top:.1f}pt; reduce filler_blank_lines"
            )

        with _backend_errors("create document"):
            self.doc = fitz.open()
            self._new_page()

        self._line: list[_Fragment] = []
        self._line_width = 0.0
        self._reset_paragraph()

    def filler_height(self) -> float:
        """Height of the filler page content: blank lines plus the placeholder.

        The pagination planner counts a filler as exactly one page, so this
        must fit in a single column.
        """
        s = self.settings
        blank = s.filler_blank_lines * s.entry_font_size_pt * s.line_spacing
        width = fitz.get_text_length(
            s.filler_text,
            fontname=base14_font(s.filler_font_name, bold=True),
            fontsize=s.filler_font_size_pt,
        )
        placeholder_lines = max(1, math.ceil(width / self.column_width))
        return blank + placeholder_lines * s.filler_font_size_pt * s.line_spacing

    # Rendering backend protocol

    def emit(self, runs: Sequence[StyledRun], ends_paragraph: bool = True) -> None:
        with _backend_errors("emit runs"):
            for run in runs:
                self._add_run(run)
            if ends_paragraph:
                self._commit_line(allow_empty=True)
                self._reset_paragraph()

    def page_break(self) -> None:
        with _backend_errors("break page"):
            if self._line:
                self._commit_line()
            self._new_page()

    def current_page_count(self) -> int:
        with _backend_errors("count pages"):
            count = self.doc.page_count
        if self._line and not self._fits(self._pending_height()) and self._column == self.settings.columns - 1:
            count += 1
        return count

    # Document lifecycle

    def save(self, path: Path) -> Path:
        """Write the PDF to disk."""
        path = Path(path)
        if self._line:
            self._commit_line()
        path.parent.mkdir(parents=True, exist_ok=True)
        with _backend_errors(f"save {path}"):
            self.doc.save(str(path), garbage=3, deflate=True)
        logger.info("Wrote %d pages to %s", self.doc.page_count, path)
        return path

    def close(self) -> None:
        self.doc.close()

    def __enter__(self) -> "PdfBackend":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Layout internals

    def _reset_paragraph(self) -> None:
        self._font_name = self.settings.entry_font_name
        self._font_size = self.settings.entry_font_size_pt
        self._alignment = Alignment.LEFT

    def _add_run(self, run: StyledRun) -> None:
        if run.font_name:
            self._font_name = run.font_name
        if run.font_size_pt:
            self._font_size = run.font_size_pt
        if run.alignment is not None:
            self._alignment = run.alignment

        fontname = base14_font(self._font_name, run.bold, run.italic)
        for token in _TOKEN_RE.findall(run.text):
            self._add_token(token, fontname, self._font_size)

    def _add_token(self, token: str, fontname: str, fontsize: float) -> None:
        width = fitz.get_text_length(token, fontname=fontname, fontsize=fontsize)
        fragment = _Fragment(token, fontname, fontsize, width)

        if fragment.is_space:
            # No leading whitespace on a wrapped line
            if self._line:
                self._line.append(fragment)
                self._line_width += width
            return

        if self._line and self._line_width + width > self.column_width:
            self._commit_line()
        self._line.append(fragment)
        self._line_width += width

    def _pending_height(self) -> float:
        size = max((f.fontsize for f in self._line), default=self._font_size)
        return size * self.settings.line_spacing

    def _fits(self, height: float) -> bool:
        return self._y + height <= self.bottom or self._y <= self.top

    def _commit_line(self, allow_empty: bool = False) -> None:
        while self._line and self._line[-1].is_space:
            self._line_width -= self._line.pop().width
        if not self._line and not allow_empty:
            return

        height = self._pending_height()
        if not self._fits(height):
            self._next_column()

        if self._line:
            ascent = max(f.fontsize for f in self._line)
            x = self._column_left()
            if self._alignment is Alignment.RIGHT:
                x += max(self.column_width - self._line_width, 0.0)
            baseline = self._y + ascent
            for fragment in self._merged_line():
                self._page.insert_text(
                    fitz.Point(x, baseline),
                    fragment.text,
                    fontname=fragment.fontname,
                    fontsize=fragment.fontsize,
                )
                x += fragment.width

        self._y += height
        self._line = []
        self._line_width = 0.0

    def _merged_line(self) -> list[_Fragment]:
        """Join neighbouring fragments that share a font."""
        merged: list[_Fragment] = []
        for fragment in self._line:
            last = merged[-1] if merged else None
            if last and last.fontname == fragment.fontname and last.fontsize == fragment.fontsize:
                merged[-1] = _Fragment(
                    last.text + fragment.text,
                    last.fontname,
                    last.fontsize,
                    last.width + fragment.width,
                )
            else:
                merged.append(fragment)
        return merged

    def _column_left(self) -> float:
        return self.settings.margin_left_pt + self._column * (self.column_width + self.settings.column_gap_pt)

    def _next_column(self) -> None:
        if self._column + 1 < self.settings.columns:
            self._column += 1
            self._y = self.top
        else:
            self._new_page()

    def _new_page(self) -> None:
        self._page = self.doc.new_page(
            width=self.settings.page_width_pt,
            height=self.settings.page_height_pt,
        )
        self._column = 0
        self._y = self.top
        logger.debug("Started page %d", self.doc.page_count)
