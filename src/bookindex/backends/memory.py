"""In-memory backend that records the command transcript."""

from collections.abc import Sequence
from typing import Optional

from bookindex.models import EmitRuns, LayoutCommand, PageBreak, QueryPageCount, StyledRun


class MemoryBackend:
    """Records every command and simulates a page count.

    The page count starts at 1 and grows by one per page break. When
    ``paragraphs_per_page`` is set, a page also overflows once it holds
    that many paragraphs.
    """

    def __init__(self, paragraphs_per_page: Optional[int] = None):
        if paragraphs_per_page is not None and paragraphs_per_page < 1:
            raise ValueError("paragraphs_per_page must be at least 1")
        self.paragraphs_per_page = paragraphs_per_page
        self.commands: list[LayoutCommand] = []
        self.pages = 1
        self._paragraphs_on_page = 0

    def emit(self, runs: Sequence[StyledRun], ends_paragraph: bool = True) -> None:
        self.commands.append(EmitRuns(runs=tuple(runs), ends_paragraph=ends_paragraph))
        if not ends_paragraph:
            return

        if self.paragraphs_per_page and self._paragraphs_on_page >= self.paragraphs_per_page:
            self.pages += 1
            self._paragraphs_on_page = 0
        self._paragraphs_on_page += 1

    def page_break(self) -> None:
        self.commands.append(PageBreak())
        self.pages += 1
        self._paragraphs_on_page = 0

    def current_page_count(self) -> int:
        self.commands.append(QueryPageCount(result=self.pages))
        return self.pages

    @property
    def page_breaks(self) -> int:
        return sum(isinstance(c, PageBreak) for c in self.commands)

    @property
    def paragraphs(self) -> list[tuple[StyledRun, ...]]:
        """Runs of every closed paragraph, in order."""
        return [c.runs for c in self.commands if isinstance(c, EmitRuns) and c.ends_paragraph]

    def text(self) -> str:
        """Plain text of the transcript, one line per paragraph, \\f per page break."""
        parts = []
        for command in self.commands:
            if isinstance(command, EmitRuns):
                parts.append("".join(run.text for run in command.runs))
                if command.ends_paragraph:
                    parts.append("\n")
            elif isinstance(command, PageBreak):
                parts.append("\f")
        return "".join(parts)
