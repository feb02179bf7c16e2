"""Pagination Stage - Section boundaries and odd-page section starts.

The planner walks classified entries in order and decides where one
section ends and the next begins. At each boundary it asks the backend how
many pages exist; an odd count gets a filler page so that the following
page break always opens the next section on an odd page.

Boundary rule between consecutive keys k (new) and p (previous):

    k != p and (k is a letter or p is a letter)

Changes between two non-letter keys ("1" -> "2") never split a section,
so all symbol and digit topics share one section.
"""

import logging
from collections.abc import Callable
from typing import Optional

from bookindex.config import Settings
from bookindex.models import (
    Alignment,
    Classification,
    EmitRuns,
    LayoutCommand,
    PageBreak,
    PlannerState,
    QueryPageCount,
    SectionSummary,
    StyledRun,
)

logger = logging.getLogger(__name__)


def is_boundary(previous: Classification, current: Classification) -> bool:
    """Return True when a new section starts between two consecutive entries."""
    if current.key == previous.key:
        return False
    return current.is_letter or previous.is_letter


class PaginationPlanner:
    """State machine deciding section boundaries and filler pages.

    Owns the pagination state for one layout run. The page count is read
    through ``query_page_count`` only at section boundaries and once when
    the stream ends.
    """

    def __init__(
        self,
        query_page_count: Callable[[], int],
        filler_blank_lines: int = 15,
        filler_text: str = "BLANK",
        filler_font_name: str = "Arial",
        filler_font_size_pt: float = 36,
    ):
        """Initialize planner.

        Args:
            query_page_count: Returns the backend's current page count,
                reflecting every command issued so far.
            filler_blank_lines: Empty paragraphs before the placeholder text.
            filler_text: Placeholder printed on filler pages ("" to omit).
            filler_font_name: Font of the placeholder text.
            filler_font_size_pt: Size of the placeholder text.
        """
        if filler_blank_lines < 0:
            raise ValueError("filler_blank_lines must be non-negative")

        self.query_page_count = query_page_count
        self.filler_blank_lines = filler_blank_lines
        self.filler_text = filler_text
        self.filler_font_name = filler_font_name
        self.filler_font_size_pt = filler_font_size_pt

        self.state = PlannerState.START
        self.previous: Optional[Classification] = None
        self.sections: list[SectionSummary] = []
        self.filler_pages = 0
        self.final_page_count: Optional[int] = None

    @classmethod
    def from_settings(
        cls,
        query_page_count: Callable[[], int],
        settings: Settings,
    ) -> "PaginationPlanner":
        return cls(
            query_page_count,
            filler_blank_lines=settings.filler_blank_lines,
            filler_text=settings.filler_text,
            filler_font_name=settings.filler_font_name,
            filler_font_size_pt=settings.filler_font_size_pt,
        )

    @property
    def is_first_entry(self) -> bool:
        return self.state is PlannerState.START

    @property
    def previous_key(self) -> Optional[str]:
        return self.previous.key if self.previous else None

    def advance(self, classification: Classification, topic: str = "") -> list[LayoutCommand]:
        """Handle the next entry and return the commands to issue before it.

        Args:
            classification: Section key and class of the incoming entry.
            topic: Entry topic, recorded on the section summary.

        Returns:
            Commands to send to the backend ahead of the entry's own runs.
        """
        if self.state is PlannerState.DONE:
            raise RuntimeError("Planner already finished")

        commands: list[LayoutCommand] = []

        if self.state is PlannerState.START:
            self.state = PlannerState.IN_SECTION
            self._open_section(classification, topic, start_page=None)
        elif is_boundary(self.previous, classification):
            logger.debug("Section boundary %r -> %r", self.previous.key, classification.key)
            commands.extend(self._close_section())
            commands.append(PageBreak())
            self._open_section(classification, topic, start_page=self._next_start_page(commands))

        self.sections[-1].entry_count += 1
        self.previous = classification
        return commands

    def finish(self) -> list[LayoutCommand]:
        """Close the final section. Safe to call more than once."""
        if self.state is PlannerState.DONE:
            return []
        if self.state is PlannerState.START:
            self.state = PlannerState.DONE
            return []

        self.state = PlannerState.DONE
        commands = self._close_section()
        # Filler pads an odd count by exactly one page
        queried = commands[0].result
        self.final_page_count = queried + 1 if queried % 2 == 1 else queried
        return commands

    def filler_commands(self) -> list[LayoutCommand]:
        """Commands that produce one visually marked blank page."""
        commands: list[LayoutCommand] = [PageBreak()]
        commands.extend(EmitRuns(runs=(), ends_paragraph=True) for _ in range(self.filler_blank_lines))

        placeholder = StyledRun(
            text=self.filler_text,
            bold=True,
            font_name=self.filler_font_name,
            font_size_pt=self.filler_font_size_pt,
            alignment=Alignment.RIGHT,
        )
        commands.append(EmitRuns(runs=(placeholder,), ends_paragraph=True))
        return commands

    def _close_section(self) -> list[LayoutCommand]:
        page_count = self.query_page_count()
        commands: list[LayoutCommand] = [QueryPageCount(result=page_count)]

        if page_count % 2 == 1:
            logger.debug("Page count %d is odd, inserting filler page", page_count)
            commands.extend(self.filler_commands())
            self.sections[-1].filler_inserted = True
            self.filler_pages += 1
        return commands

    def _open_section(
        self,
        classification: Classification,
        topic: str,
        start_page: Optional[int],
    ) -> None:
        self.sections.append(
            SectionSummary(
                key=classification.key,
                char_class=classification.char_class,
                first_topic=topic,
                start_page=start_page,
            )
        )

    @staticmethod
    def _next_start_page(commands: list[LayoutCommand]) -> int:
        # First odd page after the queried count
        queried = commands[0].result
        return queried + 2 if queried % 2 == 1 else queried + 1
