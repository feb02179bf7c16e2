"""Entry Rendering Stage - Convert entries to styled runs.

Every entry becomes one paragraph of exactly three runs:

    GIAC [b1/p5] Global Information Assurance Certification
    ^^^^ ^^^^^^^ ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^
    bold italic  plain

The paragraph break is a separate instruction, never part of run text.
"""

from bookindex.models import Alignment, EmitRuns, Entry, LayoutCommand, StyledRun


def _single_line(text: str) -> str:
    return " ".join(text.splitlines()) if text else text


class EntryRenderer:
    """Formats index entries as styled runs."""

    def __init__(
        self,
        font_name: str = "Times New Roman",
        font_size_pt: float = 10,
    ):
        self.font_name = font_name
        self.font_size_pt = font_size_pt

    def render(self, entry: Entry) -> list[StyledRun]:
        """Return the topic, locator and description runs for an entry."""
        topic = StyledRun(
            text=_single_line(entry.topic),
            bold=True,
            font_name=self.font_name,
            font_size_pt=self.font_size_pt,
            alignment=Alignment.LEFT,
        )
        locator = StyledRun(
            text=f" [b{_single_line(entry.book)}/p{_single_line(entry.page)}]",
            italic=True,
        )
        description = StyledRun(text=f" {_single_line(entry.description)}")
        return [topic, locator, description]

    def commands(self, entry: Entry) -> list[LayoutCommand]:
        """Runs for an entry as a single paragraph-ending command."""
        return [EmitRuns(runs=tuple(self.render(entry)), ends_paragraph=True)]


def render_entry(entry: Entry) -> list[StyledRun]:
    """Render an entry with the default entry font."""
    return EntryRenderer().render(entry)
