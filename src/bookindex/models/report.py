"""Summary models describing a finished layout run."""

from typing import Optional

from pydantic import BaseModel, Field

from .base import CharClass


class SectionSummary(BaseModel):
    """One contiguous section of the index."""

    key: str
    char_class: CharClass
    first_topic: str
    entry_count: int = Field(default=0, ge=0)
    start_page: Optional[int] = Field(None, ge=1, description="Page the section starts on, when known")
    filler_inserted: bool = Field(default=False, description="A blank page closed this section")


class LayoutReport(BaseModel):
    """Outcome of laying out a full entry sequence."""

    entry_count: int = 0
    sections: list[SectionSummary] = Field(default_factory=list)
    filler_pages: int = 0
    final_page_count: Optional[int] = None

    @property
    def section_count(self) -> int:
        return len(self.sections)
