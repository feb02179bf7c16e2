"""Layout commands exchanged between the planner and the backend."""

from typing import Literal, Optional, Union

from pydantic import Field

from .base import FrozenModel
from .run import StyledRun


class EmitRuns(FrozenModel):
    """Append runs to the current paragraph, optionally closing it."""

    kind: Literal["emit_runs"] = "emit_runs"
    runs: tuple[StyledRun, ...] = ()
    ends_paragraph: bool = True


class PageBreak(FrozenModel):
    """Start a new page."""

    kind: Literal["page_break"] = "page_break"


class QueryPageCount(FrozenModel):
    """Ask the backend for its current page count."""

    kind: Literal["query_page_count"] = "query_page_count"
    result: Optional[int] = Field(None, ge=1, description="Answer given by the backend")


LayoutCommand = Union[EmitRuns, PageBreak, QueryPageCount]
