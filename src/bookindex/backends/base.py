"""Rendering backend capability consumed by the layout driver."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from bookindex.models import StyledRun


@runtime_checkable
class RenderingBackend(Protocol):
    """The three operations the layout core may issue.

    ``current_page_count`` must reflect every command issued before it;
    implementations may not defer layout.
    """

    def emit(self, runs: Sequence[StyledRun], ends_paragraph: bool = True) -> None:
        ...

    def page_break(self) -> None:
        ...

    def current_page_count(self) -> int:
        ...
