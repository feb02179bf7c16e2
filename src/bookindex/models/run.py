"""Styled text runs handed to the rendering backend."""

from typing import Optional

from pydantic import Field

from .base import Alignment, FrozenModel


class StyledRun(FrozenModel):
    """Minimal unit of formatted text.

    Unset font name, size or alignment means "inherit from the paragraph".
    """

    text: str
    bold: bool = False
    italic: bool = False
    font_name: Optional[str] = None
    font_size_pt: Optional[float] = Field(None, gt=0)
    alignment: Optional[Alignment] = None
