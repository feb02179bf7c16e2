"""Base models and common types for the book index builder."""

from enum import Enum

from pydantic import BaseModel


class CharClass(str, Enum):
    """Class of a section key's leading character."""

    LETTER = "letter"  # ASCII A-Z
    OTHER = "other"


class Alignment(str, Enum):
    """Paragraph alignment carried on a styled run."""

    LEFT = "left"
    RIGHT = "right"


class PlannerState(str, Enum):
    """Lifecycle of a pagination planner."""

    START = "start"
    IN_SECTION = "in_section"
    DONE = "done"


class FrozenModel(BaseModel):
    """Base class for immutable value models."""

    class Config:
        frozen = True
