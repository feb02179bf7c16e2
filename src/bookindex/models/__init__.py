"""Models for the book index builder.

Data flows through the pipeline as:
- RawRecord → Entry (normalization)
- Entry → Classification (section key and character class)
- Entry → StyledRun list (rendering)
- planner/renderer output → LayoutCommand sequence → backend

Value models are frozen; report models are filled in as layout proceeds.
"""

from .base import (
    Alignment,
    CharClass,
    FrozenModel,
    PlannerState,
)
from .command import (
    EmitRuns,
    LayoutCommand,
    PageBreak,
    QueryPageCount,
)
from .entry import (
    Classification,
    Entry,
    RawRecord,
)
from .report import (
    LayoutReport,
    SectionSummary,
)
from .run import StyledRun

__all__ = [
    # Base types
    "Alignment",
    "CharClass",
    "FrozenModel",
    "PlannerState",
    # Entries
    "RawRecord",
    "Entry",
    "Classification",
    # Runs and commands
    "StyledRun",
    "EmitRuns",
    "PageBreak",
    "QueryPageCount",
    "LayoutCommand",
    # Reports
    "SectionSummary",
    "LayoutReport",
]
