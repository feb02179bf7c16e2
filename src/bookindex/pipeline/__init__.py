"""Pipeline stages for building a sectioned book index.

Stages, in data-flow order:
1. stage_normalize - RawRecord to canonical Entry
2. stage_classify - section key and letter/other class
3. stage_paginate - section boundaries and filler pages
4. stage_render - Entry to styled runs
5. stage_layout - drives the stages into a rendering backend

Stages 1, 2 and 4 are pure; stage 3 holds the only pagination state and
stage 5 owns one planner per run.
"""

from .stage_classify import char_class, classify, section_key
from .stage_layout import LayoutDriver, layout
from .stage_normalize import normalize, normalize_all
from .stage_paginate import PaginationPlanner, is_boundary
from .stage_render import EntryRenderer, render_entry

__all__ = [
    # Normalize
    "normalize",
    "normalize_all",
    # Classify
    "classify",
    "section_key",
    "char_class",
    # Paginate
    "PaginationPlanner",
    "is_boundary",
    # Render
    "EntryRenderer",
    "render_entry",
    # Layout
    "LayoutDriver",
    "layout",
]
