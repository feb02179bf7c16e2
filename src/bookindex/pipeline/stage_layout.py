"""Layout Stage - Drive entries through the pipeline into a backend.

Normalize -> classify -> paginate -> render, issuing every command to the
backend in the order it is generated. The first error from any stage or
from the backend stops the run; whatever the backend already received is
left as-is.
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from bookindex.backends import RenderingBackend
from bookindex.config import Settings
from bookindex.config import settings as default_settings
from bookindex.models import (
    EmitRuns,
    LayoutCommand,
    LayoutReport,
    PageBreak,
    QueryPageCount,
)

from .stage_classify import classify
from .stage_normalize import normalize
from .stage_paginate import PaginationPlanner
from .stage_render import EntryRenderer

logger = logging.getLogger(__name__)


class LayoutDriver:
    """Runs one layout pass over an ordered entry sequence.

    Not reentrant: each driver owns a single planner and is used for a
    single ``run``.
    """

    def __init__(
        self,
        backend: RenderingBackend,
        settings: Optional[Settings] = None,
    ):
        self.backend = backend
        self.settings = settings or default_settings
        self.planner = PaginationPlanner.from_settings(self.backend.current_page_count, self.settings)
        self.renderer = EntryRenderer(
            font_name=self.settings.entry_font_name,
            font_size_pt=self.settings.entry_font_size_pt,
        )
        self.report = LayoutReport()

    def dispatch(self, command: LayoutCommand) -> Optional[int]:
        """Send one command to the backend.

        A QueryPageCount that already carries a result was answered when the
        planner asked for it and is not repeated.
        """
        if isinstance(command, EmitRuns):
            self.backend.emit(list(command.runs), command.ends_paragraph)
        elif isinstance(command, PageBreak):
            self.backend.page_break()
        elif isinstance(command, QueryPageCount):
            if command.result is not None:
                return command.result
            return self.backend.current_page_count()
        else:
            raise TypeError(f"Unknown layout command: {command!r}")
        return None

    def run(self, records: Iterable[Any]) -> LayoutReport:
        """Lay out records (pre-sorted by topic) into the backend.

        Args:
            records: RawRecords, Entries, mappings or 4-tuples in input order.

        Returns:
            LayoutReport describing the sections produced.

        Raises:
            EmptyTopicError: A record has an empty topic.
            BackendError: The backend failed a command.
        """
        for index, record in enumerate(records):
            entry = normalize(record, index=index)
            classification = classify(entry)

            for command in self.planner.advance(classification, topic=entry.topic):
                self.dispatch(command)
            for command in self.renderer.commands(entry):
                self.dispatch(command)
            self.report.entry_count += 1

        for command in self.planner.finish():
            self.dispatch(command)

        self.report.sections = list(self.planner.sections)
        self.report.filler_pages = self.planner.filler_pages
        self.report.final_page_count = self.planner.final_page_count

        logger.info(
            "Laid out %d entries in %d sections (%d filler pages)",
            self.report.entry_count,
            self.report.section_count,
            self.report.filler_pages,
        )
        return self.report


def layout(
    records: Iterable[Any],
    backend: RenderingBackend,
    settings: Optional[Settings] = None,
) -> None:
    """Lay out records into a backend; raises on the first failure."""
    LayoutDriver(backend, settings=settings).run(records)
