"""Tests for the layout driver."""

from unittest.mock import MagicMock

import pytest

from bookindex.backends import MemoryBackend
from bookindex.exceptions import BackendError, EmptyTopicError
from bookindex.models import EmitRuns, Entry, PageBreak, QueryPageCount, RawRecord
from bookindex.pipeline.stage_layout import LayoutDriver, layout
from bookindex.pipeline.stage_render import render_entry
from bookindex.pipeline.stage_normalize import normalize


class ParityBackend(MemoryBackend):
    """Records the page count at every page break."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.counts_at_break = []

    def page_break(self) -> None:
        self.counts_at_break.append(self.pages)
        super().page_break()


def _records(counts: dict[str, int]) -> list[RawRecord]:
    """Build sorted records: {"A": 3} -> A00, A01, A02."""
    return [
        RawRecord(topic=f"{prefix}{i:02d}", description="entry", page=str(i), book="1")
        for prefix, count in counts.items()
        for i in range(count)
    ]


class TestLayoutDriver:
    """Tests for end-to-end layout against a recording backend."""

    def test_mixed_records(self, mixed_records, memory_backend, settings):
        report = LayoutDriver(memory_backend, settings=settings).run(mixed_records)

        assert report.entry_count == 5
        assert [s.key for s in report.sections] == ["A", "B", "1", "C"]
        assert report.filler_pages == 4
        assert report.final_page_count == 8
        assert memory_backend.pages == 8
        assert [s.start_page for s in report.sections] == [None, 3, 5, 7]

    def test_query_before_every_boundary_and_at_end(self, mixed_records, memory_backend, settings):
        layout(mixed_records, memory_backend, settings=settings)

        queries = [c for c in memory_backend.commands if isinstance(c, QueryPageCount)]
        assert len(queries) == 4  # three boundaries plus the closing check

    def test_command_order_for_single_section(self, giac_entry, memory_backend, settings):
        layout([giac_entry], memory_backend, settings=settings)

        commands = memory_backend.commands
        assert commands[0] == EmitRuns(runs=tuple(render_entry(giac_entry)), ends_paragraph=True)
        assert commands[1] == QueryPageCount(result=1)
        assert commands[2] == PageBreak()
        assert len(commands) == 2 + 1 + 15 + 1

    def test_even_page_count_skips_filler(self, settings):
        backend = MemoryBackend()
        backend.pages = 2

        report = LayoutDriver(backend, settings=settings).run([("Alpha", "", "1", "1"), ("Beta", "", "2", "1")])

        assert not report.sections[0].filler_inserted
        assert report.sections[1].start_page == 3
        # Only the closing check pads: 3 pages -> filler -> 4
        assert report.sections[1].filler_inserted
        assert backend.page_breaks == 2
        assert backend.pages == 4

    def test_parity_at_every_section_break(self, settings):
        """Each section-opening break happens on an even page count."""
        backend = ParityBackend(paragraphs_per_page=20)
        records = _records({"A": 25, "B": 3, "C": 41, "D": 1, "E": 20, "F": 2})

        report = LayoutDriver(backend, settings=settings).run(records)

        breaks = [i for i, c in enumerate(backend.commands) if isinstance(c, PageBreak)]
        section_breaks = [
            n
            for n, i in enumerate(breaks)
            if isinstance(backend.commands[i + 1], EmitRuns) and len(backend.commands[i + 1].runs) == 3
        ]
        assert len(section_breaks) == report.section_count - 1 == 5
        assert all(backend.counts_at_break[n] % 2 == 0 for n in section_breaks)
        assert backend.pages % 2 == 0
        assert all(s.start_page % 2 == 1 for s in report.sections[1:])

    def test_idempotent(self, mixed_records, settings):
        """Same input against fresh backends gives identical transcripts."""
        first, second = MemoryBackend(), MemoryBackend()

        layout(mixed_records, first, settings=settings)
        layout(mixed_records, second, settings=settings)

        assert first.commands == second.commands

    def test_empty_input(self, memory_backend, settings):
        report = LayoutDriver(memory_backend, settings=settings).run([])

        assert memory_backend.commands == []
        assert report.section_count == 0
        assert report.final_page_count is None

    def test_empty_topic_stops_before_record(self, memory_backend, settings):
        """No command is issued for a record that fails normalization."""
        records = [("Alpha", "first", "1", "1"), ("   ", "bad", "2", "1"), ("Beta", "", "3", "1")]

        with pytest.raises(EmptyTopicError) as exc_info:
            layout(records, memory_backend, settings=settings)

        assert exc_info.value.index == 1
        first = normalize(records[0])
        assert memory_backend.commands == [EmitRuns(runs=tuple(render_entry(first)), ends_paragraph=True)]

    def test_entries_with_leading_space_stay_in_section(self, memory_backend, settings):
        """Entry inputs are trimmed before classification."""
        entries = [Entry(topic="Apple"), Entry(topic=" Apricot"), Entry(topic="Avocado")]

        report = LayoutDriver(memory_backend, settings=settings).run(entries)

        assert [s.key for s in report.sections] == ["A"]
        assert report.sections[0].entry_count == 3
        assert memory_backend.paragraphs[1][0].text == "Apricot"

    def test_whitespace_entry_fails_before_commands(self, memory_backend, settings):
        with pytest.raises(EmptyTopicError) as exc_info:
            layout([Entry(topic="   ")], memory_backend, settings=settings)

        assert exc_info.value.index == 0
        assert memory_backend.commands == []

    def test_backend_error_propagates_unchanged(self, settings):
        error = BackendError("surface gone")
        backend = MagicMock()
        backend.current_page_count.return_value = 2
        backend.page_break.side_effect = error

        with pytest.raises(BackendError) as exc_info:
            layout([("Alpha", "", "1", "1"), ("Beta", "", "2", "1")], backend, settings=settings)

        assert exc_info.value is error
        assert backend.emit.call_count == 1

    def test_uses_configured_filler(self, mixed_records, memory_backend, settings):
        tuned = settings.model_copy(update={"filler_blank_lines": 2, "filler_text": "intentionally blank"})

        layout(mixed_records[:2], memory_backend, settings=tuned)

        assert "intentionally blank" in memory_backend.text()
        assert memory_backend.text().count("intentionally blank") == 2


class TestDispatch:
    """Tests for single-command dispatch."""

    def test_unanswered_query_asks_backend(self, settings):
        backend = MagicMock()
        backend.current_page_count.return_value = 9

        assert LayoutDriver(backend, settings=settings).dispatch(QueryPageCount()) == 9
        backend.current_page_count.assert_called_once_with()

    def test_answered_query_not_repeated(self, settings):
        backend = MagicMock()

        assert LayoutDriver(backend, settings=settings).dispatch(QueryPageCount(result=4)) == 4
        backend.current_page_count.assert_not_called()

    def test_unknown_command(self, settings):
        with pytest.raises(TypeError):
            LayoutDriver(MagicMock(), settings=settings).dispatch("page break")
