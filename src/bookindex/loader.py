"""CSV input provider - read, detect headers, and sort index records."""

import csv
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from bookindex.exceptions import InputFormatError
from bookindex.models import RawRecord
from bookindex.pipeline.stage_classify import section_key

logger = logging.getLogger(__name__)


# Column names recognized in a header row
HEADER_NAMES = {
    "topic",
    "term",
    "entry",
    "description",
    "desc",
    "page",
    "pg",
    "book",
    "bk",
    "volume",
}


def looks_like_header(row: list[str]) -> bool:
    """Return True if the row reads as column names.

    Two cells must match, so a data row whose topic happens to be a
    column word ("Entry", "Page") is kept. A row with a single non-empty
    cell needs only that one.
    """
    cells = [cell.strip().casefold() for cell in row if cell.strip()]
    matches = sum(1 for cell in cells if cell in HEADER_NAMES)
    return bool(cells) and matches >= min(2, len(cells))


def load_records(
    path: Path,
    delimiter: str = ",",
    encoding: str = "utf-8-sig",
    has_header: Optional[bool] = None,
) -> list[RawRecord]:
    """Read (topic, description, page, book) rows from a CSV file.

    Args:
        path: CSV file path.
        delimiter: Field delimiter.
        encoding: File encoding (BOM-tolerant by default).
        has_header: Force header handling; None detects it from the first row.

    Returns:
        Records in file order. Blank rows are skipped.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")

    try:
        with open(path, newline="", encoding=encoding) as f:
            rows = [row for row in csv.reader(f, delimiter=delimiter) if any(cell.strip() for cell in row)]
    except UnicodeDecodeError as exc:
        raise InputFormatError(f"{path} is not valid {encoding} text") from exc
    except csv.Error as exc:
        raise InputFormatError(f"{path}: {exc}") from exc

    if rows:
        skip_header = looks_like_header(rows[0]) if has_header is None else has_header
        if skip_header:
            logger.info("Skipping header row: %s", rows[0])
            rows = rows[1:]

    logger.info("Loaded %d records from %s", len(rows), path.name)
    return [RawRecord.from_row(row) for row in rows]


def sort_key(record: RawRecord) -> tuple[str, str]:
    """Section key first, so each section's entries stay contiguous."""
    topic = record.topic if isinstance(record.topic, str) else str(record.topic or "")
    topic = topic.lstrip()
    if not topic:
        return ("", "")
    return (section_key(topic), topic.casefold())


def sort_records(records: Iterable[RawRecord]) -> list[RawRecord]:
    """Stable sort by section key, then topic, ignoring case and leading whitespace."""
    return sorted(records, key=sort_key)
