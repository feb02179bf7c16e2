"""Normalization Stage - Turn raw records into canonical entries.

Only the topic is trimmed (leading whitespace); description, page and book
are passed through as text. A topic that is empty after trimming has no
first character to section on and is rejected.
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from bookindex.exceptions import EmptyTopicError
from bookindex.models import Entry, RawRecord

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize(raw: Any, index: Optional[int] = None) -> Entry:
    """Validate and trim one record.

    Args:
        raw: RawRecord (or anything RawRecord.coerce accepts).
        index: Position of the record in its input, used in error messages.

    Returns:
        Canonical Entry.

    Raises:
        EmptyTopicError: If the topic is missing, empty or all whitespace.
    """
    # Entries go through the same trim and empty check
    record = RawRecord.coerce(raw)

    topic = _as_text(record.topic).lstrip()
    if not topic:
        raise EmptyTopicError(index)

    return Entry(
        topic=topic,
        description=_as_text(record.description),
        page=_as_text(record.page),
        book=_as_text(record.book),
    )


def normalize_all(records: Iterable[Any], skip_empty: bool = False) -> list[Entry]:
    """Normalize a whole record sequence.

    Args:
        records: Records in input order.
        skip_empty: Drop records with empty topics instead of failing.

    Returns:
        Entries in input order.
    """
    entries = []
    for index, record in enumerate(records):
        try:
            entries.append(normalize(record, index=index))
        except EmptyTopicError:
            if not skip_empty:
                raise
            logger.warning("Skipping record %d: empty topic", index)
    return entries
