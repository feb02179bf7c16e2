"""Index entry models."""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import Field

from .base import CharClass, FrozenModel


class RawRecord(FrozenModel):
    """Record as supplied by an input provider.

    Fields are opaque; page and book only need to be renderable as text.
    """

    topic: Any = None
    description: Any = None
    page: Any = None
    book: Any = None

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "RawRecord":
        """Build a record from a (topic, description, page, book) row.

        Short rows are padded with empty strings; extra cells are ignored.
        """
        cells = list(row[:4]) + [""] * (4 - min(len(row), 4))
        topic, description, page, book = cells
        return cls(topic=topic, description=description, page=page, book=book)

    @classmethod
    def coerce(cls, value: Any) -> "RawRecord":
        """Accept a RawRecord, an Entry, a mapping, or a 4-tuple."""
        if isinstance(value, RawRecord):
            return value
        if isinstance(value, Entry):
            return cls(**value.model_dump())
        if isinstance(value, Mapping):
            return cls(**{k: value.get(k) for k in ("topic", "description", "page", "book")})
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            return cls.from_row(value)
        raise TypeError(f"Cannot build a RawRecord from {type(value).__name__}")


class Entry(FrozenModel):
    """Canonical index entry with a non-empty, left-trimmed topic."""

    topic: str = Field(..., min_length=1)
    description: str = ""
    page: str = ""
    book: str = ""


class Classification(FrozenModel):
    """Section key and character class of an entry."""

    key: str = Field(..., min_length=1, max_length=1)
    char_class: CharClass

    @property
    def is_letter(self) -> bool:
        return self.char_class is CharClass.LETTER
