"""Exception hierarchy for the book index builder."""

from typing import Optional


class BookIndexError(Exception):
    """Base class for all errors raised by bookindex."""


class EmptyTopicError(BookIndexError, ValueError):
    """A record's topic is empty once leading whitespace is removed."""

    def __init__(self, index: Optional[int] = None):
        self.index = index
        if index is None:
            message = "Record has an empty topic"
        else:
            message = f"Record {index} has an empty topic"
        super().__init__(message)


class BackendError(BookIndexError):
    """The rendering backend failed to carry out a command."""


class InputFormatError(BookIndexError):
    """An input file could not be read as index records."""
