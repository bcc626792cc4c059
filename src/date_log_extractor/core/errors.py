"""Exceptions raised by the extraction core."""

from __future__ import annotations


class ExtractorError(Exception):
    """Base class for extractor failures."""


class DataOrderError(ExtractorError, ValueError):
    """A date key appeared out of ascending order while indexing."""

    def __init__(self, date_key: str, previous_key: str, offset: int) -> None:
        self.date_key = date_key
        self.previous_key = previous_key
        self.offset = offset
        super().__init__(
            f"Log is not sorted by date: {date_key!r} at byte {offset} "
            f"follows {previous_key!r}"
        )
