"""Core data models for the date index and its cache artifact."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

ARTIFACT_VERSION = 1


class OffsetRange(BaseModel):
    """Inclusive byte span [start, end] holding every line of one date."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0, description="First byte of the block (inclusive).")
    end: int = Field(ge=0, description="Last byte of the block (inclusive).")


# Date key (YYYY-MM-DD) -> byte range, in file order.
DateIndex = dict[str, OffsetRange]


class SourceFingerprint(BaseModel):
    """Validity token for the log file an index was built from."""

    model_config = ConfigDict(frozen=True)

    size: int = Field(ge=0)
    mtime_ns: int

    @classmethod
    def from_path(cls, path: str | Path) -> SourceFingerprint:
        st = os.stat(path)
        return cls(size=st.st_size, mtime_ns=st.st_mtime_ns)


class IndexArtifact(BaseModel):
    """Serialized form of a DateIndex, as stored on disk."""

    version: int = ARTIFACT_VERSION
    source: SourceFingerprint
    dates: dict[str, OffsetRange] = Field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ExtractResult:
    """Outcome of one date extraction."""

    date: str
    found: bool
    range: OffsetRange | None = None
    lines_read: int = 0
    lines_written: int = 0
    lines_transformed: int = 0
    lines_passed_through: int = 0
    lines_dropped: int = 0
    output_path: Path | None = None
