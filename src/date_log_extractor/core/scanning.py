"""Single-pass scanner that maps each date to its byte range in the log."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import aiofiles

from .errors import DataOrderError
from .models import DateIndex, OffsetRange

logger = logging.getLogger(__name__)

DATE_KEY_LEN = 10
_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def date_key_of(raw: bytes, *, encoding: str = "utf-8") -> str:
    """Return the leading YYYY-MM-DD token of a raw line, or '' if it has none."""
    token = raw.decode(encoding, errors="replace")[:DATE_KEY_LEN]
    return token if _DATE_KEY_RE.match(token) else ""


async def build_index(
    source_path: str | Path,
    *,
    encoding: str = "utf-8",
    check_order: bool = True,
) -> DateIndex:
    """Scan the log once and return date -> inclusive byte range.

    Offsets count raw bytes, terminators included, so ranges stay exact for
    multi-byte text and CRLF files. Lines without a date prefix (blank
    lines, traceback continuations) stay in the open block.

    With check_order, a date lower than the previous one (or one whose block
    was already closed) raises DataOrderError. Without it, a date that shows
    up again replaces its earlier range.
    """
    path = Path(source_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    index: DateIndex = {}
    current_key: str | None = None
    block_start = 0
    offset = 0

    async with aiofiles.open(path, mode="rb") as f:
        async for raw in f:
            key = date_key_of(raw, encoding=encoding)

            if key and key != current_key:
                if current_key is not None:
                    if check_order and (key < current_key or key in index):
                        raise DataOrderError(key, current_key, offset)
                    index[current_key] = OffsetRange(start=block_start, end=offset - 1)
                    block_start = offset
                current_key = key

            offset += len(raw)

    if current_key is not None:
        index[current_key] = OffsetRange(start=block_start, end=offset - 1)

    logger.debug("Indexed %s: %d dates over %d bytes", path, len(index), offset)
    return index
