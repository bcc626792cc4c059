"""Range extraction: bounded read -> transform -> sink.

Lines flow through a bounded queue with a single consumer, so output order
matches file order and the reader never runs far ahead of a slow sink.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import aclosing, asynccontextmanager
from pathlib import Path
from typing import Protocol

import aiofiles

from .models import DateIndex, ExtractResult, OffsetRange
from .transform import TransformPolicy, transform_line

logger = logging.getLogger(__name__)


class LineSink(Protocol):
    """Destination for extracted lines (terminator added by the sink)."""

    async def write_line(self, line: str) -> None:
        ...


class FileSink:
    """Write newline-terminated lines to a text file.

    The file is created on the first write, so a query that writes nothing
    leaves no output file behind.
    """

    def __init__(self, path: str | Path, *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding
        self._f = None

    async def write_line(self, line: str) -> None:
        if self._f is None:
            self._f = await aiofiles.open(
                self.path, mode="w", encoding=self.encoding, newline="\n"
            )
        await self._f.write(line + "\n")

    @property
    def opened(self) -> bool:
        return self._f is not None

    async def aclose(self) -> None:
        if self._f is not None:
            await self._f.close()


@asynccontextmanager
async def open_file_sink(path: str | Path, *, encoding: str = "utf-8"):
    """Yield a FileSink for `path` and close it on exit."""
    sink = FileSink(path, encoding=encoding)
    try:
        yield sink
    finally:
        await sink.aclose()


async def read_range_lines(
    source_path: str | Path,
    start: int,
    end: int,
) -> AsyncIterator[bytes]:
    """Yield raw lines from bytes [start, end] of a file, both inclusive.

    The last line is cut at `end` if the range stops mid-line. An empty or
    out-of-file range yields nothing.
    """
    if start < 0 or start > end:
        return
    remaining = end - start + 1
    async with aiofiles.open(source_path, mode="rb") as f:
        await f.seek(start)
        while remaining > 0:
            raw = await f.readline(remaining)
            if not raw:
                break
            remaining -= len(raw)
            yield raw


async def _run_pipeline(
    lines: AsyncIterator[bytes],
    *,
    queue_size: int,
    consume: Callable[[bytes], Awaitable[None]],
) -> None:
    """Pump lines through a bounded queue into a single consumer."""
    if queue_size < 1:
        raise ValueError("queue_size must be >= 1")

    queue: asyncio.Queue[object] = asyncio.Queue(maxsize=queue_size)
    done_sentinel = object()
    errors: list[Exception] = []

    async def reader() -> None:
        try:
            async with aclosing(lines) as it:
                async for raw in it:
                    await queue.put(raw)
        except Exception as exc:
            errors.append(exc)
        await queue.put(done_sentinel)

    reader_task = asyncio.create_task(reader())
    try:
        while True:
            item = await queue.get()
            if item is done_sentinel:
                break
            await consume(item)

        if errors:
            raise errors[0]
    finally:
        reader_task.cancel()
        await asyncio.gather(reader_task, return_exceptions=True)


class _LineWriter:
    """Transform decoded lines, apply the policy and count outcomes."""

    def __init__(self, sink: LineSink, *, encoding: str, policy: TransformPolicy) -> None:
        self.sink = sink
        self.encoding = encoding
        self.policy = policy
        self.read = 0
        self.written = 0
        self.transformed = 0
        self.passed_through = 0
        self.dropped = 0

    async def __call__(self, raw: bytes) -> None:
        self.read += 1
        line = raw.decode(self.encoding, errors="replace").rstrip("\r\n")
        out = transform_line(line)
        if out is not None:
            self.transformed += 1
        elif self.policy == TransformPolicy.PASS_THROUGH:
            self.passed_through += 1
            out = line
        else:
            self.dropped += 1
            return
        await self.sink.write_line(out)
        self.written += 1

    def result(self, date_key: str, rng: OffsetRange | None) -> ExtractResult:
        return ExtractResult(
            date=date_key,
            found=True,
            range=rng,
            lines_read=self.read,
            lines_written=self.written,
            lines_transformed=self.transformed,
            lines_passed_through=self.passed_through,
            lines_dropped=self.dropped,
        )


async def extract(
    date_key: str,
    index: DateIndex,
    sink: LineSink,
    *,
    source_path: str | Path,
    encoding: str = "utf-8",
    policy: TransformPolicy = TransformPolicy.PASS_THROUGH,
    queue_size: int = 1,
) -> ExtractResult:
    """Write the lines of one date to the sink using its indexed byte range."""
    rng = index.get(date_key)
    if rng is None:
        logger.info("No logs found for %s.", date_key)
        return ExtractResult(date=date_key, found=False)

    logger.info("Extracting logs for %s (bytes %d to %d)...", date_key, rng.start, rng.end)
    writer = _LineWriter(sink, encoding=encoding, policy=policy)
    await _run_pipeline(
        read_range_lines(source_path, rng.start, rng.end),
        queue_size=queue_size,
        consume=writer,
    )
    return writer.result(date_key, rng)


async def _iter_date_lines(
    source_path: Path,
    date_key: str,
    *,
    encoding: str,
) -> AsyncIterator[bytes]:
    async with aiofiles.open(source_path, mode="rb") as f:
        async for raw in f:
            if raw.decode(encoding, errors="replace").startswith(date_key):
                yield raw


async def scan_extract(
    date_key: str,
    sink: LineSink,
    *,
    source_path: str | Path,
    encoding: str = "utf-8",
    policy: TransformPolicy = TransformPolicy.PASS_THROUGH,
    queue_size: int = 1,
) -> ExtractResult:
    """Full-file scan for one date; no index or cache involved."""
    path = Path(source_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    logger.info("Scanning %s for %s...", path, date_key)
    writer = _LineWriter(sink, encoding=encoding, policy=policy)
    await _run_pipeline(
        _iter_date_lines(path, date_key, encoding=encoding),
        queue_size=queue_size,
        consume=writer,
    )
    if writer.read == 0:
        logger.info("No logs found for %s.", date_key)
        return ExtractResult(date=date_key, found=False)
    return writer.result(date_key, None)
