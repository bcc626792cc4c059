from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from date_log_extractor.core.config import ExtractorConfig

SCENARIO_LINES = [
    "2024-01-01T00:00:00.0000 - INFO - a",
    "2024-01-01T00:00:01.0000 - WARN - b",
    "2024-01-02T00:00:00.0000 - ERROR - c",
]

MULTI_DAY_LINES = [
    "2024-12-01T00:00:01.0000 - INFO - service started",
    "2024-12-01T08:15:42.1234 - DEBUG - cache warmed: 1200 keys",
    "2024-12-01T23:59:59.9999 - WARN - slow response route=/api/items",
    "2024-12-02T02:23:37.0000 - DEBUG - Cache cleared successfully.",
    "2024-12-02T03:00:00.0000 - ERROR - upstream timeout",
    "2024-12-03T10:00:00.5 - CRITICAL - database unavailable",
    "2024-12-03T10:00:01.0000 - INFO - résumé upload: 東京 ✓",
    "2024-12-05T00:00:00.0000 - INFO - quiet days in between",
]


class MemorySink:
    """Collects written lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    async def write_line(self, line: str) -> None:
        self.lines.append(line)


@pytest.fixture
def write_lines() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        path.write_bytes("".join(line + "\n" for line in lines).encode("utf-8"))

    return _write


@pytest.fixture
def scenario_log(tmp_path: Path, write_lines) -> Path:
    path = tmp_path / "scenario.log"
    write_lines(path, SCENARIO_LINES)
    return path


@pytest.fixture
def multi_day_log(tmp_path: Path, write_lines) -> Path:
    path = tmp_path / "logs_2024.log"
    write_lines(path, MULTI_DAY_LINES)
    return path


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., ExtractorConfig]:
    def _make(source: Path, **kwargs) -> ExtractorConfig:
        return ExtractorConfig(
            source_path=source,
            cache_path=tmp_path / "index" / "log_index.json",
            output_dir=tmp_path / "output",
            **kwargs,
        )

    return _make


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def scenario_lines() -> list[str]:
    return list(SCENARIO_LINES)


@pytest.fixture
def multi_day_lines() -> list[str]:
    return list(MULTI_DAY_LINES)
