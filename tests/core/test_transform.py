from __future__ import annotations

import pytest

from date_log_extractor.core.transform import transform_line


def test_transform_line_readable_format() -> None:
    line = "2024-12-02T02:23:37.0000 - DEBUG - Cache cleared successfully."
    assert transform_line(line) == "2024-12-02 02:23:37 DEBUG Cache cleared successfully."


def test_transform_line_fraction_of_any_length() -> None:
    assert transform_line("2024-12-03T10:00:00.5 - CRITICAL - down") == (
        "2024-12-03 10:00:00 CRITICAL down"
    )


def test_transform_line_tolerates_spacing_around_dashes() -> None:
    assert transform_line("2024-01-01T00:00:00.1-INFO-  padded") == (
        "2024-01-01 00:00:00 INFO padded"
    )


def test_transform_line_keeps_dashes_in_message() -> None:
    line = "2024-01-01T00:00:00.0 - WARN - retry - attempt 2 - of 3"
    assert transform_line(line) == "2024-01-01 00:00:00 WARN retry - attempt 2 - of 3"


@pytest.mark.parametrize(
    "line",
    [
        "",
        "2024-01-01 garbage",
        "2024-01-01T00:00:00 - INFO - no fraction",
        "2024-01-01T00:00:00.0000 - info - lowercase level",
        "   at com.example.Foo(Foo.java:42)",
    ],
)
def test_transform_line_no_match(line: str) -> None:
    assert transform_line(line) is None
