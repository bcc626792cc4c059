from __future__ import annotations

from pathlib import Path

import pytest

from date_log_extractor.tools.extract import build_config, extract_date_impl, list_dates_impl


@pytest.mark.asyncio
async def test_extract_date_impl_returns_summary(scenario_log: Path, tmp_path: Path) -> None:
    out = await extract_date_impl(
        date="2024-01-01",
        source_path=str(scenario_log),
        cache_path=str(tmp_path / "idx.json"),
        output_dir=str(tmp_path / "out"),
    )

    assert out["found"] is True
    assert out["range"] == {"start": 0, "end": 71}
    assert out["lines_written"] == 2
    assert out["output_path"] == str(tmp_path / "out" / "output_2024-01-01.txt")


@pytest.mark.asyncio
async def test_extract_date_impl_not_found(scenario_log: Path, tmp_path: Path) -> None:
    out = await extract_date_impl(
        date="1999-01-01",
        source_path=str(scenario_log),
        cache_path=str(tmp_path / "idx.json"),
        output_dir=str(tmp_path / "out"),
    )
    assert out == {
        "date": "1999-01-01",
        "found": False,
        "output_path": None,
        "lines_written": 0,
    }


@pytest.mark.asyncio
async def test_extract_date_impl_rejects_bad_date(scenario_log: Path) -> None:
    with pytest.raises(ValueError, match="YYYY-MM-DD"):
        await extract_date_impl(date="2024/01/01", source_path=str(scenario_log))


@pytest.mark.asyncio
async def test_list_dates_impl(scenario_log: Path, tmp_path: Path) -> None:
    out = await list_dates_impl(
        source_path=str(scenario_log), cache_path=str(tmp_path / "idx.json")
    )
    assert out == {
        "count": 2,
        "dates": {
            "2024-01-01": {"start": 0, "end": 71},
            "2024-01-02": {"start": 72, "end": 108},
        },
    }


def test_build_config_unknown_policy() -> None:
    with pytest.raises(ValueError, match="Unknown policy"):
        build_config(policy="explode")
