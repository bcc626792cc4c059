"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import dataclasses
import re
from pathlib import Path
from typing import Any

from date_log_extractor.core.config import ExtractorConfig, resolve_config
from date_log_extractor.core.models import ExtractResult
from date_log_extractor.core.service import extract_date, get_index
from date_log_extractor.core.transform import TransformPolicy

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_policy(policy: str | None) -> TransformPolicy | None:
    """Parse a user-supplied policy name."""
    if not policy:
        return None
    try:
        return TransformPolicy(policy.strip().lower())
    except ValueError as e:
        valid = ", ".join(p.value for p in TransformPolicy)
        raise ValueError(f"Unknown policy '{policy}'. Valid values: {valid}.") from e


def build_config(
    *,
    source_path: str | None = None,
    cache_path: str | None = None,
    output_dir: str | None = None,
    policy: str | None = None,
) -> ExtractorConfig:
    """Environment-resolved config with explicit tool arguments on top."""
    cfg = resolve_config()
    changes: dict[str, Any] = {}
    if source_path:
        changes["source_path"] = Path(source_path)
    if cache_path:
        changes["cache_path"] = Path(cache_path)
    if output_dir:
        changes["output_dir"] = Path(output_dir)
    parsed = _parse_policy(policy)
    if parsed is not None:
        changes["policy"] = parsed
    return dataclasses.replace(cfg, **changes) if changes else cfg


def _result_to_dict(result: ExtractResult) -> dict[str, Any]:
    """Convert an ExtractResult into a JSON-serializable dict."""
    d: dict[str, Any] = {
        "date": result.date,
        "found": result.found,
        "output_path": str(result.output_path) if result.output_path is not None else None,
        "lines_written": result.lines_written,
    }
    if result.found:
        d["range"] = result.range.model_dump() if result.range is not None else None
        d["lines_read"] = result.lines_read
        d["lines_transformed"] = result.lines_transformed
        d["lines_passed_through"] = result.lines_passed_through
        d["lines_dropped"] = result.lines_dropped
    return d


async def extract_date_impl(
    *,
    date: str,
    source_path: str | None = None,
    cache_path: str | None = None,
    output_dir: str | None = None,
    policy: str | None = None,
    rebuild: bool = False,
) -> dict[str, Any]:
    """Implementation for the `extract_date` MCP tool."""
    if not _DATE_RE.match(date):
        raise ValueError("date must look like YYYY-MM-DD (e.g., 2024-12-01)")

    cfg = build_config(
        source_path=source_path,
        cache_path=cache_path,
        output_dir=output_dir,
        policy=policy,
    )
    result = await extract_date(date, cfg, rebuild=rebuild)
    return _result_to_dict(result)


async def list_dates_impl(
    *,
    source_path: str | None = None,
    cache_path: str | None = None,
) -> dict[str, Any]:
    """Implementation for the `list_dates` MCP tool."""
    cfg = build_config(source_path=source_path, cache_path=cache_path)
    index = await get_index(cfg)
    return {
        "count": len(index),
        "dates": {key: rng.model_dump() for key, rng in index.items()},
    }
