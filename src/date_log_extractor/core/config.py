"""Extractor configuration and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from .transform import TransformPolicy

SOURCE_ENV = "LOG_EXTRACT_SOURCE"
CACHE_ENV = "LOG_EXTRACT_CACHE"
OUTPUT_DIR_ENV = "LOG_EXTRACT_OUTPUT_DIR"
POLICY_ENV = "LOG_EXTRACT_POLICY"
QUEUE_SIZE_ENV = "LOG_EXTRACT_QUEUE_SIZE"


@dataclass(frozen=True, slots=True)
class ExtractorConfig:
    source_path: Path = Path("logs_2024.log")
    cache_path: Path = Path("log_index.json")
    output_dir: Path = Path("output")
    encoding: str = "utf-8"
    policy: TransformPolicy = TransformPolicy.PASS_THROUGH

    # Fail with DataOrderError when dates are not ascending.
    check_order: bool = True
    # Compare the cached fingerprint with the log file before trusting it.
    validate_cache: bool = True

    # Lines the reader may run ahead of the sink.
    queue_size: int = 1

    def __post_init__(self) -> None:
        if self.queue_size < 1:
            raise ValueError("queue_size must be >= 1")

    def output_path_for(self, date_key: str) -> Path:
        """Return the per-query output file for a date."""
        return self.output_dir / f"output_{date_key}.txt"


def _parse_policy(value: str) -> TransformPolicy:
    try:
        return TransformPolicy(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(p.value for p in TransformPolicy)
        raise ValueError(f"{POLICY_ENV} must be one of: {allowed}") from exc


def resolve_config(cfg: ExtractorConfig | None = None) -> ExtractorConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = ExtractorConfig()

    changes: dict[str, object] = {}
    if source := os.getenv(SOURCE_ENV):
        changes["source_path"] = Path(source)
    if cache := os.getenv(CACHE_ENV):
        changes["cache_path"] = Path(cache)
    if output_dir := os.getenv(OUTPUT_DIR_ENV):
        changes["output_dir"] = Path(output_dir)
    if policy := os.getenv(POLICY_ENV):
        changes["policy"] = _parse_policy(policy)

    env = os.getenv(QUEUE_SIZE_ENV)
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ValueError(f"{QUEUE_SIZE_ENV} must be an integer") from exc
        if value < 1:
            raise ValueError(f"{QUEUE_SIZE_ENV} must be >= 1")
        changes["queue_size"] = value

    if not changes:
        return cfg
    return replace(cfg, **changes)
