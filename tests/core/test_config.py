from __future__ import annotations

from pathlib import Path

import pytest

from date_log_extractor.core.config import ExtractorConfig, resolve_config
from date_log_extractor.core.transform import TransformPolicy


def test_defaults_follow_original_layout() -> None:
    cfg = ExtractorConfig()
    assert cfg.source_path == Path("logs_2024.log")
    assert cfg.cache_path == Path("log_index.json")
    assert cfg.output_path_for("2024-12-01") == Path("output") / "output_2024-12-01.txt"
    assert cfg.policy == TransformPolicy.PASS_THROUGH
    assert cfg.check_order and cfg.validate_cache


def test_resolve_config_without_env_returns_same(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LOG_EXTRACT_SOURCE",
        "LOG_EXTRACT_CACHE",
        "LOG_EXTRACT_OUTPUT_DIR",
        "LOG_EXTRACT_POLICY",
        "LOG_EXTRACT_QUEUE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    cfg = ExtractorConfig()
    assert resolve_config(cfg) is cfg


def test_resolve_config_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LOG_EXTRACT_SOURCE", str(tmp_path / "app.log"))
    monkeypatch.setenv("LOG_EXTRACT_CACHE", str(tmp_path / "idx.json"))
    monkeypatch.setenv("LOG_EXTRACT_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("LOG_EXTRACT_POLICY", "DROP")
    monkeypatch.setenv("LOG_EXTRACT_QUEUE_SIZE", "8")

    cfg = resolve_config()

    assert cfg.source_path == tmp_path / "app.log"
    assert cfg.cache_path == tmp_path / "idx.json"
    assert cfg.output_dir == tmp_path / "out"
    assert cfg.policy == TransformPolicy.DROP
    assert cfg.queue_size == 8


@pytest.mark.parametrize(
    ("name", "value", "match"),
    [
        ("LOG_EXTRACT_QUEUE_SIZE", "many", "integer"),
        ("LOG_EXTRACT_QUEUE_SIZE", "0", ">= 1"),
        ("LOG_EXTRACT_POLICY", "shred", "must be one of"),
    ],
)
def test_resolve_config_invalid_env(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str, match: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=match):
        resolve_config()


def test_queue_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ExtractorConfig(queue_size=0)
