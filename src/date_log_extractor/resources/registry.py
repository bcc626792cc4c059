"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from date_log_extractor.core.config import (
    CACHE_ENV,
    OUTPUT_DIR_ENV,
    POLICY_ENV,
    SOURCE_ENV,
    resolve_config,
)
from date_log_extractor.core.models import IndexArtifact
from date_log_extractor.core.service import get_index


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://date-log-extractor/help")
    def help_resource() -> str:
        """Return a short description of the tools and configuration."""
        cfg = resolve_config()
        return (
            "Tools:\n"
            "- extract_date(date, source_path?, cache_path?, output_dir?, policy?)\n"
            "- list_dates(source_path?, cache_path?)\n"
            "\nResources:\n"
            "- app://date-log-extractor/help\n"
            "- app://date-log-extractor/config\n"
            "- app://date-log-extractor/index\n"
            "- app://date-log-extractor/schemas/index-artifact\n"
            f"\nEnvironment: {SOURCE_ENV}, {CACHE_ENV}, {OUTPUT_DIR_ENV}, {POLICY_ENV}\n"
            f"Log file: {cfg.source_path}\n"
        )

    @mcp.resource("app://date-log-extractor/config")
    def config_resource() -> dict[str, Any]:
        """Return the effective configuration."""
        cfg = resolve_config()
        return {
            "source_path": str(cfg.source_path),
            "cache_path": str(cfg.cache_path),
            "output_dir": str(cfg.output_dir),
            "encoding": cfg.encoding,
            "policy": cfg.policy.value,
            "check_order": cfg.check_order,
            "validate_cache": cfg.validate_cache,
        }

    @mcp.resource("app://date-log-extractor/schemas/index-artifact")
    def index_artifact_schema() -> dict[str, Any]:
        """Return the JSON schema of the index cache file."""
        return IndexArtifact.model_json_schema()

    @mcp.resource("app://date-log-extractor/index")
    async def index_resource() -> dict[str, Any]:
        """Return the date index of the configured log (built if needed)."""
        index = await get_index(resolve_config())
        return {key: rng.model_dump() for key, rng in index.items()}
