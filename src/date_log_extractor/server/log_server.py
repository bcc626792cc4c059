"""MCP server entrypoint (stdio transport).

Exposes date extraction and the date index as MCP tools, plus a few
read-only resources describing the configuration.

Run locally (stdio):
    python -m date_log_extractor.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP

from date_log_extractor.resources.registry import register_resources
from date_log_extractor.tools.extract import extract_date_impl, list_dates_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("LOG_EXTRACT_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("date-log-extractor", json_response=True)

register_resources(mcp)


@mcp.tool()
async def extract_date(
    date: str,
    source_path: str | None = None,
    cache_path: str | None = None,
    output_dir: str | None = None,
    policy: str | None = None,
    rebuild: bool = False,
) -> dict[str, Any]:
    """Write every log line of one date to <output_dir>/output_<date>.txt.

    Parameters
    ----------
    date:
        Target date, YYYY-MM-DD.
    source_path/cache_path/output_dir:
        Override the configured log file, index cache file and output directory.
    policy:
        "pass-through" keeps lines that do not match the log format, "drop" skips them.
    rebuild:
        Rebuild the date index even if a valid cache exists.

    Returns
    -------
    dict:
        {"date", "found", "output_path", "lines_written", "range", ...}
    """
    return await extract_date_impl(
        date=date,
        source_path=source_path,
        cache_path=cache_path,
        output_dir=output_dir,
        policy=policy,
        rebuild=rebuild,
    )


@mcp.tool()
async def list_dates(
    source_path: str | None = None,
    cache_path: str | None = None,
) -> dict[str, Any]:
    """Return the indexed dates and their byte ranges: {"count", "dates"}."""
    return await list_dates_impl(source_path=source_path, cache_path=cache_path)


def main() -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
