"""High-level entry points: index (or scan) a log and write one date to disk.

This module is the integration point used by the CLI and the MCP tools.
"""

from __future__ import annotations

import dataclasses
import logging

from .config import ExtractorConfig
from .extractor import extract, open_file_sink, scan_extract
from .index_cache import IndexCache
from .models import DateIndex, ExtractResult

logger = logging.getLogger(__name__)


async def get_index(config: ExtractorConfig, *, rebuild: bool = False) -> DateIndex:
    """Return the (possibly cached) date index for the configured log."""
    return await IndexCache(config).get_index(rebuild=rebuild)


async def extract_date(
    date_key: str,
    config: ExtractorConfig,
    *,
    use_index: bool = True,
    rebuild: bool = False,
) -> ExtractResult:
    """Write the lines of `date_key` to the configured output directory.

    No output file is created when the date has no lines to write.
    """
    if use_index:
        index = await get_index(config, rebuild=rebuild)
        if date_key not in index:
            logger.info("No logs found for %s.", date_key)
            return ExtractResult(date=date_key, found=False)

    config.output_dir.mkdir(parents=True, exist_ok=True)
    output_path = config.output_path_for(date_key)

    async with open_file_sink(output_path, encoding=config.encoding) as sink:
        if use_index:
            result = await extract(
                date_key,
                index,
                sink,
                source_path=config.source_path,
                encoding=config.encoding,
                policy=config.policy,
                queue_size=config.queue_size,
            )
        else:
            result = await scan_extract(
                date_key,
                sink,
                source_path=config.source_path,
                encoding=config.encoding,
                policy=config.policy,
                queue_size=config.queue_size,
            )
        wrote = sink.opened

    if not wrote:
        return result

    logger.info("Logs for %s extracted successfully to %s", date_key, output_path)
    return dataclasses.replace(result, output_path=output_path)
