"""Persistent cache for the date index.

The artifact is loaded when it parses and matches the current log file;
otherwise the log is rescanned and the artifact replaced as a whole.
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

import aiofiles
from pydantic import ValidationError

from .config import ExtractorConfig
from .models import ARTIFACT_VERSION, DateIndex, IndexArtifact, SourceFingerprint
from .scanning import build_index

logger = logging.getLogger(__name__)


class IndexCache:
    """Load, validate, rebuild and persist the date index for one log file."""

    def __init__(self, config: ExtractorConfig) -> None:
        self.config = config

    @property
    def cache_path(self) -> Path:
        return Path(self.config.cache_path)

    async def load(self) -> IndexArtifact | None:
        """Return the stored artifact, or None if missing or unreadable."""
        path = self.cache_path
        if not path.is_file():
            return None
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                data = await f.read()
            return IndexArtifact.model_validate_json(data)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            logger.warning("Index cache %s is unreadable; rebuilding: %s", path, exc)
            return None

    async def save(self, artifact: IndexArtifact) -> bool:
        """Write the artifact atomically. Returns False when the write failed."""
        path = self.cache_path
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp, mode="w", encoding="utf-8") as f:
                await f.write(artifact.model_dump_json(indent=2) + "\n")
            os.replace(tmp, path)
        except OSError as exc:
            logger.error("Could not write index cache %s: %s", path, exc)
            with contextlib.suppress(OSError):
                tmp.unlink()
            return False
        return True

    def is_current(self, artifact: IndexArtifact, fingerprint: SourceFingerprint) -> bool:
        if artifact.version != ARTIFACT_VERSION:
            return False
        if not self.config.validate_cache:
            return True
        return artifact.source == fingerprint

    async def get_index(self, *, rebuild: bool = False) -> DateIndex:
        """Return the date index, reusing the cached artifact when valid."""
        source = Path(self.config.source_path)
        if not source.is_file():
            raise FileNotFoundError(f"Log file not found: {source}")
        fingerprint = SourceFingerprint.from_path(source)

        if not rebuild:
            artifact = await self.load()
            if artifact is not None:
                if self.is_current(artifact, fingerprint):
                    logger.debug("Using cached index %s", self.cache_path)
                    return dict(artifact.dates)
                logger.info("Index cache %s is stale; rebuilding", self.cache_path)

        logger.info("Building index for %s (this may take a while)...", source)
        index = await build_index(
            source,
            encoding=self.config.encoding,
            check_order=self.config.check_order,
        )

        artifact = IndexArtifact(source=fingerprint, dates=index)
        if await self.save(artifact):
            logger.info("Index built and cached to %s (%d dates)", self.cache_path, len(index))
        return index
