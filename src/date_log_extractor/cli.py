from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import os
import re
import sys
from collections.abc import Sequence
from pathlib import Path

from date_log_extractor.core.config import ExtractorConfig, resolve_config
from date_log_extractor.core.errors import DataOrderError
from date_log_extractor.core.service import extract_date
from date_log_extractor.core.transform import TransformPolicy

LOGGER = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

EXIT_IO_ERROR = 1
EXIT_ORDER_ERROR = 3


def _configure_logging() -> None:
    level_name = os.getenv("LOG_EXTRACT_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_date(s: str) -> str:
    if not _DATE_RE.match(s):
        raise argparse.ArgumentTypeError("date must look like YYYY-MM-DD (e.g., 2024-12-01)")
    return s


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="date-log-extractor",
        description="Extract all log lines of one date from a date-sorted log file.",
    )
    p.add_argument("date", type=_parse_date, help="Target date, YYYY-MM-DD")
    p.add_argument("--source", type=Path, default=None, help="Log file to read")
    p.add_argument("--cache", type=Path, default=None, help="Index cache file (JSON)")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for output_<date>.txt")
    p.add_argument(
        "--policy",
        choices=[pol.value for pol in TransformPolicy],
        default=None,
        help="Lines that do not match the log format: keep them as-is or drop them",
    )
    p.add_argument("--no-order-check", action="store_true", help="Do not fail on unsorted dates")
    p.add_argument(
        "--no-cache-check",
        action="store_true",
        help="Trust a cached index without comparing it to the log file",
    )
    p.add_argument("--rebuild", action="store_true", help="Rebuild the index even if cached")
    p.add_argument("--no-index", action="store_true", help="Scan the whole file instead")
    return p


def _config_from_args(args: argparse.Namespace) -> ExtractorConfig:
    cfg = resolve_config()
    changes: dict[str, object] = {}
    if args.source is not None:
        changes["source_path"] = args.source
    if args.cache is not None:
        changes["cache_path"] = args.cache
    if args.output_dir is not None:
        changes["output_dir"] = args.output_dir
    if args.policy is not None:
        changes["policy"] = TransformPolicy(args.policy)
    if args.no_order_check:
        changes["check_order"] = False
    if args.no_cache_check:
        changes["validate_cache"] = False
    return dataclasses.replace(cfg, **changes)


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    _configure_logging()

    try:
        cfg = _config_from_args(args)
        result = asyncio.run(
            extract_date(
                args.date,
                cfg,
                use_index=not args.no_index,
                rebuild=args.rebuild,
            )
        )
    except DataOrderError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(EXIT_ORDER_ERROR)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)
    except OSError as e:
        print(f"Error during log extraction: {e}", file=sys.stderr)
        raise SystemExit(EXIT_IO_ERROR)

    LOGGER.debug("Result: %s", result)


if __name__ == "__main__":
    main()
