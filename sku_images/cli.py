"""Command-line entry point for the product image downloader."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import (
    DEFAULT_DELIMITER,
    DEFAULT_ERROR_LOG,
    DEFAULT_IMAGES_ROOT,
    DownloadConfig,
)
from .errors import InputFormatError
from .pipeline import run_pipeline
from .rows import read_rows
from .utils import batch_name_from_path

logger = logging.getLogger("sku_images.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Download the product images listed in a delimited CSV file, "
            "naming them <sku>_<n>.<ext> and logging failures to a separate CSV."
        ),
    )
    parser.add_argument(
        "input",
        type=Path,
        help="CSV file with 'sku' and 'image_url' columns",
    )
    parser.add_argument(
        "--batch",
        default=None,
        help="Sub-folder of the images root to write into (default: derived from the input file name)",
    )
    parser.add_argument(
        "--images-root",
        default=DEFAULT_IMAGES_ROOT,
        type=Path,
        help="Directory holding one sub-folder per batch",
    )
    parser.add_argument(
        "--output",
        default=None,
        type=Path,
        help="Write images to this directory instead of <images-root>/<batch>",
    )
    parser.add_argument(
        "--error-log",
        default=DEFAULT_ERROR_LOG,
        type=Path,
        help="Where to write failed rows (only created when something failed)",
    )
    parser.add_argument(
        "--max-parallel",
        type=int,
        default=1,
        help="Number of downloads admitted per batch",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Seconds to wait before each download",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: no timeout)",
    )
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help="Field delimiter of the input and error CSV files",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def _resolve_output_dir(args: argparse.Namespace) -> Path:
    if args.output is not None:
        return args.output
    batch = args.batch or batch_name_from_path(args.input)
    return args.images_root / batch


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        config = DownloadConfig(
            output_dir=_resolve_output_dir(args),
            error_log_path=args.error_log,
            max_parallel_downloads=args.max_parallel,
            delay_seconds=args.delay,
            request_timeout=args.timeout,
            delimiter=args.delimiter,
        )
    except ValueError as exc:
        logger.error("Invalid settings: %s", exc)
        sys.exit(2)

    if not config.output_dir.is_dir():
        logger.warning(
            "Output directory %s does not exist; every image write will fail",
            config.output_dir,
        )

    try:
        rows = read_rows(args.input, delimiter=config.delimiter)
        summary = asyncio.run(run_pipeline(rows, config))
    except (InputFormatError, OSError) as exc:
        logger.error("Run aborted: %s", exc)
        sys.exit(1)
    except Exception:  # pylint: disable=broad-except
        logger.exception("An error occurred during the run")
        sys.exit(1)

    logger.info(
        "Finished in %.2fs (%d rows, %d written, %d converted, %d failed)",
        summary.elapsed_seconds,
        summary.rows,
        len(summary.written),
        summary.transcoded,
        summary.failures,
    )


if __name__ == "__main__":
    main()
