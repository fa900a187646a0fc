"""High-level orchestration for downloading, normalizing and storing images."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Iterable, List, Optional

import requests

from .config import DownloadConfig
from .errors import StorageError, TranscodeError
from .fetcher import fetch_image
from .images import normalize_image
from .ledger import ErrorLedger
from .models import ErrorRecord, FetchFailure, ProductRow, RunSummary
from .storage import allocate_path, write_image

logger = logging.getLogger("sku_images")

COMPLETION_MESSAGE = "Image download finished"


def _record_failure(
    ledger: ErrorLedger,
    row: ProductRow,
    message: str,
    stage: str,
) -> None:
    logger.error(message)
    ledger.record(
        ErrorRecord(sku=row.sku, image_url=row.image_url, error=message, stage=stage)
    )


async def process_row(
    row: ProductRow,
    config: DownloadConfig,
    session: requests.Session,
    ledger: ErrorLedger,
    summary: RunSummary,
) -> None:
    """Fetch, normalize and write the image for a single row.

    Any failure is recorded in ``ledger`` and the row ends there; nothing
    row-specific is raised to the caller.
    """
    if config.delay_seconds:
        await asyncio.sleep(config.delay_seconds)

    outcome = await asyncio.to_thread(
        fetch_image, row, session, config.request_timeout
    )
    if isinstance(outcome, FetchFailure):
        _record_failure(ledger, row, outcome.reason, "fetch")
        return

    try:
        image = await asyncio.to_thread(normalize_image, outcome.data)
    except TranscodeError as exc:
        _record_failure(
            ledger,
            row,
            f"Failed to convert image for SKU {row.sku}: {exc}",
            "transcode",
        )
        return

    # Allocation and write stay in one event-loop step so rows sharing the
    # directory cannot claim the same name.
    try:
        destination = allocate_path(config.output_dir, row.sku, image.extension)
        write_image(destination, image.data)
    except StorageError as exc:
        _record_failure(
            ledger,
            row,
            f"Failed to save image for SKU {row.sku}: {exc}",
            "write",
        )
        return

    summary.written.append(destination)
    if image.transcoded:
        summary.transcoded += 1
        logger.info("Downloaded and converted to JPG: %s", destination)
    else:
        logger.info("Downloaded image: %s", destination)


async def run_pipeline(
    rows: Iterable[ProductRow],
    config: DownloadConfig,
    session: Optional[requests.Session] = None,
    ledger: Optional[ErrorLedger] = None,
) -> RunSummary:
    """Process rows in source order, at most ``max_parallel_downloads`` at a time.

    Rows are admitted in batches; each batch is drained completely before the
    next row is read. The error ledger is flushed once, after the last batch.
    """
    ledger = ledger if ledger is not None else ErrorLedger(config.delimiter)
    summary = RunSummary()
    start = time.perf_counter()
    owns_session = session is None
    http = session or requests.Session()

    try:
        in_flight: List[asyncio.Task] = []
        for row in rows:
            summary.rows += 1
            in_flight.append(
                asyncio.create_task(process_row(row, config, http, ledger, summary))
            )
            if len(in_flight) >= config.max_parallel_downloads:
                await asyncio.gather(*in_flight)
                in_flight.clear()
        if in_flight:
            await asyncio.gather(*in_flight)
    finally:
        if owns_session:
            http.close()

    summary.failures = len(ledger)
    summary.error_log_written = ledger.flush(config.error_log_path)
    summary.elapsed_seconds = time.perf_counter() - start
    logger.info(COMPLETION_MESSAGE)
    return summary
