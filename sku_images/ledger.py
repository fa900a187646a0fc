"""Accumulation and export of per-row download failures."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List

from .config import DEFAULT_DELIMITER
from .models import ErrorRecord

logger = logging.getLogger("sku_images")

LEDGER_HEADER = ("sku", "image_url", "error_message")


class ErrorLedger:
    """Append-only list of failures, written to a delimited file at the end of a run.

    Values are joined with the delimiter as-is. A SKU, URL or message that
    contains the delimiter or a line break shifts the columns of its line;
    such records are reported with a warning when they are written.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        self.delimiter = delimiter
        self._records: List[ErrorRecord] = []

    def record(self, record: ErrorRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> List[ErrorRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ErrorRecord]:
        return iter(self._records)

    def _format_line(self, record: ErrorRecord) -> str:
        values = (record.sku, record.image_url, record.error)
        if any(self.delimiter in value or "\n" in value or "\r" in value for value in values):
            logger.warning(
                "Error log entry for SKU %s contains '%s' or a line break and is written unescaped",
                record.sku,
                self.delimiter,
            )
        return self.delimiter.join(values)

    def render(self) -> str:
        lines = [self.delimiter.join(LEDGER_HEADER)]
        lines.extend(self._format_line(record) for record in self._records)
        return "\n".join(lines)

    def flush(self, path: Path) -> bool:
        """Overwrite ``path`` with all records; do nothing when the ledger is empty."""
        if not self._records:
            return False
        Path(path).write_text(self.render(), encoding="utf-8")
        logger.info("Wrote %d failed row(s) to %s", len(self._records), path)
        return True
