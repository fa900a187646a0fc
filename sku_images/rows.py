"""Reading product rows from the delimited input file."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterator

from .config import DEFAULT_DELIMITER
from .errors import InputFormatError
from .models import ProductRow

logger = logging.getLogger("sku_images")

REQUIRED_COLUMNS = ("sku", "image_url")


def read_rows(path: Path, delimiter: str = DEFAULT_DELIMITER) -> Iterator[ProductRow]:
    """Yield rows lazily in file order; raise if the header lacks required columns."""
    with open(path, newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle, delimiter=delimiter)
        fieldnames = [name.strip() for name in (reader.fieldnames or [])]
        missing = [column for column in REQUIRED_COLUMNS if column not in fieldnames]
        if missing:
            raise InputFormatError(
                f"{path} is missing required column(s): {', '.join(missing)}"
            )
        reader.fieldnames = fieldnames
        for line_number, record in enumerate(reader, start=2):
            sku = (record.get("sku") or "").strip()
            image_url = (record.get("image_url") or "").strip()
            if not sku:
                logger.debug("Row %d has an empty SKU", line_number)
            yield ProductRow(sku=sku, image_url=image_url)
