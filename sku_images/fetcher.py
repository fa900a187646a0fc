"""HTTP retrieval of product images."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .models import FetchFailure, FetchOutcome, FetchSuccess, ProductRow

logger = logging.getLogger("sku_images")


def _failure(row: ProductRow, detail: str) -> FetchFailure:
    return FetchFailure(
        sku=row.sku,
        image_url=row.image_url,
        reason=f"Failed to download image for SKU {row.sku}: {detail}",
    )


def fetch_image(
    row: ProductRow,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> FetchOutcome:
    """Download the row's image in a single attempt without raising.

    Non-2xx responses and transport errors are both reported as
    ``FetchFailure``; the reason embeds the status text or exception message.
    """
    if session is None:
        with requests.Session() as owned:
            return fetch_image(row, owned, timeout)

    try:
        resp = session.get(row.image_url, timeout=timeout)
    except requests.RequestException as exc:
        return _failure(row, str(exc))

    if not 200 <= resp.status_code < 300:
        status_text = resp.reason or str(resp.status_code)
        logger.debug("GET %s returned %s", row.image_url, resp.status_code)
        return _failure(row, status_text)

    return FetchSuccess(data=resp.content)
