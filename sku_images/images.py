"""Image format detection and JPEG normalization."""

from __future__ import annotations

import io
import logging
from typing import Optional

from filetype import guess
from PIL import Image

from .config import ACCEPTED_EXTENSIONS, FALLBACK_EXTENSION
from .errors import TranscodeError
from .models import DetectedFormat, NormalizedImage

logger = logging.getLogger("sku_images")

JPEG_QUALITY = 90


def detect_image_format(data: bytes) -> Optional[DetectedFormat]:
    """Detect the image type from the byte signature; None when unrecognized."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "apng":
            ext = "png"
        return DetectedFormat(extension=ext, accepted=ext in ACCEPTED_EXTENSIONS)
    return None


def transcode_to_jpeg(data: bytes) -> bytes:
    """Re-encode arbitrary Pillow-readable image bytes as JPEG."""
    try:
        with Image.open(io.BytesIO(data)) as raw_image:
            image = raw_image.convert("RGB")
            buffer = io.BytesIO()
            image.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    except Exception as exc:  # noqa: BLE001 - any decoder error fails the row
        raise TranscodeError(str(exc) or exc.__class__.__name__) from exc
    return buffer.getvalue()


def normalize_image(data: bytes) -> NormalizedImage:
    """Keep JPEG/PNG/GIF bytes as-is and convert other recognized formats to JPEG.

    Bytes without a recognizable image signature are assumed to already be
    JPEG and are passed through untouched with a ``.jpg`` extension.
    """
    detected = detect_image_format(data)
    if detected is None:
        logger.debug("No image signature found; defaulting to %s", FALLBACK_EXTENSION)
        return NormalizedImage(data=data, extension=FALLBACK_EXTENSION)
    if detected.accepted:
        return NormalizedImage(data=data, extension=f".{detected.extension}")

    logger.debug("Converting %s image to JPEG", detected.extension)
    return NormalizedImage(
        data=transcode_to_jpeg(data),
        extension=FALLBACK_EXTENSION,
        transcoded=True,
    )
