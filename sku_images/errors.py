"""Exception types raised while downloading and storing product images."""

from __future__ import annotations


class ImageDownloadError(Exception):
    """Base class for errors raised by the download pipeline."""


class TranscodeError(ImageDownloadError):
    """The downloaded bytes could not be converted to JPEG."""


class StorageError(ImageDownloadError):
    """Probing the output directory or writing the image failed."""


class InputFormatError(ImageDownloadError):
    """The input CSV is missing required columns or cannot be read."""
