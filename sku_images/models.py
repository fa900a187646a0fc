"""Data models used throughout the download pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union


@dataclass(frozen=True)
class ProductRow:
    """A single input record pairing a SKU with the image to fetch."""

    sku: str
    image_url: str


@dataclass
class FetchSuccess:
    """Raw response body for a successful download."""

    data: bytes


@dataclass
class FetchFailure:
    """Download that could not be completed, with a human-readable reason."""

    sku: str
    image_url: str
    reason: str


FetchOutcome = Union[FetchSuccess, FetchFailure]


@dataclass
class DetectedFormat:
    """Image type sniffed from the byte signature."""

    extension: str
    accepted: bool


@dataclass
class NormalizedImage:
    """Final bytes and file extension ready to be written to disk."""

    data: bytes
    extension: str
    transcoded: bool = False


@dataclass
class ErrorRecord:
    """Failure captured for a single row."""

    sku: str
    image_url: str
    error: str
    stage: str


@dataclass
class RunSummary:
    """Outcome counters for a completed run."""

    rows: int = 0
    written: List[Path] = field(default_factory=list)
    transcoded: int = 0
    failures: int = 0
    error_log_written: bool = False
    elapsed_seconds: float = 0.0
