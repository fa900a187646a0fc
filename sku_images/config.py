"""Configuration objects and constants for the image downloader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_IMAGES_ROOT = Path("images")
DEFAULT_ERROR_LOG = Path("error_log.csv")
DEFAULT_DELIMITER = ";"
ACCEPTED_EXTENSIONS = frozenset({"jpeg", "jpg", "png", "gif"})
FALLBACK_EXTENSION = ".jpg"


@dataclass
class DownloadConfig:
    """Settings that control a single download run."""

    output_dir: Path
    error_log_path: Path = DEFAULT_ERROR_LOG
    max_parallel_downloads: int = 1
    delay_seconds: float = 0.0
    request_timeout: Optional[float] = None
    delimiter: str = DEFAULT_DELIMITER

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)
        self.error_log_path = Path(self.error_log_path)
        if self.max_parallel_downloads < 1:
            raise ValueError(
                f"max_parallel_downloads must be at least 1 (got {self.max_parallel_downloads})"
            )
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds cannot be negative (got {self.delay_seconds})")
