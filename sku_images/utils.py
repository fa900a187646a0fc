"""Utility helpers for path handling."""

from __future__ import annotations

import re
from pathlib import Path

BATCH_PATTERN = re.compile(r"[^a-z0-9_]+")


def batch_name_from_path(path: Path, fallback: str = "batch") -> str:
    """Derive a filesystem-friendly batch folder name from the input file name."""
    normalized = Path(path).stem.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()
    normalized = BATCH_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback
