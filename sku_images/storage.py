"""Collision-free file naming and writing inside the output directory."""

from __future__ import annotations

from pathlib import Path

from .errors import StorageError

PATH_SEPARATORS = ("/", "\\")


def allocate_path(output_dir: Path, sku: str, extension: str) -> Path:
    """Return ``<output_dir>/<sku>_<n><extension>`` for the lowest free ``n`` >= 1.

    The probe and the later write are separate steps; callers must not
    suspend between them when several rows share the directory.
    """
    if any(separator in sku for separator in PATH_SEPARATORS):
        raise StorageError(f"SKU {sku!r} contains a path separator")
    index = 1
    while True:
        candidate = Path(output_dir) / f"{sku}_{index}{extension}"
        try:
            exists = candidate.exists()
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot probe {candidate}: {exc}") from exc
        if not exists:
            return candidate
        index += 1


def write_image(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path``; the output directory must already exist."""
    try:
        Path(path).write_bytes(data)
    except (OSError, ValueError) as exc:
        raise StorageError(f"Cannot write {path}: {exc}") from exc
