from pathlib import Path

import pytest

from sku_images.config import DEFAULT_ERROR_LOG, DownloadConfig
from sku_images.utils import batch_name_from_path


def test_defaults_match_a_sequential_run():
    config = DownloadConfig(output_dir="images/batch")

    assert config.output_dir == Path("images/batch")
    assert config.error_log_path == DEFAULT_ERROR_LOG
    assert config.max_parallel_downloads == 1
    assert config.delay_seconds == 0.0
    assert config.request_timeout is None
    assert config.delimiter == ";"


@pytest.mark.parametrize("overrides", [{"max_parallel_downloads": 0}, {"delay_seconds": -1.0}])
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValueError):
        DownloadConfig(output_dir=Path("images"), **overrides)


@pytest.mark.parametrize(
    "path, expected",
    [
        (Path("no_variantes_magnus.csv"), "no_variantes_magnus"),
        (Path("data/Summer Catalog.csv"), "summer-catalog"),
        (Path("Ñandú.csv"), "and"),
        (Path("???.csv"), "batch"),
    ],
)
def test_batch_name_from_path(path, expected):
    assert batch_name_from_path(path) == expected
