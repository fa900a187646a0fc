import pytest

from sku_images.errors import StorageError
from sku_images.storage import allocate_path, write_image


def test_first_candidate_uses_suffix_one(tmp_path):
    assert allocate_path(tmp_path, "SKU9", ".png") == tmp_path / "SKU9_1.png"


def test_existing_files_push_the_suffix_up(tmp_path):
    (tmp_path / "SKU9_1.png").write_bytes(b"a")
    (tmp_path / "SKU9_2.png").write_bytes(b"b")

    assert allocate_path(tmp_path, "SKU9", ".png") == tmp_path / "SKU9_3.png"


def test_suffix_is_tracked_per_extension(tmp_path):
    (tmp_path / "SKU9_1.png").write_bytes(b"a")

    assert allocate_path(tmp_path, "SKU9", ".jpg") == tmp_path / "SKU9_1.jpg"


def test_gaps_are_reused(tmp_path):
    (tmp_path / "SKU9_2.gif").write_bytes(b"b")

    assert allocate_path(tmp_path, "SKU9", ".gif") == tmp_path / "SKU9_1.gif"


def test_write_image_stores_exact_bytes(tmp_path):
    target = tmp_path / "A_1.jpg"

    write_image(target, b"\xff\xd8data")

    assert target.read_bytes() == b"\xff\xd8data"


def test_write_into_missing_directory_raises_storage_error(tmp_path):
    with pytest.raises(StorageError, match="Cannot write"):
        write_image(tmp_path / "missing" / "A_1.jpg", b"data")


def test_sku_with_null_byte_raises_storage_error(tmp_path):
    with pytest.raises(StorageError):
        candidate = allocate_path(tmp_path, "BAD\x00SKU", ".jpg")
        write_image(candidate, b"data")


@pytest.mark.parametrize("sku", ["../escape", "nested/sku", "win\\sku"])
def test_sku_with_path_separator_is_rejected(tmp_path, sku):
    with pytest.raises(StorageError, match="path separator"):
        allocate_path(tmp_path, sku, ".jpg")

    assert list(tmp_path.iterdir()) == []
