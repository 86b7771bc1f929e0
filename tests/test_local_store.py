import logging

import pytest

from albumsync.local_store import (
    delete_local_file,
    image_path,
    is_valid_image,
    scan_local_images,
)
from conftest import JPEG_BYTES


def test_image_path(tmp_path):
    assert image_path(tmp_path, "abc") == tmp_path / "abc.jpg"
    assert image_path(str(tmp_path), "abc") == tmp_path / "abc.jpg"


def test_scan_indexes_valid_jpegs_only(mirror_dir):
    (mirror_dir / "a.jpg").write_bytes(JPEG_BYTES)
    (mirror_dir / "b.jpg").write_bytes(JPEG_BYTES)
    (mirror_dir / "empty.jpg").write_bytes(b"")
    (mirror_dir / "text.jpg").write_bytes(b"<html>not an image</html>")
    (mirror_dir / "other.png").write_bytes(JPEG_BYTES)
    (mirror_dir / "nested.jpg").mkdir()

    assert scan_local_images(mirror_dir) == {"a", "b"}


def test_scan_accepts_short_jpeg(mirror_dir):
    (mirror_dir / "tiny.jpg").write_bytes(b"\xff\xd8\xff")
    assert scan_local_images(mirror_dir) == {"tiny"}


def test_scan_leaves_skipped_files_alone(mirror_dir):
    (mirror_dir / "empty.jpg").write_bytes(b"")
    (mirror_dir / "notes.txt").write_text("hello")

    scan_local_images(mirror_dir)

    assert (mirror_dir / "empty.jpg").exists()
    assert (mirror_dir / "notes.txt").exists()


def test_scan_missing_folder_raises(tmp_path):
    with pytest.raises(OSError):
        scan_local_images(tmp_path / "does-not-exist")


def test_is_valid_image_logs_read_failure(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        assert not is_valid_image(tmp_path / "missing.jpg")
    assert "Failed to read image" in caplog.text


def test_delete_local_file(tmp_path, caplog):
    path = tmp_path / "x.jpg"
    path.write_bytes(JPEG_BYTES)

    assert delete_local_file(path)
    assert not path.exists()

    with caplog.at_level(logging.ERROR):
        assert not delete_local_file(path)
    assert "Failed to delete" in caplog.text
