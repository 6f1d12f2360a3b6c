"""Tests for on-disk blob storage."""

import base64
from pathlib import Path

import pytest

from files_manager.core.errors import IOFailure, NotFound


def encode(content: bytes) -> str:
    return base64.b64encode(content).decode()


class TestStore:
    def test_round_trip(self, blobs):
        path = blobs.store(encode(b"hello"))
        assert blobs.read(path) == b"hello"

    def test_creates_folder_and_uses_generated_names(self, blobs, folder_path):
        assert not folder_path.exists()
        first = blobs.store(encode(b"a"))
        second = blobs.store(encode(b"a"))
        assert first != second
        assert Path(first).parent == folder_path
        assert Path(second).parent == folder_path

    def test_bad_base64_is_an_io_failure(self, blobs):
        with pytest.raises(IOFailure) as exc:
            blobs.store("abc")
        assert exc.value.status_code == 400
        assert exc.value.message

    def test_unwritable_folder_is_an_io_failure(self, tmp_path):
        from files_manager.services.blobs import BlobStorage

        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(IOFailure):
            BlobStorage(str(blocker / "files")).store(encode(b"x"))


class TestRead:
    def test_size_variant_is_read_from_suffixed_path(self, blobs):
        path = blobs.store(encode(b"original"))
        Path(f"{path}_250").write_bytes(b"thumb")
        assert blobs.read(path, "250") == b"thumb"
        assert blobs.read(path, 250) == b"thumb"

    def test_missing_variant_is_not_found(self, blobs):
        path = blobs.store(encode(b"original"))
        with pytest.raises(NotFound):
            blobs.read(path, "500")

    def test_non_numeric_variant_is_not_found(self, blobs):
        path = blobs.store(encode(b"original"))
        with pytest.raises(NotFound):
            blobs.read(path, "../../etc/passwd")

    def test_missing_blob_is_not_found(self, blobs, folder_path):
        with pytest.raises(NotFound):
            blobs.read(str(folder_path / "gone"))


def test_non_string_payload_is_an_io_failure(blobs):
    with pytest.raises(IOFailure):
        blobs.store(123)
