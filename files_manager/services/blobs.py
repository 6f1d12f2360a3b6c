"""Blob storage on the local filesystem.

Blobs are written under a freshly generated UUID, never under the
client-supplied name, so names cannot collide or escape the folder.
Thumbnails produced by the worker sit next to the original as
``<local_path>_<size>``.
"""

import base64
import binascii
import logging
import uuid
from pathlib import Path

from files_manager.core.errors import IOFailure, NotFound

logger = logging.getLogger(__name__)


class BlobStorage:
    def __init__(self, folder_path: str):
        self.folder_path = Path(folder_path)

    def store(self, raw_data: str) -> str:
        """Decode ``raw_data`` (base64) and write it; return the local path.

        Raises:
            IOFailure: If the payload is not valid base64 or the write fails.
        """
        try:
            content = base64.b64decode(raw_data)
        except (binascii.Error, TypeError, ValueError) as exc:
            raise IOFailure(str(exc)) from exc

        path = self.folder_path / str(uuid.uuid4())
        try:
            self.folder_path.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            logger.exception("Failed to write blob: %s", path)
            raise IOFailure(str(exc)) from exc

        logger.info("Stored blob %s (%d bytes)", path, len(content))
        return str(path)

    @staticmethod
    def variant_path(local_path: str, size=None) -> str:
        if not size:
            return local_path
        size = str(size)
        if not size.isdigit():
            raise NotFound()
        return f"{local_path}_{size}"

    def read(self, local_path: str, size=None) -> bytes:
        """Read a blob, or one of its size variants; anything missing is NotFound."""
        path = self.variant_path(local_path, size)
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            logger.debug("Blob unavailable %s: %s", path, exc)
            raise NotFound() from exc
