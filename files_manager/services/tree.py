"""Folder/file tree operations.

Records live in the document store; blob content for ``file`` and
``image`` records lives in :class:`BlobStorage`. Owner-scoped lookups
answer ``Not found`` for records that exist but belong to someone else,
so callers cannot probe for other users' files.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from files_manager.core.errors import DomainError, NotFound, ValidationError
from files_manager.models.file import FILE_TYPES, FOLDER, IMAGE, ROOT_ID, FileRecord
from files_manager.services.access import can_read, can_write
from files_manager.services.blobs import BlobStorage
from files_manager.stores.documents import DocumentStore, FileQuery, parse_id
from files_manager.stores.queues import JobQueue

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


@dataclass
class FileParams:
    name: str
    type: str
    parent_id: int = ROOT_ID
    is_public: bool = False
    data: Optional[str] = None


def normalize_parent_id(parent_id):
    """Map every spelling of the root (missing, "", 0, "0") to ROOT_ID."""
    if not parent_id or parent_id == "0":
        return ROOT_ID
    return parent_id


class FileTreeManager:
    def __init__(
        self,
        documents: DocumentStore,
        blobs: BlobStorage,
        queue: Optional[JobQueue] = None,
        page_size: int = PAGE_SIZE,
    ):
        self.documents = documents
        self.blobs = blobs
        self.queue = queue
        self.page_size = page_size

    # --- upload ---
    def validate_upload(self, params: dict) -> FileParams:
        """Check upload parameters in a fixed order, raising on the first problem."""
        name = params.get("name")
        file_type = params.get("type")
        data = params.get("data")
        parent_id = normalize_parent_id(params.get("parentId"))

        if not name:
            raise ValidationError("Missing name")
        if not file_type or file_type not in FILE_TYPES:
            raise ValidationError("Missing type")
        if not data and file_type != FOLDER:
            raise ValidationError("Missing data")

        if parent_id != ROOT_ID:
            parent_key = parse_id(parent_id)
            parent = self.documents.find_file(FileQuery(id=parent_key)) if parent_key else None
            if parent is None:
                raise ValidationError("Parent not found")
            if not parent.is_folder:
                raise ValidationError("Parent is not a folder")
            parent_id = parent_key

        return FileParams(
            name=name,
            type=file_type,
            parent_id=parent_id,
            is_public=bool(params.get("isPublic") or False),
            data=data,
        )

    def create_file(self, owner_id: int, params: FileParams) -> dict:
        fields = {
            "user_id": owner_id,
            "name": params.name,
            "type": params.type,
            "is_public": params.is_public,
            "parent_id": params.parent_id,
        }
        if params.type != FOLDER:
            # blob first, a crash before the insert leaves an orphan on disk
            fields["local_path"] = self.blobs.store(params.data)

        record = self.documents.insert_file(**fields)
        logger.info("User %s created %s %s", owner_id, record.type, record.id)

        if record.type == IMAGE and self.queue is not None:
            self.queue.enqueue_thumbnails(record.id, owner_id)
        return record.to_dict()

    def upload(self, owner_id: int, params: dict) -> dict:
        return self.create_file(owner_id, self.validate_upload(params))

    # --- lookups ---
    def _owned(self, file_id, owner_id: int) -> FileRecord:
        key = parse_id(file_id)
        record = self.documents.find_file(FileQuery(id=key, user_id=owner_id)) if key else None
        if record is None or not can_write(record, owner_id):
            raise NotFound()
        return record

    def show(self, file_id, owner_id: int) -> dict:
        return self._owned(file_id, owner_id).to_dict()

    def list_children(self, parent_id=ROOT_ID, page=0) -> List[dict]:
        parent_id = normalize_parent_id(parent_id)
        if parent_id != ROOT_ID:
            parent_id = parse_id(parent_id)
            parent = self.documents.find_file(FileQuery(id=parent_id)) if parent_id else None
            if parent is None or not parent.is_folder:
                return []

        try:
            page = max(int(page or 0), 0)
        except (TypeError, ValueError):
            page = 0

        records = self.documents.find_files(
            FileQuery(parent_id=parent_id),
            skip=page * self.page_size,
            limit=self.page_size,
        )
        return [record.to_dict() for record in records]

    # --- visibility ---
    def set_visibility(self, file_id, owner_id: int, make_public: bool) -> dict:
        record = self._owned(file_id, owner_id)
        updated = self.documents.update_file(
            FileQuery(id=record.id, user_id=owner_id),
            is_public=make_public,
        )
        if updated is None:
            raise NotFound()
        logger.info("User %s set file %s public=%s", owner_id, record.id, make_public)
        return updated.to_dict()

    def publish(self, file_id, owner_id: int) -> dict:
        return self.set_visibility(file_id, owner_id, True)

    def unpublish(self, file_id, owner_id: int) -> dict:
        return self.set_visibility(file_id, owner_id, False)

    # --- content ---
    def get_content(self, file_id, user_id=None, size=None) -> Tuple[FileRecord, bytes]:
        key = parse_id(file_id)
        record = self.documents.find_file(FileQuery(id=key)) if key else None
        if record is None or not can_read(record, user_id):
            raise NotFound()
        if record.is_folder:
            raise DomainError("A folder doesn't have content")
        return record, self.blobs.read(record.local_path, size)
