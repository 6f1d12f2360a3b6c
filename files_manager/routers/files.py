# files_manager/routers/files.py
import mimetypes
from typing import Any, Optional, Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict

from files_manager.models.user import User
from files_manager.routers.deps import get_current_user_id, get_tree, require_user
from files_manager.services.tree import FileTreeManager

router = APIRouter(prefix="/files")


class FileUpload(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    parentId: Optional[Union[int, str]] = None
    isPublic: Optional[bool] = None
    data: Any = None

    model_config = ConfigDict(extra="ignore")


# --- upload a new file or folder ---
@router.post("", status_code=status.HTTP_201_CREATED)
def upload_file(
    payload: Optional[FileUpload] = None,
    user: User = Depends(require_user),
    tree: FileTreeManager = Depends(get_tree),
):
    payload = payload or FileUpload()
    return tree.upload(user.id, payload.model_dump())


# --- list the children of a folder (0 is the root) ---
@router.get("")
def list_files(
    parentId: str = "0",
    page: str = "0",
    user: User = Depends(require_user),
    tree: FileTreeManager = Depends(get_tree),
):
    return tree.list_children(parentId, page)


# --- show one of the user's own files ---
@router.get("/{file_id}")
def show_file(
    file_id: str,
    user: User = Depends(require_user),
    tree: FileTreeManager = Depends(get_tree),
):
    return tree.show(file_id, user.id)


@router.put("/{file_id}/publish")
def publish_file(
    file_id: str,
    user: User = Depends(require_user),
    tree: FileTreeManager = Depends(get_tree),
):
    return tree.publish(file_id, user.id)


@router.put("/{file_id}/unpublish")
def unpublish_file(
    file_id: str,
    user: User = Depends(require_user),
    tree: FileTreeManager = Depends(get_tree),
):
    return tree.unpublish(file_id, user.id)


# --- download content, anonymous callers see public files only ---
@router.get("/{file_id}/data")
def get_file_data(
    file_id: str,
    size: Optional[str] = None,
    user_id: Optional[int] = Depends(get_current_user_id),
    tree: FileTreeManager = Depends(get_tree),
):
    record, content = tree.get_content(file_id, user_id, size)
    content_type = mimetypes.guess_type(record.name)[0] or "application/octet-stream"
    return Response(content=content, media_type=content_type)
