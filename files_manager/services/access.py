# files_manager/services/access.py
from files_manager.models.file import FileRecord


def _same_user(user_id, owner_id) -> bool:
    return user_id is not None and str(user_id) == str(owner_id)


def can_read(file: FileRecord, user_id=None) -> bool:
    """Public files are readable by anyone, private ones only by the owner."""
    return bool(file.is_public) or _same_user(user_id, file.user_id)


def can_write(file: FileRecord, user_id=None) -> bool:
    # public visibility never grants write
    return _same_user(user_id, file.user_id)
