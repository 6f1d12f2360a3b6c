# files_manager/models/file.py
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from files_manager.models.database import Base

FOLDER = "folder"
FILE = "file"
IMAGE = "image"
FILE_TYPES = (FILE, IMAGE, FOLDER)

ROOT_ID = 0


class FileRecord(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    type = Column(String(16), nullable=False)
    is_public = Column(Boolean, nullable=False, default=False)

    # 0 is the root sentinel, so this is not a foreign key
    parent_id = Column(Integer, nullable=False, default=ROOT_ID, index=True)

    # Blob location on disk, folders have none
    local_path = Column(String, nullable=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Many files → one owner (User)
    owner = relationship("User", back_populates="files")

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER

    def to_dict(self) -> dict:
        """Client-facing projection; local_path never leaves the server."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "type": self.type,
            "isPublic": self.is_public,
            "parentId": self.parent_id,
        }
