"""Document store backed by SQLAlchemy.

The core only talks to this module through exact-match query objects, so
nothing above it builds SQL. Each call runs in its own short session and
is a single statement from the core's point of view.
"""

import logging
from dataclasses import asdict, dataclass
from typing import List, Optional

from sqlalchemy import func, select, text, update
from sqlalchemy.exc import SQLAlchemyError

from files_manager.models.database import Base, make_engine, make_session_factory
from files_manager.models.file import FileRecord
from files_manager.models.user import User

logger = logging.getLogger(__name__)


def parse_id(value) -> Optional[int]:
    """Store ids are positive integers; anything else matches nothing."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


@dataclass(frozen=True)
class _Query:
    def criteria(self) -> dict:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class UserQuery(_Query):
    id: Optional[int] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class FileQuery(_Query):
    id: Optional[int] = None
    user_id: Optional[int] = None
    parent_id: Optional[int] = None
    type: Optional[str] = None


class DocumentStore:
    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = make_engine(database_url)
        self.SessionLocal = make_session_factory(self.engine)

    # --- lifecycle ---
    def connect(self) -> bool:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            logger.warning("Could not create tables: %s", exc)
        alive = self.is_alive()
        if alive:
            logger.info("Document store ready: %s", self.engine.url.render_as_string(hide_password=True))
        else:
            logger.warning("Document store unreachable: %s", self.engine.url.render_as_string(hide_password=True))
        return alive

    def is_alive(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True

    def close(self) -> None:
        self.engine.dispose()

    # --- generic helpers ---
    def _find_one(self, model, query: _Query):
        with self.SessionLocal() as db:
            return db.query(model).filter_by(**query.criteria()).first()

    def _count(self, model) -> int:
        with self.SessionLocal() as db:
            return db.scalar(select(func.count()).select_from(model))

    def _insert(self, obj):
        with self.SessionLocal() as db:
            db.add(obj)
            db.commit()
            db.refresh(obj)
            return obj

    # --- users ---
    def find_user(self, query: UserQuery) -> Optional[User]:
        return self._find_one(User, query)

    def insert_user(self, email: str, password_hash: str) -> User:
        return self._insert(User(email=email, password=password_hash))

    def count_users(self) -> int:
        return self._count(User)

    # --- files ---
    def find_file(self, query: FileQuery) -> Optional[FileRecord]:
        return self._find_one(FileRecord, query)

    def find_files(self, query: FileQuery, skip: int = 0, limit: int = 20) -> List[FileRecord]:
        with self.SessionLocal() as db:
            return (
                db.query(FileRecord)
                .filter_by(**query.criteria())
                .order_by(FileRecord.id)
                .offset(skip)
                .limit(limit)
                .all()
            )

    def insert_file(self, **fields) -> FileRecord:
        return self._insert(FileRecord(**fields))

    def update_file(self, query: FileQuery, **values) -> Optional[FileRecord]:
        """Apply ``values`` to the record matching ``query`` and return it."""
        criteria = query.criteria()
        with self.SessionLocal() as db:
            stmt = update(FileRecord).filter_by(**criteria).values(**values)
            result = db.execute(stmt)
            db.commit()
            if not result.rowcount:
                return None
            return db.query(FileRecord).filter_by(**criteria).first()

    def count_files(self) -> int:
        return self._count(FileRecord)
