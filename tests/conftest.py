"""Shared fixtures: in-memory stores and an app wired to them."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from files_manager.core.config import Settings
from files_manager.main import create_app
from files_manager.services.blobs import BlobStorage
from files_manager.services.sessions import SessionManager
from files_manager.services.tree import FileTreeManager
from files_manager.services.users import UserRegistry
from files_manager.stores.documents import DocumentStore
from files_manager.stores.queues import JobQueue
from files_manager.stores.tokens import RedisTokenStore


class FakeRedis:
    """Just enough of a redis client for the token store, with a movable clock."""

    def __init__(self):
        self.now = 0.0
        self._data = {}

    def set(self, key, value, ex=None):
        expires = self.now + ex if ex else None
        self._data[key] = (str(value), expires)
        return True

    def get(self, key):
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires = entry
        if expires is not None and expires <= self.now:
            del self._data[key]
            return None
        return value

    def delete(self, *keys):
        return sum(1 for key in keys if self._data.pop(key, None) is not None)

    def ping(self):
        return True

    def close(self):
        pass


@pytest.fixture
def redis_client():
    return FakeRedis()


@pytest.fixture
def tokens(redis_client):
    return RedisTokenStore(client=redis_client)


@pytest.fixture
def documents():
    store = DocumentStore("sqlite://")
    store.connect()
    yield store
    store.close()


@pytest.fixture
def queue():
    """Real producer with the Celery app swapped for a mock."""
    job_queue = JobQueue("memory://")
    job_queue.celery_app = MagicMock()
    return job_queue


@pytest.fixture
def folder_path(tmp_path):
    return tmp_path / "files_manager"


@pytest.fixture
def blobs(folder_path):
    return BlobStorage(str(folder_path))


@pytest.fixture
def sessions(documents, tokens):
    return SessionManager(documents, tokens)


@pytest.fixture
def users(documents, sessions, queue):
    return UserRegistry(documents, sessions, queue)


@pytest.fixture
def tree(documents, blobs, queue):
    return FileTreeManager(documents, blobs, queue)


@pytest.fixture
def owner(users):
    return users.register("owner@test.com", "secret")


@pytest.fixture
def stranger(users):
    return users.register("stranger@test.com", "secret")


@pytest.fixture
def settings(folder_path):
    return Settings(database_url="sqlite://", folder_path=str(folder_path), log_level="DEBUG")


@pytest.fixture
def client(settings, documents, tokens, queue):
    app = create_app(settings, documents=documents, tokens=tokens, queue=queue)
    with TestClient(app) as test_client:
        yield test_client
