"""Tests for user registration and token-to-user resolution."""

import pytest
from werkzeug.security import check_password_hash

from files_manager.core.errors import Conflict, Unauthorized, ValidationError
from files_manager.stores.documents import UserQuery
from files_manager.stores.queues import WELCOME_TASK


class TestRegister:
    def test_password_is_hashed(self, users, documents):
        user = users.register("a@test.com", "pw")
        stored = documents.find_user(UserQuery(id=user.id))
        assert stored.password != "pw"
        assert check_password_hash(stored.password, "pw")

    @pytest.mark.parametrize(
        "email, password, message",
        [(None, "pw", "Missing email"), ("", "pw", "Missing email"), ("a@test.com", None, "Missing password")],
    )
    def test_missing_fields(self, users, email, password, message):
        with pytest.raises(ValidationError) as exc:
            users.register(email, password)
        assert exc.value.message == message

    def test_duplicate_email_conflicts_and_keeps_original(self, users, documents):
        original = users.register("a@test.com", "first")
        with pytest.raises(Conflict):
            users.register("a@test.com", "second")
        stored = documents.find_user(UserQuery(email="a@test.com"))
        assert stored.id == original.id
        assert check_password_hash(stored.password, "first")
        assert documents.count_users() == 1

    def test_welcome_job_is_enqueued(self, users, queue):
        user = users.register("a@test.com", "pw")
        queue.celery_app.send_task.assert_called_once_with(
            WELCOME_TASK, kwargs={"userId": str(user.id)}, retry=False
        )


class TestCurrentUser:
    def test_resolves_live_user(self, users, sessions, owner):
        token = sessions.issue_token("owner@test.com", "secret")
        assert users.current_user(token).id == owner.id

    def test_missing_token(self, users):
        with pytest.raises(Unauthorized):
            users.current_user(None)

    def test_token_for_missing_user(self, users, tokens):
        tokens.set("dangling", "999", 60)
        with pytest.raises(Unauthorized):
            users.current_user("dangling")
