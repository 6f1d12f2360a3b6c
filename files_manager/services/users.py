# files_manager/services/users.py
import logging

from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from files_manager.core.errors import Conflict, Unauthorized, ValidationError
from files_manager.models.user import User
from files_manager.services.sessions import SessionManager
from files_manager.stores.documents import DocumentStore, UserQuery, parse_id
from files_manager.stores.queues import JobQueue

logger = logging.getLogger(__name__)


class UserRegistry:
    def __init__(self, documents: DocumentStore, sessions: SessionManager, queue: JobQueue | None = None):
        self.documents = documents
        self.sessions = sessions
        self.queue = queue

    def register(self, email: str | None, password: str | None) -> User:
        if not email:
            raise ValidationError("Missing email")
        if not password:
            raise ValidationError("Missing password")

        # Check if user exists
        if self.documents.find_user(UserQuery(email=email)):
            raise Conflict()
        try:
            user = self.documents.insert_user(email, generate_password_hash(password))
        except IntegrityError:
            # lost a race with a concurrent registration
            raise Conflict()

        logger.info("Registered user %s", user.id)
        if self.queue is not None:
            self.queue.enqueue_welcome(user.id)
        return user

    def current_user(self, token: str | None) -> User:
        """Resolve a token to a live user document or raise Unauthorized."""
        user_id = parse_id(self.sessions.resolve_token(token))
        if user_id is None:
            raise Unauthorized()
        user = self.documents.find_user(UserQuery(id=user_id))
        if user is None:
            raise Unauthorized()
        return user
