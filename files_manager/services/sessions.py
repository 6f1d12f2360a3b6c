"""Token-based sessions.

Logging in exchanges a Basic ``email:password`` header for an opaque
token stored in Redis as ``auth_<token> -> userId``. Tokens expire
through the Redis TTL only.
"""

import base64
import binascii
import logging
import uuid

from werkzeug.security import check_password_hash

from files_manager.core.errors import Unauthorized
from files_manager.stores.documents import DocumentStore, UserQuery
from files_manager.stores.tokens import RedisTokenStore

logger = logging.getLogger(__name__)

TOKEN_TTL = 24 * 3600


def decode_basic(authorization: str | None) -> tuple[str, str]:
    """Split a ``Basic base64(email:password)`` header into its parts."""
    if not authorization or not authorization.startswith("Basic "):
        raise Unauthorized()
    try:
        decoded = base64.b64decode(authorization[len("Basic "):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise Unauthorized()

    email, _, password = decoded.partition(":")
    if not email or not password:
        raise Unauthorized()
    return email, password


class SessionManager:
    def __init__(self, documents: DocumentStore, tokens: RedisTokenStore, ttl: int = TOKEN_TTL):
        self.documents = documents
        self.tokens = tokens
        self.ttl = ttl

    def issue_token(self, email: str, password: str) -> str:
        # unknown email and wrong password must look the same
        if not email or not password:
            raise Unauthorized()
        user = self.documents.find_user(UserQuery(email=email))
        if not user or not check_password_hash(user.password, password):
            logger.warning("Rejected login for %s", email)
            raise Unauthorized()

        token = str(uuid.uuid4())
        self.tokens.set(token, str(user.id), self.ttl)
        logger.info("Issued token for user %s", user.id)
        return token

    def connect(self, authorization: str | None) -> str:
        email, password = decode_basic(authorization)
        return self.issue_token(email, password)

    def resolve_token(self, token: str | None) -> str | None:
        if not token:
            return None
        return self.tokens.get(token)

    def revoke_token(self, token: str | None) -> None:
        if not token:
            return
        self.tokens.delete(token)
        logger.info("Revoked token")
