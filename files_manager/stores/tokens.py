"""Redis-backed token store: ``auth_<token> -> userId`` with a TTL."""

import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)

KEY_PREFIX = "auth_"


def token_key(token: str) -> str:
    return f"{KEY_PREFIX}{token}"


class RedisTokenStore:
    def __init__(self, redis_url: str = "redis://localhost:6379/0", client=None):
        self._redis_url = redis_url
        self._client = client

    def connect(self) -> bool:
        if self._client is None:
            self._client = redis.Redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5,
                retry_on_timeout=True,
            )
        alive = self.is_alive()
        if alive:
            logger.info("Redis connected: %s", self._redis_url)
        else:
            logger.warning("Redis connection failed: %s", self._redis_url)
        return alive

    def is_alive(self) -> bool:
        if self._client is None:
            return False
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def set(self, token: str, user_id: str, ttl: int) -> None:
        self._client.set(token_key(token), user_id, ex=ttl)

    def get(self, token: str) -> Optional[str]:
        value = self._client.get(token_key(token))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def delete(self, token: str) -> None:
        self._client.delete(token_key(token))
