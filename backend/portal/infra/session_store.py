"""Key-value stores holding the serialized session user.

Both stores keep a single value per key. Adapter failures are raised as
SessionStoreError so callers handle one error type regardless of backend.
"""

from __future__ import annotations

import logging

from redis import Redis, RedisError

from ..errors import SessionStoreError

logger = logging.getLogger("portal.session_store")


class InMemorySessionStore:
    """Process-local store. Values survive only as long as the instance."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class RedisSessionStore:
    """Redis-backed store so a session outlives the process."""

    def __init__(self, redis_client: Redis, *, ttl_seconds: int = 0) -> None:
        """
        Args:
            redis_client: Synchronous Redis client; raw bytes replies are decoded here
            ttl_seconds: Expiry for stored values; 0 keeps them until removed
        """
        self._redis = redis_client
        self._ttl = ttl_seconds

    @classmethod
    def from_url(cls, redis_url: str, *, ttl_seconds: int = 0) -> "RedisSessionStore":
        return cls(Redis.from_url(redis_url), ttl_seconds=ttl_seconds)

    def get(self, key: str) -> str | None:
        try:
            value = self._redis.get(key)
        except RedisError as exc:
            logger.error("Redis operation failed operation=GET key=%s error=%s", key, exc)
            raise SessionStoreError(details={"operation": "GET", "key": key}) from exc
        # Undecodable bytes become replacement characters and fail validation upstream.
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            if self._ttl > 0:
                self._redis.set(key, value, ex=self._ttl)
            else:
                self._redis.set(key, value)
        except RedisError as exc:
            logger.error("Redis operation failed operation=SET key=%s error=%s", key, exc)
            raise SessionStoreError(details={"operation": "SET", "key": key}) from exc

    def remove(self, key: str) -> None:
        try:
            self._redis.delete(key)
        except RedisError as exc:
            logger.error("Redis operation failed operation=DEL key=%s error=%s", key, exc)
            raise SessionStoreError(details={"operation": "DEL", "key": key}) from exc

    def close(self) -> None:
        self._redis.close()
