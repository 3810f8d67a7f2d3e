"""Thin adapter for interacting with Redis."""

import os
from typing import Protocol

import redis

from storefront_api.core.utils.constants import DEFAULT_REDIS_URL, ENV_REDIS_URL


class RedisAdapterProtocol(Protocol):
    """Minimal Redis adapter protocol (repository-facing)."""

    def set(self, *, key: str, value: str, ttl_seconds: int | None) -> None: ...
    def delete(self, *, key: str) -> int: ...


class RedisAdapter:
    """Low-level Redis operations (mechanical, no error handling).

    This adapter:
    - Wraps a redis-py client built from REDIS_URL
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, client: redis.Redis | None = None) -> None:
        """Use the given client or create one from the environment."""
        self._client = client or redis.from_url(
            os.getenv(ENV_REDIS_URL, DEFAULT_REDIS_URL),
            decode_responses=True,
        )

    def set(self, *, key: str, value: str, ttl_seconds: int | None) -> None:
        """Store ``value`` under ``key``, expiring after ``ttl_seconds`` if given.
        Raises redis exceptions - caught by domain implementation.
        """
        self._client.set(key, value, ex=ttl_seconds)

    def delete(self, *, key: str) -> int:
        """Delete ``key``; returns the number of keys removed.
        Raises redis exceptions - caught by domain implementation.
        """
        return int(self._client.delete(key))
