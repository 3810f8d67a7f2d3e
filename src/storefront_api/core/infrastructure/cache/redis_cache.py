"""Redis-backed implementation of CacheRepository."""

from aws_lambda_powertools import Logger
from redis.exceptions import RedisError

from storefront_api.core.infrastructure.adapters.redis_adapter import RedisAdapterProtocol
from storefront_api.core.models.errors import CacheWriteError
from storefront_api.core.repositories.cache_store import CacheRepository
from storefront_api.core.utils.constants import (
    ERROR_CODE_CACHE_DELETE_FAILED,
    ERROR_CODE_CACHE_WRITE_FAILED,
    get_cache_ttl_seconds,
)

logger = Logger(UTC=True)


class RedisCache(CacheRepository):
    """Record cache stored in Redis.

    Every entry is written with a TTL so an entry left stale by a failed
    write-through eventually expires.
    """

    def __init__(
        self,
        adapter: RedisAdapterProtocol,
        ttl_seconds: int | None = None,
    ) -> None:
        if ttl_seconds is not None and ttl_seconds < 1:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        self._redis = adapter
        self._ttl = ttl_seconds if ttl_seconds is not None else get_cache_ttl_seconds()

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def set(self, *, key: str, value: str) -> None:
        logger.debug("Writing cache entry", extra={"key": key, "ttl": self._ttl})

        try:
            self._redis.set(key=key, value=value, ttl_seconds=self._ttl)
        except RedisError as exc:
            logger.error("Redis SET failed", extra={"key": key})
            raise CacheWriteError(
                message="Unable to update cache",
                error_code=ERROR_CODE_CACHE_WRITE_FAILED,
                details={"key": key},
            ) from exc

    def delete(self, *, key: str) -> None:
        logger.debug("Deleting cache entry", extra={"key": key})

        try:
            self._redis.delete(key=key)
        except RedisError as exc:
            logger.error("Redis DEL failed", extra={"key": key})
            raise CacheWriteError(
                message="Unable to invalidate cache",
                error_code=ERROR_CODE_CACHE_DELETE_FAILED,
                details={"key": key},
            ) from exc
