"""Write-through persistence of catalog records to the primary store and cache.

The primary store is always written first. The cache is written second,
retried on failure, and invalidated when retries are exhausted. A failed
cache step is still reported to the caller: the record is durable, but the
caller must know that the cache may disagree with it until the entry is
rewritten or expires.
"""

from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger

from storefront_api.core.models.errors import CacheWriteError
from storefront_api.core.repositories.cache_store import CacheRepository
from storefront_api.core.repositories.primary_store import PrimaryStoreRepository
from storefront_api.core.utils.constants import get_cache_write_retries
from storefront_api.core.utils.serialization import to_json

Record = dict[str, Any]

logger = Logger(UTC=True)


class WriteThroughStore:
    """Keeps the primary store and cache in step for saves and deletes."""

    def __init__(
        self,
        primary: PrimaryStoreRepository,
        cache: CacheRepository,
        cache_retries: int | None = None,
    ) -> None:
        self._primary = primary
        self._cache = cache
        self._cache_retries = (
            cache_retries
            if cache_retries is not None
            else get_cache_write_retries()
        )

    def save_record(self, table: str, record: Record, cache_key: str) -> None:
        """Replace the record in the primary store, then mirror it to the cache.

        The write is a full replace: fields missing from ``record`` are
        absent afterwards.

        Raises:
            PrimaryWriteError: If the primary write fails; the cache is untouched
            CacheWriteError: If the cache could not be updated after the
                primary write succeeded
        """
        self._primary.put_record(table=table, record=record)

        payload = to_json(record)
        self._with_cache_retries(
            lambda: self._cache.set(key=cache_key, value=payload),
            action="set",
            cache_key=cache_key,
        )

    def delete_record(self, table: str, cache_key: str, primary_key: str) -> None:
        """Delete from the primary store, then drop the cache entry.

        Deleting a record that does not exist succeeds.

        Raises:
            PrimaryWriteError: If the primary delete fails; the cache is untouched
            CacheWriteError: If the cache entry could not be removed
        """
        self._primary.delete_record(table=table, record_id=primary_key)

        self._with_cache_retries(
            lambda: self._cache.delete(key=cache_key),
            action="delete",
            cache_key=cache_key,
        )

    def fetch_record(self, table: str, primary_key: str) -> Record | None:
        """Read the authoritative copy of a record from the primary store."""
        return self._primary.get_record(table=table, record_id=primary_key)

    def list_records(self, table: str) -> list[Record]:
        """Return every record of ``table`` from the primary store."""
        return self._primary.scan_records(table=table)

    def _with_cache_retries(
        self,
        operation: Callable[[], None],
        *,
        action: str,
        cache_key: str,
    ) -> None:
        attempts = 1 + max(self._cache_retries, 0)
        last_error: CacheWriteError | None = None

        for attempt in range(1, attempts + 1):
            try:
                operation()
                return
            except CacheWriteError as exc:
                last_error = exc
                logger.warning(
                    "Cache operation failed",
                    extra={"action": action, "key": cache_key, "attempt": attempt},
                )

        invalidated = action != "delete" and self._invalidate(cache_key)

        logger.error(
            "Cache out of sync with primary store",
            extra={"action": action, "key": cache_key, "invalidated": invalidated},
        )
        message = (
            "Record saved but cache could not be updated"
            if action == "set"
            else "Record deleted but cache entry could not be removed"
        )
        raise CacheWriteError(
            message=message,
            details={"key": cache_key, "action": action, "invalidated": invalidated},
        ) from last_error

    def _invalidate(self, cache_key: str) -> bool:
        try:
            self._cache.delete(key=cache_key)
        except CacheWriteError:
            logger.warning("Cache invalidation failed", extra={"key": cache_key})
            return False
        return True
