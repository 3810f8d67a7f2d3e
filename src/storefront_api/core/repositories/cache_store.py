"""Abstract contract for the record cache."""

from abc import ABC, abstractmethod


class CacheRepository(ABC):
    """Contract for a namespaced string cache mirroring the primary store."""

    @abstractmethod
    def set(self, *, key: str, value: str) -> None:
        """Store ``value`` under ``key`` with the configured TTL.

        Raises:
            CacheWriteError: If the write fails
        """

    @abstractmethod
    def delete(self, *, key: str) -> None:
        """Remove ``key``. Removing a missing key succeeds.

        Raises:
            CacheWriteError: If the delete fails
        """
