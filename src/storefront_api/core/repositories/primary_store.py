"""Abstract contract for the authoritative record store."""

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


class PrimaryStoreRepository(ABC):
    """Contract for persisting catalog records keyed by ``id``.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def put_record(self, *, table: str, record: Record) -> None:
        """Write ``record`` keyed by ``record["id"]``, replacing any previous item.

        Raises:
            PrimaryWriteError: If the write fails
        """

    @abstractmethod
    def get_record(self, *, table: str, record_id: str) -> Record | None:
        """Fetch a record by id.

        Returns:
            Record dict or None if not found

        Raises:
            PrimaryWriteError: If the read fails
        """

    @abstractmethod
    def delete_record(self, *, table: str, record_id: str) -> None:
        """Delete a record by id. Deleting a missing id succeeds.

        Raises:
            PrimaryWriteError: If the delete fails
        """

    @abstractmethod
    def scan_records(self, *, table: str) -> list[Record]:
        """Return every record of ``table``.

        Raises:
            PrimaryWriteError: If the scan fails
        """
