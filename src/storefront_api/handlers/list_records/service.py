"""Business logic for listing catalog records."""

from typing import Any

from aws_lambda_powertools import Logger

from storefront_api.core.context import StorageContext, get_storage_context
from storefront_api.core.models.resources import Resource

Record = dict[str, Any]

logger = Logger(UTC=True)


class ListService:
    """Application service returning every record of a resource type."""

    def __init__(self, storage: StorageContext | None = None) -> None:
        self.storage = storage or get_storage_context()

    def list_records(self, resource: Resource) -> list[Record]:
        """Return all records of ``resource`` from the primary store.

        Raises:
            PrimaryWriteError: If the table scan fails
        """
        records = self.storage.records.list_records(resource.table)

        logger.info(
            "Records listed",
            extra={"resource": resource.name, "count": len(records)},
        )
        return records
