"""Business logic for deleting catalog records."""

from aws_lambda_powertools import Logger

from storefront_api.core.context import StorageContext, get_storage_context
from storefront_api.core.models.resources import Resource

logger = Logger(UTC=True)


class DeleteService:
    """Application service removing a record from the primary store and cache."""

    def __init__(self, storage: StorageContext | None = None) -> None:
        self.storage = storage or get_storage_context()

    def delete_record(self, resource: Resource, record_id: str) -> None:
        """Delete a record. Deleting an unknown id succeeds.

        Image variants are left in object storage.

        Raises:
            PrimaryWriteError: If the primary delete fails
            CacheWriteError: If the cache entry could not be removed
        """
        self.storage.records.delete_record(
            resource.table, resource.cache_key(record_id), record_id
        )

        logger.info(
            "Record deleted",
            extra={"resource": resource.name, "id": record_id},
        )
