"""Business logic for updating catalog records.

Updates overlay the submitted fields on the stored record and write the
complete result back, so fields the client did not send (including the
image mapping when no new file is uploaded) keep their stored values.
"""

from typing import Any

from aws_lambda_powertools import Logger

from storefront_api.core.context import StorageContext, get_storage_context
from storefront_api.core.models.errors import NotFoundError
from storefront_api.core.models.resources import Resource
from storefront_api.core.utils.constants import ERROR_CODE_RECORD_NOT_FOUND
from storefront_api.core.utils.time import epoch_millis
from storefront_api.core.utils.validators import validate_request

Record = dict[str, Any]

logger = Logger(UTC=True)


class UpdateService:
    """Application service responsible for updating existing records."""

    def __init__(self, storage: StorageContext | None = None) -> None:
        self.storage = storage or get_storage_context()

    def update_record(
        self,
        resource: Resource,
        record_id: str,
        *,
        fields: dict[str, Any],
        image: bytes | None = None,
    ) -> Record:
        """Apply submitted changes to a stored record.

        The update flow is:
        1. Validate the submitted changes
        2. Load the current record from the primary store
        3. Validate the merged record
        4. Regenerate image variants if a new image was uploaded
        5. Write the full record to the primary store, then the cache

        Args:
            resource: Resource type being updated
            record_id: Identifier from the request path
            fields: Submitted form fields; unknown and server-assigned
                fields are ignored
            image: Raw bytes of a replacement image, if any

        Returns:
            The stored record

        Raises:
            ValidationError: If the changes or merged record are invalid
            NotFoundError: If no record has ``record_id``
            ImageProcessingError: If the image cannot be decoded
            StorageUploadError: If a variant upload fails
            PrimaryWriteError: If the primary read or write fails
            CacheWriteError: If the cache could not be updated
        """
        changes = validate_request(resource.changes_model, fields).model_dump(
            exclude_unset=True,
            by_alias=True,
        )

        existing = self.storage.records.fetch_record(resource.table, record_id)
        if existing is None:
            logger.warning(
                "Record not found for update",
                extra={"resource": resource.name, "id": record_id},
            )
            raise NotFoundError(
                message=f"{resource.singular.capitalize()} not found: {record_id}",
                error_code=ERROR_CODE_RECORD_NOT_FOUND,
                details={"id": record_id},
            )

        record = validate_request(
            resource.record_model,
            {**existing, **changes, "id": record_id},
        )

        update: dict[str, Any] = {"updated_at": epoch_millis()}
        if image is not None:
            # Stored variants share these keys; a failed upload must not remove them
            update["image"] = self.storage.images.generate_variants(
                image, record_id, rollback=not existing.get("image")
            )

        item = record.model_copy(update=update).to_item()

        self.storage.records.save_record(
            resource.table, item, resource.cache_key(record_id)
        )

        logger.info(
            "Record updated",
            extra={
                "resource": resource.name,
                "id": record_id,
                "fields": sorted(changes),
                "image_replaced": image is not None,
            },
        )
        return item
