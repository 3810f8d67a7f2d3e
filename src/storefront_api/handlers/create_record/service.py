"""Business logic for creating catalog records.

This module coordinates validation, image variant generation and
write-through persistence for new records, translating failures into
domain-specific errors.
"""

import uuid
from typing import Any

from aws_lambda_powertools import Logger

from storefront_api.core.context import StorageContext, get_storage_context
from storefront_api.core.models.errors import PrimaryWriteError, ValidationError
from storefront_api.core.models.resources import Resource
from storefront_api.core.utils.constants import ERROR_CODE_MISSING_IMAGE, IMAGE_FORM_FIELD
from storefront_api.core.utils.time import epoch_millis
from storefront_api.core.utils.validators import validate_request

Record = dict[str, Any]

# Assigned by the service, never taken from the request.
SERVER_FIELDS = frozenset({"id", "image", "createdAt", "updatedAt", "created_at", "updated_at"})

logger = Logger(UTC=True)


class CreateService:
    """Application service responsible for creating records.

    This service orchestrates:
    - Field validation and coercion
    - Identifier generation
    - Uploading image variants
    - Persisting the record to the primary store and cache
    """

    def __init__(self, storage: StorageContext | None = None) -> None:
        self.storage = storage or get_storage_context()

    @staticmethod
    def generate_record_id() -> str:
        """Generate a unique record identifier."""
        return str(uuid.uuid4())

    def create_record(
        self,
        resource: Resource,
        *,
        fields: dict[str, Any],
        image: bytes | None,
    ) -> Record:
        """Create a record with its image variants.

        The creation flow is:
        1. Validate the submitted fields
        2. Upload image variants under the new record id
        3. Write the record to the primary store, then the cache
        4. Remove the variants if the primary write fails

        Args:
            resource: Resource type being created
            fields: Submitted form fields
            image: Raw bytes of the required image file

        Returns:
            The stored record

        Raises:
            ValidationError: If fields are invalid or the image is missing
            ImageProcessingError: If the image cannot be decoded
            StorageUploadError: If a variant upload fails
            PrimaryWriteError: If the primary write fails
            CacheWriteError: If the cache could not be updated
        """
        if not image:
            raise ValidationError(
                message="Image file is required",
                error_code=ERROR_CODE_MISSING_IMAGE,
                details={"field": IMAGE_FORM_FIELD},
            )

        record_id = self.generate_record_id()
        submitted = {k: v for k, v in fields.items() if k not in SERVER_FIELDS}

        # Validate before touching storage so bad input leaves nothing behind
        record = validate_request(resource.record_model, {**submitted, "id": record_id})

        variants = self.storage.images.generate_variants(image, record_id)

        item = record.model_copy(
            update={"image": variants, "created_at": epoch_millis()}
        ).to_item()

        try:
            self.storage.records.save_record(
                resource.table, item, resource.cache_key(record_id)
            )
        except PrimaryWriteError:
            logger.exception(
                "Failed to persist record",
                extra={"resource": resource.name, "id": record_id},
            )

            # Nothing references the new variants yet
            orphaned = self.storage.images.remove_variants(record_id)
            if orphaned:
                logger.warning(
                    "Failed to clean up image variants after primary write failure",
                    extra={"id": record_id, "orphaned": orphaned},
                )
            raise

        logger.info(
            "Record created",
            extra={"resource": resource.name, "id": record_id},
        )
        return item
