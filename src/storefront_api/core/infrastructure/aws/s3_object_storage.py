"""S3-backed implementation of ObjectStorageRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from storefront_api.core.infrastructure.adapters.s3_adapter import S3AdapterProtocol
from storefront_api.core.models.errors import StorageUploadError
from storefront_api.core.repositories.object_storage import ObjectStorageRepository
from storefront_api.core.utils.constants import (
    ERROR_CODE_STORAGE_DELETE_FAILED,
    ERROR_CODE_STORAGE_UPLOAD_FAILED,
)

logger = Logger(UTC=True)


class S3ObjectStorage(ObjectStorageRepository):
    """Image variant storage backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3 = adapter

    def upload_object(self, *, key: str, data: bytes, content_type: str) -> str:
        """Upload bytes to S3 and return the object's public URL."""
        logger.debug(
            "Uploading object",
            extra={"key": key, "size": len(data), "content_type": content_type},
        )

        try:
            self._s3.put_object(
                key=key,
                body=data,
                content_type=content_type,
                metadata={"source": "storefront-api"},
            )
        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise StorageUploadError(
                message="Unable to upload image at this time",
                error_code=ERROR_CODE_STORAGE_UPLOAD_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading object")
            raise StorageUploadError(
                message="Unable to upload image at this time",
                error_code=ERROR_CODE_STORAGE_UPLOAD_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Object uploaded successfully", extra={"key": key})
        return self._s3.public_url(key=key)

    def remove_object(self, *, key: str) -> None:
        """Delete an object from S3."""
        logger.debug("Deleting object", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
            logger.info("Object deleted successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise StorageUploadError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_STORAGE_DELETE_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting object")
            raise StorageUploadError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_STORAGE_DELETE_FAILED,
                details={"key": key},
            ) from exc
