"""Domain errors raised by the catalog services.

Each error type carries the HTTP status it is reported with and a default
machine-readable code; callers may pass a more specific code.
"""

from http import HTTPStatus
from typing import Any, ClassVar

from storefront_api.core.utils.constants import (
    ERROR_CODE_CACHE_WRITE_FAILED,
    ERROR_CODE_IMAGE_PROCESSING_FAILED,
    ERROR_CODE_INTERNAL_ERROR,
    ERROR_CODE_PRIMARY_WRITE_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE_UPLOAD_FAILED,
    ERROR_CODE_VALIDATION_FAILED,
)


class StorefrontError(Exception):
    """
    Base exception for all catalog service errors.

    Optional contextual information can be supplied via `details`; it is
    logged and, for client errors, returned in the response body.
    """

    default_code: ClassVar[str] = ERROR_CODE_INTERNAL_ERROR
    http_status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}

        super().__init__(self.message)

    @property
    def is_client_error(self) -> bool:
        return self.http_status < HTTPStatus.INTERNAL_SERVER_ERROR


class ValidationError(StorefrontError):
    """Submitted fields, path parameters or body could not be accepted."""

    default_code = ERROR_CODE_VALIDATION_FAILED
    http_status = HTTPStatus.BAD_REQUEST


class ImageProcessingError(StorefrontError):
    """Uploaded bytes could not be decoded or encoded as an image."""

    default_code = ERROR_CODE_IMAGE_PROCESSING_FAILED
    http_status = HTTPStatus.BAD_REQUEST


class NotFoundError(StorefrontError):
    """The addressed resource type or record does not exist."""

    default_code = ERROR_CODE_RESOURCE_NOT_FOUND
    http_status = HTTPStatus.NOT_FOUND


class StorageUploadError(StorefrontError):
    """An object storage upload or delete failed."""

    default_code = ERROR_CODE_STORAGE_UPLOAD_FAILED


class PrimaryWriteError(StorefrontError):
    """A primary table store operation failed."""

    default_code = ERROR_CODE_PRIMARY_WRITE_FAILED


class CacheWriteError(StorefrontError):
    """A cache operation failed."""

    default_code = ERROR_CODE_CACHE_WRITE_FAILED
