"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

import os
from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_MISSING_IMAGE = "MISSING_IMAGE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_INVALID_BODY = "INVALID_BODY"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_RECORD_NOT_FOUND = "RECORD_NOT_FOUND"

# Image Errors
ERROR_CODE_IMAGE_PROCESSING_FAILED = "IMAGE_PROCESSING_FAILED"
ERROR_CODE_STORAGE_UPLOAD_FAILED = "STORAGE_UPLOAD_FAILED"
ERROR_CODE_STORAGE_DELETE_FAILED = "STORAGE_DELETE_FAILED"

# Primary Store / DynamoDB Errors
ERROR_CODE_PRIMARY_WRITE_FAILED = "PRIMARY_WRITE_FAILED"
ERROR_CODE_PRIMARY_DELETE_FAILED = "PRIMARY_DELETE_FAILED"
ERROR_CODE_PRIMARY_READ_FAILED = "PRIMARY_READ_FAILED"
ERROR_CODE_PRIMARY_SCAN_FAILED = "PRIMARY_SCAN_FAILED"

# Cache / Redis Errors
ERROR_CODE_CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"
ERROR_CODE_CACHE_DELETE_FAILED = "CACHE_DELETE_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 4 * 1024 * 1024  # 4MB in bytes

IMAGE_FORM_FIELD = "image"


# ============================================================================
# Image Variants
# ============================================================================

# Bounding box per variant; None keeps the source dimensions.
IMAGE_VARIANTS: Final[dict[str, tuple[int, int] | None]] = {
    "thumbnail": (200, 200),
    "medium": (800, 800),
    "original": None,
}

VARIANT_FORMAT = "WEBP"
VARIANT_EXTENSION = "webp"
VARIANT_CONTENT_TYPE = "image/webp"
VARIANT_QUALITY = 80
IMAGE_KEY_PREFIX = "images"


# ============================================================================
# Cache Behaviour
# ============================================================================

DEFAULT_CACHE_TTL_SECONDS = 3600
DEFAULT_CACHE_WRITE_RETRIES = 1
DEFAULT_REDIS_URL = "redis://localhost:6379/0"


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_PRODUCTS_TABLE_NAME = "PRODUCTS_TABLE_NAME"
ENV_BANNERS_TABLE_NAME = "BANNERS_TABLE_NAME"
ENV_CATEGORIES_TABLE_NAME = "CATEGORIES_TABLE_NAME"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_PUBLIC_BASE_URL = "IMAGE_PUBLIC_BASE_URL"
ENV_REDIS_URL = "REDIS_URL"
ENV_CACHE_TTL_SECONDS = "CACHE_TTL_SECONDS"
ENV_CACHE_WRITE_RETRIES = "CACHE_WRITE_RETRIES"
DEFAULT_AWS_REGION = "us-east-1"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)


def _int_from_env(name: str, default: int, *, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None

    if value < minimum:
        raise RuntimeError(f"{name} must be at least {minimum}, got {value}")

    return value


def get_cache_ttl_seconds() -> int:
    """Get the cache entry TTL in seconds (CACHE_TTL_SECONDS)."""
    return _int_from_env(ENV_CACHE_TTL_SECONDS, DEFAULT_CACHE_TTL_SECONDS, minimum=1)


def get_cache_write_retries() -> int:
    """Get the number of extra cache write attempts (CACHE_WRITE_RETRIES)."""
    return _int_from_env(ENV_CACHE_WRITE_RETRIES, DEFAULT_CACHE_WRITE_RETRIES, minimum=0)
