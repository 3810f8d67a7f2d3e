"""Thin adapter for the image variant bucket in Amazon S3."""

import os
from typing import Any, Protocol

import boto3

from storefront_api.core.utils.constants import (
    DEFAULT_AWS_REGION,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_PUBLIC_BASE_URL,
    ENV_IMAGE_S3_BUCKET_NAME,
)


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...

    def delete_object(self, *, key: str) -> None: ...

    def public_url(self, *, key: str) -> str: ...


class S3Adapter:
    """Low-level S3 operations on one bucket (mechanical, no error handling).

    This adapter:
    - Wraps a boto3 S3 client bound to IMAGE_S3_BUCKET_NAME
    - Builds public object URLs, from IMAGE_PUBLIC_BASE_URL when set
    - Does NOT handle errors (lets them bubble up)
    """

    def __init__(self, client: Any | None = None) -> None:
        """Use the given boto3 client or create one from the environment."""
        bucket_name = os.getenv(ENV_IMAGE_S3_BUCKET_NAME)
        if not bucket_name:
            raise RuntimeError(f"{ENV_IMAGE_S3_BUCKET_NAME} environment variable is not set")

        self.bucket = bucket_name
        self.region = os.getenv(ENV_AWS_REGION, DEFAULT_AWS_REGION)
        self._public_base_url = os.getenv(ENV_IMAGE_PUBLIC_BASE_URL)
        self._client = client or boto3.client(
            "s3",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=self.region,
        )

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Write ``body`` to ``key``; an existing object is overwritten."""
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=metadata,
        )

    def delete_object(self, *, key: str) -> None:
        """Delete ``key``. S3 reports success for keys that do not exist."""
        self._client.delete_object(Bucket=self.bucket, Key=key)

    def public_url(self, *, key: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url.rstrip('/')}/{key}"

        # Virtual-hosted style URL
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"
