"""Abstract contract for image object storage."""

from abc import ABC, abstractmethod


class ObjectStorageRepository(ABC):
    """Contract for storing encoded image variants.

    Implementations could be S3, GCS, local disk, etc.
    """

    @abstractmethod
    def upload_object(self, *, key: str, data: bytes, content_type: str) -> str:
        """Upload ``data`` under ``key`` and return its public URL.

        Uploading to an existing key overwrites it.

        Raises:
            StorageUploadError: If upload fails
        """

    @abstractmethod
    def remove_object(self, *, key: str) -> None:
        """Delete the object under ``key``.

        Raises:
            StorageUploadError: If deletion fails
        """
