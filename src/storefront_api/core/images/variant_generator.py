"""Resizing of uploaded images into a fixed set of stored variants."""

from collections.abc import Mapping
from io import BytesIO

from aws_lambda_powertools import Logger
from PIL import Image, ImageOps, UnidentifiedImageError

from storefront_api.core.models.errors import (
    ImageProcessingError,
    StorageUploadError,
    ValidationError,
)
from storefront_api.core.repositories.object_storage import ObjectStorageRepository
from storefront_api.core.utils.constants import (
    IMAGE_KEY_PREFIX,
    IMAGE_VARIANTS,
    VARIANT_CONTENT_TYPE,
    VARIANT_EXTENSION,
    VARIANT_FORMAT,
    VARIANT_QUALITY,
)

logger = Logger(UTC=True)


class ImageVariantGenerator:
    """Produces every configured variant of an image and uploads them.

    Storage keys depend only on the identifier and variant name, so calling
    again for the same identifier overwrites the previous objects.
    """

    def __init__(
        self,
        storage: ObjectStorageRepository,
        variants: Mapping[str, tuple[int, int] | None] = IMAGE_VARIANTS,
    ) -> None:
        self._storage = storage
        self._variants = dict(variants)

    @staticmethod
    def variant_key(identifier: str, variant: str) -> str:
        """Return the storage key of ``variant`` for ``identifier``."""
        return f"{IMAGE_KEY_PREFIX}/{identifier}/{variant}.{VARIANT_EXTENSION}"

    def generate_variants(
        self,
        raw_bytes: bytes,
        identifier: str,
        *,
        rollback: bool = True,
    ) -> dict[str, str]:
        """Resize, encode and upload every variant of ``raw_bytes``.

        Every variant is encoded before the first upload, so undecodable
        input never reaches storage. If any upload fails nothing is returned.
        With ``rollback`` the variants already uploaded by this call are
        removed first. Pass ``rollback=False`` when a stored record already
        references the keys of ``identifier``: those objects were overwritten
        in place, and removing them would break the stored record.

        Args:
            raw_bytes: Encoded source image
            identifier: Stable identifier namespacing the storage keys
            rollback: Remove uploaded variants when a later upload fails

        Returns:
            Mapping of variant name to public URL

        Raises:
            ValidationError: If the identifier cannot be used as a key segment
            ImageProcessingError: If the bytes are empty or not a decodable image
            StorageUploadError: If any variant upload fails
        """
        if not identifier or "/" in identifier or identifier in (".", ".."):
            raise ValidationError(
                message="Invalid image identifier",
                details={"identifier": identifier},
            )

        encoded = self._encode_all(raw_bytes, identifier)

        urls: dict[str, str] = {}
        uploaded: list[str] = []

        for variant, data in encoded.items():
            key = self.variant_key(identifier, variant)

            try:
                urls[variant] = self._storage.upload_object(
                    key=key,
                    data=data,
                    content_type=VARIANT_CONTENT_TYPE,
                )
            except StorageUploadError as exc:
                orphaned = self._rollback(uploaded) if rollback else []
                logger.error(
                    "Variant upload failed",
                    extra={
                        "identifier": identifier,
                        "variant": variant,
                        "rolled_back": rollback,
                        "uploaded": uploaded,
                        "orphaned": orphaned,
                    },
                )
                raise StorageUploadError(
                    message="Unable to upload image at this time",
                    details={
                        "identifier": identifier,
                        "variant": variant,
                        "orphaned_keys": orphaned,
                    },
                ) from exc

            uploaded.append(key)

        logger.info(
            "Image variants uploaded",
            extra={"identifier": identifier, "variants": sorted(urls)},
        )
        return urls

    def remove_variants(self, identifier: str) -> list[str]:
        """Best-effort removal of every variant of ``identifier``.

        Returns:
            Keys that could not be removed
        """
        keys = [self.variant_key(identifier, variant) for variant in self._variants]
        return self._rollback(keys)

    def _encode_all(self, raw_bytes: bytes, identifier: str) -> dict[str, bytes]:
        if not raw_bytes:
            raise ImageProcessingError(
                message="Image file is empty",
                details={"identifier": identifier},
            )

        try:
            with Image.open(BytesIO(raw_bytes)) as source:
                source.load()
                image = ImageOps.exif_transpose(source)

            image = self._normalize_mode(image)

            return {
                variant: self._encode(image, box)
                for variant, box in self._variants.items()
            }

        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            logger.warning(
                "Image decoding failed",
                extra={"identifier": identifier, "error": str(exc)},
            )
            raise ImageProcessingError(
                message="Image could not be processed. Upload a valid image file.",
                details={"identifier": identifier},
            ) from exc

    @staticmethod
    def _normalize_mode(image: Image.Image) -> Image.Image:
        if image.mode in ("RGB", "RGBA"):
            return image

        has_alpha = "A" in image.getbands() or "transparency" in image.info
        return image.convert("RGBA" if has_alpha else "RGB")

    @staticmethod
    def _encode(image: Image.Image, box: tuple[int, int] | None) -> bytes:
        variant = image.copy()

        if box is not None:
            variant.thumbnail(box, Image.Resampling.LANCZOS)

        buffer = BytesIO()
        variant.save(buffer, format=VARIANT_FORMAT, quality=VARIANT_QUALITY)
        return buffer.getvalue()

    def _rollback(self, keys: list[str]) -> list[str]:
        """Remove ``keys``; returns those that could not be removed."""
        orphaned: list[str] = []

        for key in keys:
            try:
                self._storage.remove_object(key=key)
            except StorageUploadError:
                logger.warning("Failed to remove image variant", extra={"key": key})
                orphaned.append(key)

        return orphaned
