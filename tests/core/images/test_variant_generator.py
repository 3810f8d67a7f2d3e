from io import BytesIO

import pytest
from PIL import Image

from storefront_api.core.images.variant_generator import ImageVariantGenerator
from storefront_api.core.models.errors import (
    ImageProcessingError,
    StorageUploadError,
    ValidationError,
)
from storefront_api.core.repositories.object_storage import ObjectStorageRepository


class RecordingStorage(ObjectStorageRepository):
    """Object storage double that can fail the n-th upload or any removal."""

    def __init__(self, fail_upload_at: int | None = None, fail_removal: bool = False) -> None:
        self.objects: dict[str, bytes] = {}
        self.uploads: list[str] = []
        self.fail_upload_at = fail_upload_at
        self.fail_removal = fail_removal

    def upload_object(self, *, key: str, data: bytes, content_type: str) -> str:
        self.uploads.append(key)
        if self.fail_upload_at is not None and len(self.uploads) == self.fail_upload_at:
            raise StorageUploadError(message="S3 down")
        self.objects[key] = data
        return f"https://cdn.example.com/{key}"

    def remove_object(self, *, key: str) -> None:
        if self.fail_removal:
            raise StorageUploadError(message="S3 down")
        self.objects.pop(key, None)


def _size(data: bytes) -> tuple[int, int]:
    with Image.open(BytesIO(data)) as img:
        return img.size


class TestGenerateVariants:
    def test_returns_url_for_every_variant(self, sample_png) -> None:
        storage = RecordingStorage()
        generator = ImageVariantGenerator(storage)

        urls = generator.generate_variants(sample_png, "abc123")

        assert set(urls) == {"thumbnail", "medium", "original"}
        assert urls["thumbnail"] == "https://cdn.example.com/images/abc123/thumbnail.webp"
        assert sorted(storage.objects) == [
            "images/abc123/medium.webp",
            "images/abc123/original.webp",
            "images/abc123/thumbnail.webp",
        ]

    def test_variants_are_resized_within_bounds(self, sample_png) -> None:
        storage = RecordingStorage()

        ImageVariantGenerator(storage).generate_variants(sample_png, "abc123")

        assert _size(storage.objects["images/abc123/thumbnail.webp"]) == (200, 150)
        assert _size(storage.objects["images/abc123/medium.webp"]) == (800, 600)
        assert _size(storage.objects["images/abc123/original.webp"]) == (1200, 900)

    def test_small_images_are_not_upscaled(self, make_image) -> None:
        storage = RecordingStorage()

        ImageVariantGenerator(storage).generate_variants(make_image((50, 40)), "small")

        assert _size(storage.objects["images/small/medium.webp"]) == (50, 40)

    @pytest.mark.parametrize("mode", ["RGBA", "P", "L"])
    def test_non_rgb_modes_are_encoded(self, make_image, mode) -> None:
        storage = RecordingStorage()

        urls = ImageVariantGenerator(storage).generate_variants(
            make_image((300, 300), mode=mode), "modes"
        )

        assert len(urls) == 3

    def test_same_identifier_overwrites_same_keys(self, sample_png, make_image) -> None:
        storage = RecordingStorage()
        generator = ImageVariantGenerator(storage)

        first = generator.generate_variants(sample_png, "abc123")
        second = generator.generate_variants(make_image((400, 400)), "abc123")

        assert first == second
        assert len(storage.objects) == 3
        assert _size(storage.objects["images/abc123/original.webp"]) == (400, 400)

    def test_undecodable_bytes_raise_before_upload(self) -> None:
        storage = RecordingStorage()

        with pytest.raises(ImageProcessingError):
            ImageVariantGenerator(storage).generate_variants(b"not an image", "abc123")

        assert storage.uploads == []

    def test_empty_bytes_raise(self) -> None:
        with pytest.raises(ImageProcessingError):
            ImageVariantGenerator(RecordingStorage()).generate_variants(b"", "abc123")

    @pytest.mark.parametrize("identifier", ["", "a/b", ".."])
    def test_rejects_unsafe_identifier(self, sample_png, identifier) -> None:
        with pytest.raises(ValidationError):
            ImageVariantGenerator(RecordingStorage()).generate_variants(sample_png, identifier)

    def test_failed_upload_rolls_back_earlier_variants(self, sample_png) -> None:
        storage = RecordingStorage(fail_upload_at=3)

        with pytest.raises(StorageUploadError) as exc_info:
            ImageVariantGenerator(storage).generate_variants(sample_png, "abc123")

        assert storage.objects == {}
        assert exc_info.value.details["orphaned_keys"] == []

    def test_failed_rollback_is_reported(self, sample_png) -> None:
        storage = RecordingStorage(fail_upload_at=2, fail_removal=True)

        with pytest.raises(StorageUploadError) as exc_info:
            ImageVariantGenerator(storage).generate_variants(sample_png, "abc123")

        assert exc_info.value.details["orphaned_keys"] == ["images/abc123/thumbnail.webp"]

    def test_failed_upload_without_rollback_keeps_existing_objects(
        self, sample_png, make_image
    ) -> None:
        storage = RecordingStorage()
        generator = ImageVariantGenerator(storage)
        generator.generate_variants(sample_png, "abc123")
        storage.uploads.clear()
        storage.fail_upload_at = 2

        with pytest.raises(StorageUploadError):
            generator.generate_variants(make_image((64, 48)), "abc123", rollback=False)

        assert sorted(storage.objects) == [
            "images/abc123/medium.webp",
            "images/abc123/original.webp",
            "images/abc123/thumbnail.webp",
        ]


def test_remove_variants_reports_leftovers(sample_png) -> None:
    storage = RecordingStorage()
    generator = ImageVariantGenerator(storage)
    generator.generate_variants(sample_png, "abc123")

    assert generator.remove_variants("abc123") == []
    assert storage.objects == {}

    storage.fail_removal = True
    assert len(generator.remove_variants("abc123")) == 3
