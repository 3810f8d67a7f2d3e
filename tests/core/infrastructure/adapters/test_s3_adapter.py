import pytest

from storefront_api.core.infrastructure.adapters.s3_adapter import S3Adapter


class TestS3Adapter:
    def test_init_missing_bucket_env(self, monkeypatch):
        monkeypatch.delenv("IMAGE_S3_BUCKET_NAME", raising=False)

        with pytest.raises(RuntimeError):
            S3Adapter()

    def test_put_object_overwrites(self, s3_client, s3_bucket):
        adapter = S3Adapter()

        adapter.put_object(
            key="images/p1/thumbnail.webp",
            body=b"first",
            content_type="image/webp",
            metadata={"source": "test"},
        )
        adapter.put_object(
            key="images/p1/thumbnail.webp",
            body=b"second",
            content_type="image/webp",
            metadata={"source": "test"},
        )

        obj = s3_client.get_object(Bucket=s3_bucket, Key="images/p1/thumbnail.webp")
        assert obj["Body"].read() == b"second"
        assert obj["ContentType"] == "image/webp"

    def test_delete_object(self, s3_bucket, s3_keys):
        adapter = S3Adapter()
        adapter.put_object(key="k", body=b"x", content_type="image/webp", metadata={})

        adapter.delete_object(key="k")

        assert s3_keys() == []

    def test_public_url_defaults_to_bucket_host(self, monkeypatch, aws_mock):
        monkeypatch.delenv("IMAGE_PUBLIC_BASE_URL", raising=False)

        url = S3Adapter().public_url(key="images/p1/medium.webp")

        assert url == "https://test-catalog-images.s3.us-east-1.amazonaws.com/images/p1/medium.webp"

    def test_public_url_uses_configured_base(self, monkeypatch, aws_mock):
        monkeypatch.setenv("IMAGE_PUBLIC_BASE_URL", "https://cdn.example.com/")

        url = S3Adapter().public_url(key="images/p1/medium.webp")

        assert url == "https://cdn.example.com/images/p1/medium.webp"
