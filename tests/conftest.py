"""
Pytest configuration and fixtures for catalog tests.
Provides AWS mocking, DynamoDB tables, S3 bucket, an in-memory Redis and
request builders.
"""

import base64
import json
import os
from collections.abc import Callable
from io import BytesIO
from types import SimpleNamespace
from typing import Any

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("PRODUCTS_TABLE_NAME", "test-products")
os.environ.setdefault("BANNERS_TABLE_NAME", "test-banners")
os.environ.setdefault("CATEGORIES_TABLE_NAME", "test-categories")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "test-catalog-images")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "StorefrontTest")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "storefront-api")

import boto3  # noqa: E402
import pytest  # noqa: E402
from moto import mock_aws  # noqa: E402
from PIL import Image  # noqa: E402
from requests_toolbelt import MultipartEncoder  # noqa: E402

from storefront_api.core.context import StorageContext, get_storage_context  # noqa: E402
from storefront_api.core.models.errors import StorageUploadError  # noqa: E402

TABLE_ENVS = ("PRODUCTS_TABLE_NAME", "BANNERS_TABLE_NAME", "CATEGORIES_TABLE_NAME")


class FakeRedis:
    """In-memory stand-in for the subset of redis.Redis used by RedisAdapter."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.data[key] = value
        self.ttls[key] = ex
        return True

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def dynamodb_tables(dynamodb_resource) -> dict[str, Any]:
    """
    Create the products, banners and categories tables.

    Keyed by the logical table name used by the resource registry.
    """
    tables: dict[str, Any] = {}

    for env_name in TABLE_ENVS:
        table = dynamodb_resource.create_table(
            TableName=os.environ[env_name],
            BillingMode="PAY_PER_REQUEST",
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
        )
        table.wait_until_exists()
        logical_name = env_name.removesuffix("_TABLE_NAME").lower()
        tables[logical_name] = table

    return tables


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client) -> str:
    bucket_name = os.environ["IMAGE_S3_BUCKET_NAME"]
    s3_client.create_bucket(Bucket=bucket_name)
    return bucket_name


@pytest.fixture
def s3_keys(s3_client, s3_bucket) -> Callable[[], list[str]]:
    """Helper listing every key currently stored in the image bucket."""

    def _list() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=s3_bucket)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _list


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def storage_context(
    monkeypatch,
    dynamodb_tables,
    s3_bucket,
    fake_redis,
) -> StorageContext:
    """
    Process-wide storage context backed by moto and the in-memory Redis.

    Services built without an explicit context pick this one up.
    """
    monkeypatch.setattr(
        "storefront_api.core.infrastructure.adapters.redis_adapter.redis.from_url",
        lambda *args, **kwargs: fake_redis,
    )
    get_storage_context.cache_clear()

    yield get_storage_context()

    get_storage_context.cache_clear()


@pytest.fixture
def fail_upload_at(monkeypatch) -> Callable[[StorageContext, int], None]:
    """Make the n-th image upload through a storage context fail."""

    def _install(storage: StorageContext, n: int) -> None:
        upload = storage.objects.upload_object
        calls = {"count": 0}

        def upload_object(**kwargs: Any) -> str:
            calls["count"] += 1
            if calls["count"] == n:
                raise StorageUploadError(message="Unable to upload image at this time")
            return upload(**kwargs)

        monkeypatch.setattr(storage.objects, "upload_object", upload_object)

    return _install


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
    )


def _image_bytes(size: tuple[int, int], mode: str = "RGB", fmt: str = "PNG") -> bytes:
    color: Any = (200, 30, 30, 255) if mode == "RGBA" else 120 if mode in ("L", "P") else "red"
    buffer = BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def sample_png() -> bytes:
    """A 1200x900 RGB PNG."""
    return _image_bytes((1200, 900))


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory for in-memory images of a given size, mode and format."""
    return _image_bytes


@pytest.fixture
def multipart_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway proxy event carrying a multipart form.

    Usage:
        event = multipart_event("POST", "/products", {"name": "Shirt"}, image=png)
    """

    def _build(
        method: str,
        resource: str,
        fields: dict[str, str],
        *,
        image: bytes | None = None,
        record_id: str | None = None,
    ) -> dict[str, Any]:
        parts: dict[str, Any] = dict(fields)
        if image is not None:
            parts["image"] = ("upload.png", image, "image/png")

        encoder = MultipartEncoder(fields=parts)
        body = encoder.to_string()

        path = resource.replace("{id}", record_id) if record_id else resource
        return {
            "httpMethod": method,
            "resource": resource,
            "path": path,
            "pathParameters": {"id": record_id} if record_id else None,
            "headers": {"Content-Type": encoder.content_type},
            "body": base64.b64encode(body).decode("utf-8"),
            "isBase64Encoded": True,
        }

    return _build


@pytest.fixture
def json_event() -> Callable[..., dict[str, Any]]:
    """Build an API Gateway proxy event with a JSON (or empty) body."""

    def _build(
        method: str,
        resource: str,
        body: dict[str, Any] | None = None,
        *,
        record_id: str | None = None,
    ) -> dict[str, Any]:
        path = resource.replace("{id}", record_id) if record_id else resource
        return {
            "httpMethod": method,
            "resource": resource,
            "path": path,
            "pathParameters": {"id": record_id} if record_id else None,
            "headers": {"content-type": "application/json"},
            "body": json.dumps(body) if body is not None else None,
            "isBase64Encoded": False,
        }

    return _build


@pytest.fixture
def parse_body() -> Callable[[dict[str, Any]], Any]:
    def _parse(response: dict[str, Any]) -> Any:
        body = response.get("body")
        return json.loads(body) if body else {}

    return _parse
