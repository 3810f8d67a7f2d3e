"""Construction of the store clients shared by every handler.

The context is built once per Lambda execution environment, on first use,
and passed explicitly to the services. Tests build their own context (or
clear the cached one) to substitute fakes.
"""

from dataclasses import dataclass, field
from functools import lru_cache

from storefront_api.core.images.variant_generator import ImageVariantGenerator
from storefront_api.core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter
from storefront_api.core.infrastructure.adapters.redis_adapter import RedisAdapter
from storefront_api.core.infrastructure.adapters.s3_adapter import S3Adapter
from storefront_api.core.infrastructure.aws.dynamodb_table_store import DynamoDBTableStore
from storefront_api.core.infrastructure.aws.s3_object_storage import S3ObjectStorage
from storefront_api.core.infrastructure.cache.redis_cache import RedisCache
from storefront_api.core.models.resources import RESOURCES
from storefront_api.core.repositories.cache_store import CacheRepository
from storefront_api.core.repositories.object_storage import ObjectStorageRepository
from storefront_api.core.repositories.primary_store import PrimaryStoreRepository
from storefront_api.core.write_through import WriteThroughStore


@dataclass
class StorageContext:
    """The primary store, cache and object store used by the services."""

    primary: PrimaryStoreRepository
    cache: CacheRepository
    objects: ObjectStorageRepository
    records: WriteThroughStore = field(init=False)
    images: ImageVariantGenerator = field(init=False)

    def __post_init__(self) -> None:
        self.records = WriteThroughStore(self.primary, self.cache)
        self.images = ImageVariantGenerator(self.objects)

    @classmethod
    def from_environment(cls) -> "StorageContext":
        """Build AWS and Redis backed stores from environment configuration."""
        table_env = {resource.table: resource.table_env for resource in RESOURCES.values()}

        return cls(
            primary=DynamoDBTableStore(DynamoDBAdapter(table_env)),
            cache=RedisCache(RedisAdapter()),
            objects=S3ObjectStorage(S3Adapter()),
        )


@lru_cache(maxsize=1)
def get_storage_context() -> StorageContext:
    """Return the process-wide storage context, building it on first call."""
    return StorageContext.from_environment()
