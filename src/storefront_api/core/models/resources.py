"""Registry of the catalog resource types exposed over HTTP."""

from dataclasses import dataclass
from typing import Any

from storefront_api.core.models.errors import NotFoundError
from storefront_api.core.models.records import (
    Banner,
    BannerChanges,
    CatalogRecord,
    Category,
    CategoryChanges,
    Product,
    ProductChanges,
)
from storefront_api.core.utils.constants import (
    ENV_BANNERS_TABLE_NAME,
    ENV_CATEGORIES_TABLE_NAME,
    ENV_PRODUCTS_TABLE_NAME,
)


@dataclass(frozen=True)
class Resource:
    """Static description of one resource type.

    ``name`` is the plural path segment and response key, ``singular`` the
    cache key namespace, and ``table`` the logical table name resolved to a
    physical DynamoDB table through ``table_env``.
    """

    name: str
    singular: str
    table: str
    table_env: str
    record_model: type[CatalogRecord]
    changes_model: type[Any]

    def cache_key(self, record_id: str) -> str:
        return f"{self.singular}:{record_id}"


PRODUCTS = Resource(
    name="products",
    singular="product",
    table="products",
    table_env=ENV_PRODUCTS_TABLE_NAME,
    record_model=Product,
    changes_model=ProductChanges,
)

BANNERS = Resource(
    name="banners",
    singular="banner",
    table="banners",
    table_env=ENV_BANNERS_TABLE_NAME,
    record_model=Banner,
    changes_model=BannerChanges,
)

CATEGORIES = Resource(
    name="categories",
    singular="category",
    table="categories",
    table_env=ENV_CATEGORIES_TABLE_NAME,
    record_model=Category,
    changes_model=CategoryChanges,
)

RESOURCES: dict[str, Resource] = {r.name: r for r in (PRODUCTS, BANNERS, CATEGORIES)}


def resolve_resource(event: dict[str, Any]) -> Resource:
    """Pick the resource addressed by an API Gateway proxy event.

    Uses the route template (``/products/{id}``) when present, falling back
    to the concrete request path.

    Raises:
        NotFoundError: If the first path segment names no known resource
    """
    path = event.get("resource") or event.get("path") or ""
    segment = path.strip("/").split("/", 1)[0]

    resource = RESOURCES.get(segment)
    if resource is None:
        raise NotFoundError(
            message="Unknown resource",
            details={"path": path},
        )

    return resource
