"""Thin DynamoDB adapter wrapping boto3 table operations."""

import os
from collections.abc import Mapping
from typing import Any, Protocol, cast

import boto3

from storefront_api.core.utils.constants import (
    DEFAULT_AWS_REGION,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
)


class DynamoDBTable(Protocol):
    """Minimal DynamoDB Table protocol."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def delete_item(self, *, Key: dict[str, Any]) -> dict[str, Any]: ...
    def scan(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Minimal DynamoDB adapter protocol (repository-facing)."""

    def put_item(self, *, table: str, item: dict[str, Any]) -> dict[str, Any]: ...
    def get_item(self, *, table: str, key: dict[str, Any]) -> dict[str, Any]: ...
    def delete_item(self, *, table: str, key: dict[str, Any]) -> dict[str, Any]: ...
    def scan(self, *, table: str, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps the boto3 DynamoDB resource
    - Maps logical table names to physical ones taken from the environment
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, table_env: Mapping[str, str]) -> None:
        """Resolve every logical table from its environment variable.

        Args:
            table_env: Logical table name -> environment variable holding
                the physical DynamoDB table name
        """
        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION, DEFAULT_AWS_REGION),
        )

        self.tables: dict[str, DynamoDBTable] = {}

        for logical_name, env_name in table_env.items():
            table_name = os.getenv(env_name)
            if not table_name:
                raise RuntimeError(f"{env_name} environment variable is not set")

            self.tables[logical_name] = cast(DynamoDBTable, dynamodb.Table(table_name))

    def _table(self, table: str) -> DynamoDBTable:
        try:
            return self.tables[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    def put_item(self, *, table: str, item: dict[str, Any]) -> dict[str, Any]:
        """Insert or fully replace an item.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._table(table).put_item(Item=item)

    def get_item(self, *, table: str, key: dict[str, Any]) -> dict[str, Any]:
        """Retrieve item by key with a strongly consistent read.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._table(table).get_item(Key=key, ConsistentRead=True)

    def delete_item(self, *, table: str, key: dict[str, Any]) -> dict[str, Any]:
        """Delete item by key. Deleting a missing key is not an error.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._table(table).delete_item(Key=key)

    def scan(self, *, table: str, **kwargs: Any) -> dict[str, Any]:
        """Execute a single scan page.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._table(table).scan(**kwargs)
