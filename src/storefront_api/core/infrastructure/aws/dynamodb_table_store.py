"""DynamoDB-backed implementation of PrimaryStoreRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from storefront_api.core.infrastructure.adapters.dynamodb_adapter import (
    DynamoDBAdapterProtocol,
)
from storefront_api.core.models.errors import PrimaryWriteError
from storefront_api.core.repositories.primary_store import PrimaryStoreRepository
from storefront_api.core.utils.constants import (
    ERROR_CODE_PRIMARY_DELETE_FAILED,
    ERROR_CODE_PRIMARY_READ_FAILED,
    ERROR_CODE_PRIMARY_SCAN_FAILED,
    ERROR_CODE_PRIMARY_WRITE_FAILED,
)
from storefront_api.core.utils.serialization import from_dynamodb_item, to_dynamodb_item

Record = dict[str, Any]

logger = Logger(UTC=True)


class DynamoDBTableStore(PrimaryStoreRepository):
    """DynamoDB-backed record storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol) -> None:
        """Initialize with DynamoDB adapter."""
        self._db = adapter

    def put_record(self, *, table: str, record: Record) -> None:
        """Write a record, replacing any existing item with the same id.

        Raises:
            ValueError: If the record has no non-empty string 'id'
            PrimaryWriteError: If the write fails
        """
        record_id = record.get("id")

        if not record_id or not isinstance(record_id, str) or not record_id.strip():
            raise ValueError("record must contain non-empty 'id' (string)")

        logger.debug("Writing record", extra={"table": table, "id": record_id})

        try:
            self._db.put_item(table=table, item=to_dynamodb_item(record))
            logger.info("Record written", extra={"table": table, "id": record_id})

        except ClientError as exc:
            logger.error(
                "DynamoDB put_item failed",
                extra={"table": table, "id": record_id},
            )
            raise PrimaryWriteError(
                message="Unable to save record at this time",
                error_code=ERROR_CODE_PRIMARY_WRITE_FAILED,
                details={"table": table, "id": record_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error writing record")
            raise PrimaryWriteError(
                message="Unable to save record at this time",
                error_code=ERROR_CODE_PRIMARY_WRITE_FAILED,
                details={"table": table, "id": record_id},
            ) from exc

    def get_record(self, *, table: str, record_id: str) -> Record | None:
        """Fetch a single record.

        Raises:
            PrimaryWriteError: If the read fails
        """
        logger.debug("Fetching record", extra={"table": table, "id": record_id})

        try:
            response = self._db.get_item(table=table, key={"id": record_id})
        except ClientError as exc:
            logger.error(
                "DynamoDB get_item failed",
                extra={"table": table, "id": record_id},
            )
            raise PrimaryWriteError(
                message="Unable to retrieve record",
                error_code=ERROR_CODE_PRIMARY_READ_FAILED,
                details={"table": table, "id": record_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error fetching record")
            raise PrimaryWriteError(
                message="Unable to retrieve record",
                error_code=ERROR_CODE_PRIMARY_READ_FAILED,
                details={"table": table, "id": record_id},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        if not isinstance(item, dict):
            raise PrimaryWriteError(
                message="Invalid record format",
                error_code=ERROR_CODE_PRIMARY_READ_FAILED,
                details={"table": table, "id": record_id},
            )

        return from_dynamodb_item(item)

    def delete_record(self, *, table: str, record_id: str) -> None:
        """Remove a record.

        Raises:
            PrimaryWriteError: If deletion fails
        """
        logger.debug("Removing record", extra={"table": table, "id": record_id})

        try:
            self._db.delete_item(table=table, key={"id": record_id})
            logger.info("Record removed", extra={"table": table, "id": record_id})

        except ClientError as exc:
            logger.error(
                "DynamoDB delete_item failed",
                extra={"table": table, "id": record_id},
            )
            raise PrimaryWriteError(
                message="Unable to delete record",
                error_code=ERROR_CODE_PRIMARY_DELETE_FAILED,
                details={"table": table, "id": record_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error removing record")
            raise PrimaryWriteError(
                message="Unable to delete record",
                error_code=ERROR_CODE_PRIMARY_DELETE_FAILED,
                details={"table": table, "id": record_id},
            ) from exc

    def scan_records(self, *, table: str) -> list[Record]:
        """Return every record in ``table``.

        NOTE:
        - The scan follows LastEvaluatedKey until DynamoDB reports no more
          pages; results are not paginated for the caller.
        """
        logger.debug("Scanning records", extra={"table": table})

        items: list[Record] = []
        scan_kwargs: dict[str, Any] = {}

        try:
            while True:
                response = self._db.scan(table=table, **scan_kwargs)
                page_items = response.get("Items", [])

                if not isinstance(page_items, list):
                    raise PrimaryWriteError(
                        message="Invalid scan response from DynamoDB",
                        error_code=ERROR_CODE_PRIMARY_SCAN_FAILED,
                        details={"table": table},
                    )

                items.extend(from_dynamodb_item(item) for item in page_items)

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break

                scan_kwargs["ExclusiveStartKey"] = last_evaluated_key

        except PrimaryWriteError:
            raise

        except ClientError as exc:
            logger.error("DynamoDB scan failed", extra={"table": table})
            raise PrimaryWriteError(
                message="Unable to list records",
                error_code=ERROR_CODE_PRIMARY_SCAN_FAILED,
                details={"table": table},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error scanning records")
            raise PrimaryWriteError(
                message="Unable to list records",
                error_code=ERROR_CODE_PRIMARY_SCAN_FAILED,
                details={"table": table},
            ) from exc

        logger.info("Records listed", extra={"table": table, "count": len(items)})
        return items
