"""
API Gateway proxy responses for the catalog handlers.

Every response is JSON with CORS headers. Record bodies may contain
``Decimal`` values read back from DynamoDB; they are rendered as numbers.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from storefront_api.core.models.errors import StorefrontError
from storefront_api.core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    EXPOSE_HEADERS,
)
from storefront_api.core.utils.serialization import json_default
from storefront_api.core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }

    @classmethod
    def headers(cls, cors_origin: str | None = None) -> dict[str, str]:
        headers = dict(cls.DEFAULT_HEADERS)

        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin

        return headers

    @classmethod
    def json_response(
        cls,
        status: HTTPStatus,
        payload: JsonDict,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return {
            "statusCode": status.value,
            "headers": cls.headers(cors_origin),
            "body": json.dumps(payload, default=json_default),
        }

    @classmethod
    def ok(cls, body: JsonDict, *, cors_origin: str | None = None) -> JsonDict:
        """200 with ``body`` as the JSON document (a record or a listing)."""
        return cls.json_response(HTTPStatus.OK, body, cors_origin=cors_origin)

    @classmethod
    def no_content(cls, *, cors_origin: str | None = None) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": cls.headers(cors_origin),
            "body": "",
        }

    @classmethod
    def error(
        cls,
        status: HTTPStatus,
        message: str,
        *,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Error envelope: ``error`` code, ``message``, ``timestamp`` and optional extras.

        ``error`` defaults to the status name (``NOT_FOUND``).
        """
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }

        if details:
            payload["details"] = details

        if request_id:
            payload["request_id"] = request_id

        return cls.json_response(status, payload, cors_origin=cors_origin)

    @classmethod
    def from_error(
        cls,
        exc: StorefrontError,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Render a domain error with its own status and code.

        Details are only exposed for client errors; server-side details
        (table names, storage keys) stay in the logs.
        """
        return cls.error(
            exc.http_status,
            exc.message,
            error=exc.error_code,
            details=exc.details if exc.is_client_error else None,
            request_id=request_id,
            cors_origin=cors_origin,
        )
