"""
Error handling shared by the API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger

from storefront_api.core.models.errors import StorefrontError
from storefront_api.core.utils.response import ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]

# Messages starting with these are already fit for clients
_CLIENT_SAFE_PREFIXES = (
    "Invalid",
    "Missing",
    "Required",
    "Must",
    "Cannot",
    "Unable to",
    "Image",
    "File",
)

# Built-in failures that are not the client's fault, in match order
_SERVICE_FAILURES: tuple[tuple[type[Exception], HTTPStatus, str], ...] = (
    (
        PermissionError,
        HTTPStatus.FORBIDDEN,
        "You don't have permission to perform this action.",
    ),
    (
        TimeoutError,
        HTTPStatus.GATEWAY_TIMEOUT,
        "The request took too long to process. Please try again.",
    ),
    (
        ConnectionError,
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Unable to connect to required services. Please try again later.",
    ),
)

_UNEXPECTED_MESSAGE = (
    "We're experiencing technical difficulties. Please try again in a few moments."
)


def _client_message(exc: Exception) -> str:
    """Message for a bad-input exception that is not a domain error."""
    text = str(exc)

    if text and text.startswith(_CLIENT_SAFE_PREFIXES):
        return text

    if isinstance(exc, ValueError):
        return "The provided data is invalid. Please check your input and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "A required field is missing. Please ensure all required fields are provided."

    return "The data format is incorrect. Please check the request format."


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    server_side: bool,
) -> None:
    log_extra: dict[str, Any] = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if isinstance(exc, StorefrontError):
        log_extra["error_code"] = exc.error_code
        log_extra["details"] = exc.details

    if server_side:
        logger.exception(message, extra=log_extra)
    else:
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - CORS preflight (OPTIONS) responses
    - Domain errors rendered with their own status and error code
    - Built-in exceptions mapped to 400/403/503/504, anything else to 500

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"products": []})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return {
                "statusCode": HTTPStatus.NO_CONTENT.value,
                "headers": ResponseBuilder.headers(cors_origin),
                "body": "",
            }

        request_id = getattr(context, "aws_request_id", None)
        handler_name = func.__name__

        try:
            return func(event, context)

        except StorefrontError as exc:
            _log_error(
                "Request rejected" if exc.is_client_error else "Request failed",
                handler_name=handler_name,
                request_id=request_id,
                exc=exc,
                server_side=not exc.is_client_error,
            )
            return ResponseBuilder.from_error(
                exc, request_id=request_id, cors_origin=cors_origin
            )

        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            _log_error(
                "Invalid request data",
                handler_name=handler_name,
                request_id=request_id,
                exc=exc,
                server_side=False,
            )
            return ResponseBuilder.error(
                HTTPStatus.BAD_REQUEST,
                _client_message(exc),
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            status, message = HTTPStatus.INTERNAL_SERVER_ERROR, _UNEXPECTED_MESSAGE

            for exc_type, mapped_status, mapped_message in _SERVICE_FAILURES:
                if isinstance(exc, exc_type):
                    status, message = mapped_status, mapped_message
                    break

            _log_error(
                "Unexpected error in handler",
                handler_name=handler_name,
                request_id=request_id,
                exc=exc,
                server_side=status != HTTPStatus.FORBIDDEN,
            )
            return ResponseBuilder.error(
                status,
                message,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
