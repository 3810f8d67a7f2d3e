"""
Lambda handler responsible for listing products, banners or categories.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from storefront_api.core.models.resources import resolve_resource
from storefront_api.core.utils.decorators import api_gateway_handler
from storefront_api.core.utils.response import ResponseBuilder

from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``GET /{resource}`` requests.

    Returns every stored record of the addressed resource type, unpaginated,
    under a key named after the resource (``{"products": [...]}``).

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received record list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    resource = resolve_resource(event)
    records = ListService().list_records(resource)

    return ResponseBuilder.ok({resource.name: records})
