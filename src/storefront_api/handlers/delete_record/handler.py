"""
Lambda handler responsible for deleting products, banners and categories.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from storefront_api.core.models.resources import resolve_resource
from storefront_api.core.utils.decorators import api_gateway_handler
from storefront_api.core.utils.response import ResponseBuilder
from storefront_api.core.utils.validators import validate_request

from .models import DeleteRecordRequest
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``DELETE /{resource}/{id}`` requests.

    This function:
    - Resolves the resource type from the route
    - Validates the id path parameter
    - Deletes the record from the primary store, then the cache

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        204 No Content on success
    """
    logger.info(
        "Received record delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    resource = resolve_resource(event)
    path_params = event.get("pathParameters") or {}
    request = validate_request(DeleteRecordRequest, {"id": path_params.get("id")})

    DeleteService().delete_record(resource, request.id)

    metrics.add_dimension(name="resource", value=resource.name)
    metrics.add_metric(name="RecordDeleted", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.no_content()
