"""
Lambda handler responsible for updating products, banners and categories.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from storefront_api.core.models.resources import resolve_resource
from storefront_api.core.utils.constants import IMAGE_FORM_FIELD
from storefront_api.core.utils.decorators import api_gateway_handler
from storefront_api.core.utils.multipart import parse_form
from storefront_api.core.utils.response import ResponseBuilder
from storefront_api.core.utils.validators import validate_request

from .models import UpdateRecordRequest
from .service import UpdateService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``PUT /{resource}/{id}`` requests.

    The body is a multipart form (or JSON object) carrying the fields to
    change and, optionally, a replacement ``image`` file.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the updated record
    """
    logger.info(
        "Received record update request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    resource = resolve_resource(event)
    path_params = event.get("pathParameters") or {}
    request = validate_request(UpdateRecordRequest, {"id": path_params.get("id")})

    form = parse_form(event)
    upload = form.files.get(IMAGE_FORM_FIELD)

    item = UpdateService().update_record(
        resource,
        request.id,
        fields=form.fields,
        image=upload.data if upload and upload.data else None,
    )

    metrics.add_dimension(name="resource", value=resource.name)
    metrics.add_metric(name="RecordUpdated", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.ok(item)
