"""Request validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from storefront_api.core.models.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[Any]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    - internal exception details
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        # Remove noisy prefixes
        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        if "field required" in msg_lower:
            msg = "This field is required"
        elif "valid number" in msg_lower or "valid integer" in msg_lower:
            msg = "Must be a number"
        elif "finite number" in msg_lower:
            msg = "Must be a finite number"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Input data to validate

    Returns:
        The validated model instance

    Raises:
        ValidationError: With sanitized field errors in ``details``
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(
            message="Invalid request payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
        ) from exc
