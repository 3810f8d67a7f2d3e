"""Parsing of API Gateway request bodies into form fields and uploaded files.

API Gateway hands ``multipart/form-data`` bodies to Lambda base64-encoded
(``isBase64Encoded: true``); JSON bodies arrive as plain text.
"""

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any

from aws_lambda_powertools import Logger
from requests_toolbelt.multipart.decoder import (
    ImproperBodyPartContentException,
    MultipartDecoder,
    NonMultipartContentTypeException,
)

from storefront_api.core.models.errors import ValidationError
from storefront_api.core.utils.constants import (
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_INVALID_BODY,
    MAX_FILE_SIZE,
    get_max_file_size_mb,
)

logger = Logger(UTC=True)


@dataclass(frozen=True)
class UploadedFile:
    """A single file part of a multipart form."""

    filename: str | None
    content_type: str | None
    data: bytes


@dataclass
class FormData:
    """Text fields and files extracted from a request body."""

    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, UploadedFile] = field(default_factory=dict)


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup on an API Gateway event."""
    headers = event.get("headers") or {}
    wanted = name.lower()

    for key, value in headers.items():
        if key.lower() == wanted:
            return str(value)

    return None


def _raw_body(event: dict[str, Any]) -> bytes:
    body = event.get("body") or ""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(
                message="Invalid base64 encoded request body",
                error_code=ERROR_CODE_INVALID_BODY,
            ) from exc

    return body.encode("utf-8") if isinstance(body, str) else body


def _parse_disposition(value: str) -> dict[str, str]:
    """Split a Content-Disposition header into its parameters."""
    params: dict[str, str] = {}

    for segment in value.split(";")[1:]:
        key, sep, raw = segment.strip().partition("=")
        if sep:
            params[key.lower()] = raw.strip().strip('"')

    return params


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    try:
        decoder = MultipartDecoder(body, content_type)
    except (ImproperBodyPartContentException, NonMultipartContentTypeException) as exc:
        raise ValidationError(
            message="Invalid multipart form body",
            error_code=ERROR_CODE_INVALID_BODY,
        ) from exc

    form = FormData()

    for part in decoder.parts:
        disposition = part.headers.get(b"Content-Disposition", b"").decode("utf-8")
        params = _parse_disposition(disposition)
        name = params.get("name")

        if not name:
            continue

        if "filename" in params:
            if len(part.content) > MAX_FILE_SIZE:
                raise ValidationError(
                    message=f"File size exceeds {get_max_file_size_mb()}MB limit",
                    error_code=ERROR_CODE_FILE_SIZE_EXCEEDED,
                    details={"field": name, "size": len(part.content)},
                )

            part_type = part.headers.get(b"Content-Type")
            form.files[name] = UploadedFile(
                filename=params["filename"] or None,
                content_type=part_type.decode("utf-8") if part_type else None,
                data=part.content,
            )
        else:
            form.fields[name] = part.text

    return form


def parse_form(event: dict[str, Any]) -> FormData:
    """Extract form fields and files from an API Gateway proxy event.

    Supports ``multipart/form-data`` and ``application/json`` bodies. An
    empty body yields an empty form.

    Raises:
        ValidationError: If the body cannot be decoded
    """
    content_type = get_header(event, "Content-Type") or ""
    body = _raw_body(event)

    if not body:
        return FormData()

    if content_type.lower().startswith("multipart/form-data"):
        form = _parse_multipart(body, content_type)
    else:
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError(
                message="Invalid JSON body",
                error_code=ERROR_CODE_INVALID_BODY,
            ) from exc

        if not isinstance(data, dict):
            raise ValidationError(
                message="Invalid JSON body, expected an object",
                error_code=ERROR_CODE_INVALID_BODY,
            )

        form = FormData(fields=data)

    logger.debug(
        "Parsed request form",
        extra={"fields": sorted(form.fields), "files": sorted(form.files)},
    )
    return form
