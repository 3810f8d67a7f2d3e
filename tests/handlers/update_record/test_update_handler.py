from http import HTTPStatus

import pytest

from storefront_api.core.models.resources import CATEGORIES
from storefront_api.handlers.create_record.service import CreateService
from storefront_api.handlers.update_record.handler import handler


@pytest.fixture
def category(storage_context, sample_png) -> dict:
    return CreateService(storage_context).create_record(
        CATEGORIES, fields={"name": "Shoes", "priority": "1"}, image=sample_png
    )


class TestUpdateHandler:
    def test_multipart_update(
        self, category, multipart_event, lambda_context, parse_body
    ) -> None:
        event = multipart_event(
            "PUT", "/categories/{id}", {"priority": "4"}, record_id=category["id"]
        )

        resp = handler(event, lambda_context)
        body = parse_body(resp)

        assert resp["statusCode"] == HTTPStatus.OK
        assert body["priority"] == 4
        assert body["image"] == category["image"]

    def test_json_update(self, category, json_event, lambda_context, parse_body) -> None:
        event = json_event(
            "PUT", "/categories/{id}", {"isActive": False}, record_id=category["id"]
        )

        body = parse_body(handler(event, lambda_context))

        assert body["isActive"] is False
        assert body["name"] == "Shoes"

    def test_update_with_image(
        self, category, multipart_event, lambda_context, parse_body, make_image
    ) -> None:
        event = multipart_event(
            "PUT",
            "/categories/{id}",
            {"description": "All shoes"},
            image=make_image((300, 200), fmt="JPEG"),
            record_id=category["id"],
        )

        resp = handler(event, lambda_context)

        assert resp["statusCode"] == HTTPStatus.OK
        assert parse_body(resp)["description"] == "All shoes"

    def test_missing_record_returns_404(
        self, storage_context, json_event, lambda_context, parse_body
    ) -> None:
        event = json_event("PUT", "/products/{id}", {"quantity": "1"}, record_id="missing")

        resp = handler(event, lambda_context)

        assert resp["statusCode"] == HTTPStatus.NOT_FOUND
        assert parse_body(resp)["error"] == "RECORD_NOT_FOUND"

    def test_missing_id_returns_400(self, storage_context, json_event, lambda_context) -> None:
        resp = handler(json_event("PUT", "/products/{id}", {"quantity": "1"}), lambda_context)

        assert resp["statusCode"] == HTTPStatus.BAD_REQUEST

    def test_invalid_json_returns_400(
        self, category, json_event, lambda_context, parse_body
    ) -> None:
        event = json_event("PUT", "/categories/{id}", record_id=category["id"])
        event["body"] = "{not json"

        resp = handler(event, lambda_context)

        assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
        assert parse_body(resp)["error"] == "INVALID_BODY"
