# tests/utils/test_api_response.py
"""Tests for app/utils/api_response.py module."""

from datetime import UTC, datetime

from orjson import loads
from pydantic import BaseModel

from app.utils import ApiResponse


class Sample(BaseModel):
    id: int
    created_at: datetime


class TestSuccessEnvelope:
    """Tests for success envelopes."""

    def test_with_data(self) -> None:
        response = ApiResponse.success({"id": 1}, "Done")

        assert response.status_code == 200
        assert loads(response.body) == {"success": True, "data": {"id": 1}, "message": "Done"}

    def test_without_data_omits_key(self) -> None:
        body = loads(ApiResponse.success(message="Logged out").body)
        assert body == {"success": True, "message": "Logged out"}

    def test_encodes_models(self) -> None:
        sample = Sample(id=1, created_at=datetime(2026, 1, 1, tzinfo=UTC))

        body = loads(ApiResponse.success([sample]).body)

        assert body["data"] == [{"id": 1, "created_at": "2026-01-01T00:00:00Z"}]

    def test_empty_list_is_kept(self) -> None:
        assert loads(ApiResponse.success([]).body)["data"] == []

    def test_created_updated_deleted(self) -> None:
        assert ApiResponse.created({"id": 1}).status_code == 201
        assert ApiResponse.updated().status_code == 200
        assert loads(ApiResponse.deleted("Gone").body) == {"success": True, "message": "Gone"}


class TestErrorEnvelope:
    """Tests for error envelopes."""

    def test_error_without_field_map(self) -> None:
        response = ApiResponse.error("Boom")

        assert response.status_code == 500
        assert loads(response.body) == {"success": False, "error": "Boom"}

    def test_shortcuts(self) -> None:
        assert ApiResponse.not_found().status_code == 404
        assert ApiResponse.unauthorized().status_code == 401
        assert ApiResponse.forbidden().status_code == 403
        assert ApiResponse.conflict().status_code == 409

    def test_validation_error(self) -> None:
        response = ApiResponse.validation_error({"email": "Invalid email format"})

        assert response.status_code == 400
        assert loads(response.body) == {
            "success": False,
            "error": "Validation failed",
            "errors": {"email": "Invalid email format"},
        }
