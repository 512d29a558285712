"""
Uniform response envelope.

Every API response has the shape ``{success, data?, message?, error?, errors?}``.
Keys without a value are omitted from the body.
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import ORJSONResponse
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ApiResponse:
    """Factory for envelope responses."""

    @staticmethod
    def success(
        data: Any = None,  # noqa: ANN401
        message: str = "OK",
        status_code: int = HTTP_200_OK,
    ) -> ORJSONResponse:
        """
        Build a success envelope.

        Args:
            data: Payload; omitted when ``None``
            message: Human-readable message
            status_code: HTTP status code

        Returns:
            ORJSONResponse: ``{success: true, data?, message}``
        """
        content: dict[str, Any] = {"success": True}
        if data is not None:
            content["data"] = jsonable_encoder(data)
        content["message"] = message
        return ORJSONResponse(content=content, status_code=status_code)

    @staticmethod
    def error(
        message: str,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        errors: dict[str, str] | None = None,
    ) -> ORJSONResponse:
        """
        Build an error envelope.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            errors: Optional field -> message map

        Returns:
            ORJSONResponse: ``{success: false, error, errors?}``
        """
        content: dict[str, Any] = {"success": False, "error": message}
        if errors:
            content["errors"] = errors
        return ORJSONResponse(content=content, status_code=status_code)

    @classmethod
    def created(cls, data: Any, message: str = "Created") -> ORJSONResponse:  # noqa: ANN401
        return cls.success(data, message, HTTP_201_CREATED)

    @classmethod
    def updated(cls, data: Any = None, message: str = "Updated") -> ORJSONResponse:  # noqa: ANN401
        return cls.success(data, message, HTTP_200_OK)

    @classmethod
    def deleted(cls, message: str = "Deleted") -> ORJSONResponse:
        return cls.success(None, message, HTTP_200_OK)

    @classmethod
    def not_found(cls, message: str = "Resource not found") -> ORJSONResponse:
        return cls.error(message, HTTP_404_NOT_FOUND)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> ORJSONResponse:
        return cls.error(message, HTTP_401_UNAUTHORIZED)

    @classmethod
    def forbidden(cls, message: str = "Forbidden") -> ORJSONResponse:
        return cls.error(message, HTTP_403_FORBIDDEN)

    @classmethod
    def validation_error(
        cls,
        errors: dict[str, str],
        message: str = "Validation failed",
    ) -> ORJSONResponse:
        return cls.error(message, HTTP_400_BAD_REQUEST, errors)

    @classmethod
    def conflict(cls, message: str = "Resource already exists") -> ORJSONResponse:
        return cls.error(message, HTTP_409_CONFLICT)
