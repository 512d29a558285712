# app/decorators/error_handling.py
"""Error classifier wrapping every route handler."""

from collections.abc import Awaitable, Callable
from functools import wraps
from logging import getLogger
from typing import Any

from fastapi import Request
from fastapi.responses import Response
from sqlalchemy.exc import IntegrityError
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR

from app.configs import file_logger
from app.configs.settings import DEFAULT_ERROR_MESSAGE
from app.errors import BaseAppError, ValidationFailedError
from app.errors.database import integrity_kind
from app.utils import ApiResponse
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))

type Handler = Callable[..., Awaitable[Response]]


def classify_exception(exc: Exception) -> Response:
    """
    Map an exception to an envelope response.

    Args:
        exc: Exception raised by a route handler

    Returns:
        Response: Error envelope with the matching status code
    """
    if isinstance(exc, ValidationFailedError):
        return ApiResponse.validation_error(exc.errors, exc.detail)

    if isinstance(exc, BaseAppError):
        return ApiResponse.error(exc.detail, exc.status_code)

    if isinstance(exc, IntegrityError):
        kind = integrity_kind(exc)
        if kind == "duplicate":
            return ApiResponse.conflict("Resource already exists")
        if kind == "foreign_key":
            return ApiResponse.validation_error(
                {"reference": "Referenced resource does not exist"},
                "Referenced resource does not exist",
            )

    message = str(exc)
    if "password" in message.lower():
        return ApiResponse.error("Invalid email or password", HTTP_401_UNAUTHORIZED)

    status_code = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    if not isinstance(status_code, int):
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
    return ApiResponse.error(message or DEFAULT_ERROR_MESSAGE, status_code)


def _find_request(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Request | None:
    for value in (*args, *kwargs.values()):
        if isinstance(value, Request):
            return value
    return None


def with_error_handling(handler: Handler) -> Handler:
    """
    Wrap a route handler so that every exception becomes an envelope response.

    This is the only place where failures are translated into HTTP status
    codes; repositories and services let their errors propagate.

    Args:
        handler: Async route handler returning a response

    Returns:
        Handler: Wrapped handler with the same signature
    """

    @wraps(handler)
    async def wrapper(*args: Any, **kwargs: Any) -> Response:  # noqa: ANN401
        try:
            return await handler(*args, **kwargs)
        except Exception as exc:
            request = _find_request(args, kwargs)
            where = (
                f"{request.method} {request.url.path} for ip: {host(request)}"
                if request
                else handler.__name__
            )
            if isinstance(exc, BaseAppError):
                logger.warning(f"{exc.detail} ({exc.status_code}) at {where}")
            else:
                logger.exception(f"API error at {where}")
            return classify_exception(exc)

    return wrapper
