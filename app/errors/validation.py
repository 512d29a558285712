"""Framework-level errors rendered in the response envelope."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.configs import file_logger
from app.utils import ApiResponse
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


def format_validation_errors(errors: list[dict]) -> dict[str, str]:
    """
    Collapse pydantic error entries into a field -> message map.

    The first error reported for a field wins; the ``body``/``query`` prefix
    of the location is dropped.
    """
    formatted: dict[str, str] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        field = ".".join(loc) or "body"
        formatted.setdefault(field, error.get("msg", "Invalid value"))
    return formatted


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request parsing errors raised before a route handler runs.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse: 400 envelope with a per-field breakdown.
    """
    exec_error = cast(RequestValidationError, exc)
    formatted_errors = format_validation_errors(list(exec_error.errors()))

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ApiResponse.validation_error(formatted_errors)


async def http_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Render framework HTTP errors (unknown path, wrong method) as envelopes.

    Args:
        request: The incoming request.
        exc: The StarletteHTTPException raised by routing.

    Returns:
        ORJSONResponse: Envelope with the original status and headers.
    """
    http_exc = cast(StarletteHTTPException, exc)
    message = http_exc.detail if isinstance(http_exc.detail, str) else "Request failed"
    logger.info(f"{http_exc.status_code} for ip: {host(request)} at endpoint {request.url.path}")

    response = ApiResponse.error(message, status_code=http_exc.status_code)
    if http_exc.headers:
        response.headers.update(http_exc.headers)
    return response
