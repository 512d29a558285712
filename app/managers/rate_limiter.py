# app/managers/rate_limiter.py

"""
Login throttling with slowapi.

Only ``POST /api/auth/login`` carries a limit (``LOGIN_RATE_LIMIT``, five per
minute by default). Counters live in process memory and are keyed by client
address, so they reset on restart and are not shared between workers.
"""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.configs import file_logger
from app.utils.api_response import ApiResponse

TOO_MANY_REQUESTS = "Too many requests, please try again later"

logger = file_logger(getLogger(__name__))


def get_identifier(request: Request) -> str:
    """Bucket key for a request: the client address."""
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_identifier,
    storage_uri="memory://",
    strategy="fixed-window",
    headers_enabled=False,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Turn a tripped limit into the standard error envelope.

    slowapi's own handler is still consulted for the ``Retry-After`` value it
    computes, which is then copied onto the envelope response.

    Args:
        request: The throttled request.
        exc: ``RateLimitExceeded`` raised by the limiter.

    Returns:
        429 envelope, with ``Retry-After`` when known.
    """
    fallback = _rate_limit_exceeded_handler(request, cast(RateLimitExceeded, exc))
    retry_after = fallback.headers.get("retry-after")
    logger.warning(f"Login throttled for {get_identifier(request)} on {request.url.path}")

    response = ApiResponse.error(TOO_MANY_REQUESTS, status_code=HTTP_429_TOO_MANY_REQUESTS)
    if retry_after:
        response.headers["Retry-After"] = retry_after
    return response
