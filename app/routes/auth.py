# app/routes/auth.py

"""
Authentication Routes.

Summary
-------
Endpoints include:
  - Login: exchange email and password for a session cookie
  - Logout: clear the session cookie
  - Session: read the current session

The session token lives in an HTTP-only cookie and expires a fixed time after
login; activity does not extend it.
"""

from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from app.configs import file_logger, settings
from app.decorators import with_error_handling
from app.dependencies import AuthServiceDep, SessionDep, require_session
from app.errors import ForbiddenError, UnauthorizedError
from app.managers.rate_limiter import limiter
from app.managers.token_manager import session_lifetime
from app.schemas.auth import AuthStatus, LoginRequest
from app.utils import ApiResponse
from app.utils.helpers import host

router = APIRouter(prefix="/api/auth", tags=["🔐 Auth"])

logger = file_logger(getLogger(__name__))

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def set_session_cookie(response: ORJSONResponse, token: str) -> None:
    """Attach the session cookie to a response."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(session_lifetime().total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT != "development" and settings.ENVIRONMENT != "test",
        path="/",
    )


@router.post(
    "/login",
    response_class=ORJSONResponse,
    summary="Log in",
    description="Authenticate with email and password and receive a session cookie.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "id": 1,
                            "email": "admin@example.com",
                            "name": "Admin",
                            "avatar": None,
                            "role": "admin",
                        },
                        "message": "Logged in",
                    },
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": INVALID_CREDENTIALS_MESSAGE},
                },
            },
        },
        403: {
            "description": "Account banned",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "This account has been banned"},
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": "Too many requests, please try again later",
                    },
                },
            },
        },
    },
    operation_id="auth_login",
)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
@with_error_handling
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: AuthServiceDep,
) -> ORJSONResponse:
    """
    Log in with email and password.

    Parameters
    ----------
    request : Request
        Current request context.
    body : LoginRequest
        Email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    ORJSONResponse
        Envelope with the identity; the session token is set as a cookie.

    Raises
    ------
    UnauthorizedError
        If the credentials are missing or wrong.
    ForbiddenError
        If the account is banned.

    Notes
    -----
    Rate limited per client address.
    """
    result = await auth_service.authorize(body.email, body.password)

    if result.status is AuthStatus.BANNED:
        raise ForbiddenError("This account has been banned")
    if not result.ok or result.identity is None:
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    response = ApiResponse.success(result.identity, "Logged in")
    set_session_cookie(response, auth_service.create_session(result.identity))
    logger.info(f"User {result.identity.id} logged in from ip: {host(request)}")
    return response


@router.post(
    "/logout",
    response_class=ORJSONResponse,
    summary="Log out",
    description="Clear the session cookie.",
    operation_id="auth_logout",
)
@with_error_handling
async def logout(request: Request) -> ORJSONResponse:
    """
    Log out.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Envelope with a status message; the cookie is deleted.
    """
    response = ApiResponse.success(message="Logged out")
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return response


@router.get(
    "/session",
    response_class=ORJSONResponse,
    summary="Current session",
    description="Return the session carried by the request cookie.",
    operation_id="auth_session",
)
@with_error_handling
async def current_session(request: Request, session: SessionDep) -> ORJSONResponse:
    """
    Read the current session.

    Parameters
    ----------
    request : Request
        Current request context.
    session : SessionData | None
        Session decoded from the cookie.

    Returns
    -------
    ORJSONResponse
        Envelope with the session data, or 401 without a session.
    """
    return ApiResponse.success(require_session(session), "Session retrieved")
