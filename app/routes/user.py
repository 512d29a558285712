# app/routes/user.py

"""
User Profile Routes.

Summary
-------
Endpoints include:
  - Get the signed-in user's profile
  - Update the signed-in user's profile and, optionally, password

The session's own user is always the target; there is no way to address
another user's profile.
"""

from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from app.configs import file_logger
from app.decorators import with_error_handling
from app.dependencies import AuthServiceDep, SessionDep, UserRepoDep, require_session
from app.errors import NotFoundError, ValidationFailedError
from app.managers.password_manager import hash_password
from app.schemas import ProfileUpdate
from app.utils import ApiResponse

router = APIRouter(prefix="/api/user", tags=["👤 Users"])

logger = file_logger(getLogger(__name__))

NOT_FOUND_MESSAGE = "User not found"


@router.get(
    "/profile",
    response_class=ORJSONResponse,
    summary="Get profile",
    description="Profile of the signed-in user. The password hash is never returned.",
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
                            "bio": None,
                            "role": "admin",
                            "status": "active",
                            "created_at": "2025-01-01T00:00:00Z",
                            "updated_at": "2025-01-01T00:00:00Z",
                        },
                        "message": "Profile retrieved",
                    },
                },
            },
        },
        401: {
            "description": "Not logged in",
            "content": {"application/json": {"example": {"success": False, "error": "Not logged in"}}},
        },
    },
    operation_id="user_profile_get",
)
@with_error_handling
async def get_profile(request: Request, session: SessionDep, repo: UserRepoDep) -> ORJSONResponse:
    """
    Get the signed-in user's profile.

    Parameters
    ----------
    request : Request
        Current request context.
    session : SessionData | None
        Current session; required.
    repo : UserRepository
        User repository.

    Returns
    -------
    ORJSONResponse
        Envelope with the profile.
    """
    active = require_session(session)

    profile = await repo.get_profile(active.user_id)
    if profile is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return ApiResponse.success(profile, "Profile retrieved")


@router.put(
    "/profile",
    response_class=ORJSONResponse,
    summary="Update profile",
    description=(
        "Update name, bio and avatar. Supplying `newPassword` also changes the "
        "password and requires `currentPassword`."
    ),
    responses={
        400: {
            "description": "Validation failed",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": "Validation failed",
                        "errors": {"currentPassword": "Current password is incorrect"},
                    },
                },
            },
        },
    },
    operation_id="user_profile_update",
)
@with_error_handling
async def update_profile(
    request: Request,
    body: ProfileUpdate,
    session: SessionDep,
    repo: UserRepoDep,
    auth_service: AuthServiceDep,
) -> ORJSONResponse:
    """
    Update the signed-in user's profile.

    Parameters
    ----------
    request : Request
        Current request context.
    body : ProfileUpdate
        Profile fields and optional password change.
    session : SessionData | None
        Current session; required.
    repo : UserRepository
        User repository.
    auth_service : AuthService
        Supplies the password comparison.

    Returns
    -------
    ORJSONResponse
        Envelope with a status message.

    Raises
    ------
    ValidationFailedError
        If the current password is missing or wrong, or the new one is too short.
    """
    active = require_session(session)

    if errors := body.field_errors():
        raise ValidationFailedError(errors)

    if body.new_password:
        current_hash = await repo.get_user_password(active.user_id)
        if current_hash is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        if not await auth_service.verify_password(body.current_password or "", current_hash):
            raise ValidationFailedError({"currentPassword": "Current password is incorrect"})

        await repo.update_password(active.user_id, await hash_password(body.new_password))
        auth_service.forget(active.email)
        logger.info(f"Password changed for user {active.user_id}")

    if fields := body.profile_fields():
        await repo.update_profile(active.user_id, fields)
        auth_service.forget(active.email)

    return ApiResponse.updated(message="Profile updated")
