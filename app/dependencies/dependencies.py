# app/dependencies/dependencies.py

"""Application dependencies: repositories, caches and the session cookie."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import settings
from app.db import get_session
from app.errors import ForbiddenError, UnauthorizedError
from app.managers.token_manager import decode_session_token
from app.managers.ttl_cache import TTLCache
from app.repositories import (
    CategoryRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
)
from app.schemas.auth import AuthUser, SessionData
from app.schemas.post import PostDetail, PostSummary
from app.services import AuthService

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)

type PostsCache = TTLCache[list[PostSummary] | list[PostDetail]]


def get_session_data(
    token: Annotated[str | None, Depends(session_cookie)],
) -> SessionData | None:
    """
    Decode the session cookie, if any.

    Never raises: handlers decide whether a missing session is an error so
    that the refusal goes through their error classifier.

    Parameters
    ----------
    token : str | None
        Raw session cookie value.

    Returns
    -------
    SessionData | None
        Session if the cookie holds a valid, unexpired token.
    """
    return decode_session_token(token)


SessionDep = Annotated[SessionData | None, Depends(get_session_data)]


def require_session(session: SessionData | None) -> SessionData:
    """
    Return the session or raise when there is none.

    Raises
    ------
    UnauthorizedError
        If the request carries no valid session.
    """
    if session is None:
        raise UnauthorizedError("Not logged in")
    return session


def require_admin(session: SessionData | None) -> SessionData:
    """
    Return the session if it belongs to an administrator.

    Raises
    ------
    UnauthorizedError
        If the request carries no valid session.
    ForbiddenError
        If the session's role is not admin.
    """
    active = require_session(session)
    if not active.is_admin:
        raise ForbiddenError("Admin access required")
    return active


def get_posts_cache(request: Request) -> PostsCache:
    """Resolve the post listing cache owned by the application."""
    return request.app.state.posts_cache


def get_identity_cache(request: Request) -> TTLCache[AuthUser]:
    """Resolve the identity cache owned by the application."""
    return request.app.state.identity_cache


PostsCacheDep = Annotated[PostsCache, Depends(get_posts_cache)]


def get_post_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> PostRepository:
    """
    Resolve the `PostRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    PostRepository
        Repository instance bound to the session.
    """
    return PostRepository(session)


def get_category_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryRepository:
    return CategoryRepository(session)


def get_comment_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CommentRepository:
    return CommentRepository(session)


def get_user_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepository:
    return UserRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def get_auth_service(
    user_repo: UserRepoDep,
    identity_cache: Annotated[TTLCache[AuthUser], Depends(get_identity_cache)],
) -> AuthService:
    """
    Dependency to get AuthService wired to the shared identity cache.

    Parameters
    ----------
    user_repo : UserRepository
        Repository bound to the request's database session.
    identity_cache : TTLCache[AuthUser]
        Expiring identity cache from application state.

    Returns
    -------
    AuthService
        Service instance for this request.
    """
    return AuthService(user_repo, identity_cache=identity_cache)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
