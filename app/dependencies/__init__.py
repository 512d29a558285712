# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    CategoryRepoDep,
    CommentRepoDep,
    PostRepoDep,
    PostsCache,
    PostsCacheDep,
    SessionDep,
    UserRepoDep,
    get_auth_service,
    get_identity_cache,
    get_posts_cache,
    get_session_data,
    require_admin,
    require_session,
    session_cookie,
)

__all__ = [
    "AuthServiceDep",
    "CategoryRepoDep",
    "CommentRepoDep",
    "PostRepoDep",
    "PostsCache",
    "PostsCacheDep",
    "SessionDep",
    "UserRepoDep",
    "get_auth_service",
    "get_identity_cache",
    "get_posts_cache",
    "get_session_data",
    "require_admin",
    "require_session",
    "session_cookie",
]
