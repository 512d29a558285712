# app/routes/posts.py

"""
Post Routes.

Public listing and reading of posts, plus the admin CRUD surface.

Summary
-------
Endpoints include:
  - List posts (published only, or all)
  - Create post
  - Get post by id (admin)
  - Get published post by slug, with approved comments
  - Update post
  - Delete post

Caching
-------
Listings are cached in the application's posts cache for a short TTL, one
entry per filter value. Every successful write clears the whole cache.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Query, Request
from fastapi.responses import ORJSONResponse

from app.configs import file_logger
from app.decorators import with_error_handling
from app.dependencies import (
    CommentRepoDep,
    PostRepoDep,
    PostsCacheDep,
    SessionDep,
    require_admin,
)
from app.errors import ConflictError, NotFoundError, ValidationFailedError
from app.schemas import PostCreate, PostCreated, PostUpdate, PostWithComments
from app.utils import ApiResponse

router = APIRouter(prefix="/api/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

NOT_FOUND_MESSAGE = "Post not found"
SLUG_TAKEN_MESSAGE = "Slug already exists"


def posts_list_key(published: str | None) -> str:
    """Cache key for a listing filter: ``posts_true`` or ``posts_all``."""
    return f"posts_{'true' if published == 'true' else 'all'}"


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List posts",
    description="List published posts, or every post when `published` is not `true`.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": [
                            {
                                "id": 1,
                                "title": "Hello World",
                                "slug": "hello-world",
                                "excerpt": "First post",
                                "category_id": 2,
                                "category_name": "News",
                                "created_at": "2025-01-01T00:00:00Z",
                            },
                        ],
                        "message": "Posts retrieved",
                    },
                },
            },
        },
    },
    operation_id="posts_list",
)
@with_error_handling
async def list_posts(
    request: Request,
    repo: PostRepoDep,
    cache: PostsCacheDep,
    published: Annotated[str | None, Query(description="`true` for published only")] = None,
) -> ORJSONResponse:
    """
    List posts.

    Parameters
    ----------
    request : Request
        Current request context.
    repo : PostRepository
        Post repository.
    cache : TTLCache
        Application posts cache.
    published : str | None
        `true` selects published posts; any other value selects all posts.

    Returns
    -------
    ORJSONResponse
        Envelope with the list of posts.
    """
    key = posts_list_key(published)
    if (posts := cache.get(key)) is not None:
        return ApiResponse.success(posts, "Posts retrieved")

    posts = await repo.get_published_posts() if published == "true" else await repo.get_all_posts()
    cache.set(key, posts)
    return ApiResponse.success(posts, "Posts retrieved")


@router.post(
    "",
    response_class=ORJSONResponse,
    status_code=201,
    summary="Create a post",
    description="Create a post. Requires an admin session.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {"id": 1, "slug": "hello-world"},
                        "message": "Post created",
                    },
                },
            },
        },
        400: {
            "description": "Validation failed",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": "Validation failed",
                        "errors": {"title": "Title is required"},
                    },
                },
            },
        },
        409: {
            "description": "Slug already exists",
            "content": {
                "application/json": {"example": {"success": False, "error": SLUG_TAKEN_MESSAGE}},
            },
        },
    },
    operation_id="posts_create",
)
@with_error_handling
async def create_post(
    request: Request,
    body: PostCreate,
    session: SessionDep,
    repo: PostRepoDep,
    cache: PostsCacheDep,
) -> ORJSONResponse:
    """
    Create a post.

    Parameters
    ----------
    request : Request
        Current request context.
    body : PostCreate
        Title, slug and content are required.
    session : SessionData | None
        Current session; must be an admin.
    repo : PostRepository
        Post repository.
    cache : TTLCache
        Application posts cache, cleared on success.

    Returns
    -------
    ORJSONResponse
        201 envelope with the new post's id and slug.

    Raises
    ------
    ValidationFailedError
        If title, slug or content is missing.
    ConflictError
        If the slug is already taken; nothing is inserted.
    """
    require_admin(session)

    if errors := body.field_errors():
        raise ValidationFailedError(errors)

    slug = body.slug or ""
    if await repo.check_slug_exists(slug):
        raise ConflictError(SLUG_TAKEN_MESSAGE)

    post_id = await repo.create(body)
    cache.invalidate()
    return ApiResponse.created(PostCreated(id=post_id, slug=slug), "Post created")


@router.get(
    "/slug/{slug}",
    response_class=ORJSONResponse,
    summary="Read a published post",
    description="Get a published post by slug together with its approved comments.",
    responses={
        404: {
            "description": "Post not found",
            "content": {
                "application/json": {"example": {"success": False, "error": NOT_FOUND_MESSAGE}},
            },
        },
    },
    operation_id="posts_get_by_slug",
)
@with_error_handling
async def get_post_by_slug(
    request: Request,
    slug: str,
    repo: PostRepoDep,
    comments: CommentRepoDep,
) -> ORJSONResponse:
    """
    Read a published post.

    Parameters
    ----------
    request : Request
        Current request context.
    slug : str
        Post slug.
    repo : PostRepository
        Post repository.
    comments : CommentRepository
        Comment repository.

    Returns
    -------
    ORJSONResponse
        Envelope with ``post`` and ``comments``.
    """
    post = await repo.get_post_by_slug(slug)
    if post is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    approved = await comments.get_approved_comments_by_post(post.id)
    return ApiResponse.success(PostWithComments(post=post, comments=approved), "Post retrieved")


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    summary="Get a post by id",
    description="Get a post in any state. Requires an admin session.",
    operation_id="posts_get_by_id",
)
@with_error_handling
async def get_post(
    request: Request,
    post_id: int,
    session: SessionDep,
    repo: PostRepoDep,
) -> ORJSONResponse:
    """
    Get a post by id.

    Parameters
    ----------
    request : Request
        Current request context.
    post_id : int
        Post id.
    session : SessionData | None
        Current session; must be an admin.
    repo : PostRepository
        Post repository.

    Returns
    -------
    ORJSONResponse
        Envelope with the post.
    """
    require_admin(session)

    post = await repo.get_post_by_id(post_id)
    if post is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return ApiResponse.success(post, "Post retrieved")


@router.patch(
    "/{post_id}",
    response_class=ORJSONResponse,
    summary="Update a post",
    description="Partially update a post. Requires an admin session.",
    responses={
        409: {
            "description": "Slug already exists",
            "content": {
                "application/json": {"example": {"success": False, "error": SLUG_TAKEN_MESSAGE}},
            },
        },
    },
    operation_id="posts_update",
)
@with_error_handling
async def update_post(
    request: Request,
    post_id: int,
    body: PostUpdate,
    session: SessionDep,
    repo: PostRepoDep,
    cache: PostsCacheDep,
) -> ORJSONResponse:
    """
    Update a post.

    Parameters
    ----------
    request : Request
        Current request context.
    post_id : int
        Post id.
    body : PostUpdate
        Fields to change; absent fields are left untouched.
    session : SessionData | None
        Current session; must be an admin.
    repo : PostRepository
        Post repository.
    cache : TTLCache
        Application posts cache, cleared on success.

    Returns
    -------
    ORJSONResponse
        Envelope with a status message.

    Notes
    -----
    An empty body changes nothing and still answers 200.
    """
    require_admin(session)

    if errors := body.field_errors():
        raise ValidationFailedError(errors)

    if await repo.find_by_id(post_id) is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    if not body.model_fields_set:
        return ApiResponse.updated(message="No changes")

    if body.slug and await repo.check_slug_exists(body.slug, exclude_id=post_id):
        raise ConflictError(SLUG_TAKEN_MESSAGE)

    if not await repo.update(post_id, body):
        raise NotFoundError(NOT_FOUND_MESSAGE)

    cache.invalidate()
    return ApiResponse.updated(message="Post updated")


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    summary="Delete a post",
    description="Delete a post and its comments. Requires an admin session.",
    operation_id="posts_delete",
)
@with_error_handling
async def delete_post(
    request: Request,
    post_id: int,
    session: SessionDep,
    repo: PostRepoDep,
    cache: PostsCacheDep,
) -> ORJSONResponse:
    """
    Delete a post.

    Parameters
    ----------
    request : Request
        Current request context.
    post_id : int
        Post id.
    session : SessionData | None
        Current session; must be an admin.
    repo : PostRepository
        Post repository.
    cache : TTLCache
        Application posts cache, cleared on success.

    Returns
    -------
    ORJSONResponse
        Envelope with a status message.
    """
    require_admin(session)

    if not await repo.delete(post_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)

    cache.invalidate()
    return ApiResponse.deleted("Post deleted")
