# app/routes/comments.py

"""
Comment Routes.

Public reading and submission of comments, plus moderation.

Summary
-------
Endpoints include:
  - List comments (approved for one post, or all for moderation)
  - Count comments awaiting moderation
  - Submit a comment (signed-in author or guest)
  - Approve or hide a comment
  - Delete a comment

Moderation
----------
Comments from an admin session are approved immediately. Comments from any
other session or from guests wait for moderation.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Query, Request
from fastapi.responses import ORJSONResponse

from app.configs import file_logger
from app.decorators import with_error_handling
from app.dependencies import CommentRepoDep, SessionDep, require_session
from app.errors import NotFoundError, UnauthorizedError, ValidationFailedError
from app.errors.database import ForeignKeyViolationError
from app.schemas import CommentCreate, CommentUpdate, NewComment, PendingCount
from app.utils import ApiResponse

router = APIRouter(prefix="/api/comments", tags=["💬 Comments"])

logger = file_logger(getLogger(__name__))

NOT_FOUND_MESSAGE = "Comment not found"
ACCOUNT_GONE_MESSAGE = "Session account no longer exists"


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List comments",
    description=(
        "With `postId`, list the approved comments of that post. "
        "Without it, list every comment with its post title."
    ),
    operation_id="comments_list",
)
@with_error_handling
async def list_comments(
    request: Request,
    repo: CommentRepoDep,
    post_id: Annotated[int | None, Query(alias="postId", description="Post id filter")] = None,
) -> ORJSONResponse:
    """
    List comments.

    Parameters
    ----------
    request : Request
        Current request context.
    repo : CommentRepository
        Comment repository.
    post_id : int | None
        When present, only approved comments of this post are returned.

    Returns
    -------
    ORJSONResponse
        Envelope with the list of comments.
    """
    if post_id is not None:
        comments = await repo.get_approved_comments_by_post(post_id)
        return ApiResponse.success(comments, "Comments retrieved")

    return ApiResponse.success(await repo.get_all_comments_with_post_title(), "Comments retrieved")


@router.get(
    "/pending-count",
    response_class=ORJSONResponse,
    summary="Count pending comments",
    description="Number of comments awaiting moderation. Requires a session.",
    operation_id="comments_pending_count",
)
@with_error_handling
async def pending_count(
    request: Request,
    session: SessionDep,
    repo: CommentRepoDep,
) -> ORJSONResponse:
    """
    Count comments awaiting moderation.

    Parameters
    ----------
    request : Request
        Current request context.
    session : SessionData | None
        Current session; required.
    repo : CommentRepository
        Comment repository.

    Returns
    -------
    ORJSONResponse
        Envelope with ``{count}``.
    """
    require_session(session)
    count = await repo.get_pending_count()
    return ApiResponse.success(PendingCount(count=count), "Pending count retrieved")


@router.post(
    "",
    response_class=ORJSONResponse,
    status_code=201,
    summary="Submit a comment",
    description=(
        "Signed-in authors comment under their session identity. Guests must "
        "provide `author_name` and a valid `author_email`."
    ),
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {"id": 7},
                        "message": "Comment submitted and awaiting moderation",
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
                        "errors": {"author_email": "Invalid email format"},
                    },
                },
            },
        },
    },
    operation_id="comments_create",
)
@with_error_handling
async def create_comment(
    request: Request,
    body: CommentCreate,
    session: SessionDep,
    repo: CommentRepoDep,
) -> ORJSONResponse:
    """
    Submit a comment.

    Parameters
    ----------
    request : Request
        Current request context.
    body : CommentCreate
        ``post_id`` and ``content`` are always required.
    session : SessionData | None
        Optional session; when present it supplies the author identity.
    repo : CommentRepository
        Comment repository.

    Returns
    -------
    ORJSONResponse
        201 envelope with the new comment id.

    Raises
    ------
    ValidationFailedError
        If required fields are missing, the guest email is malformed, or the
        post does not exist.
    UnauthorizedError
        If the session belongs to an account that no longer exists.
    """
    if errors := body.field_errors(guest=session is None):
        raise ValidationFailedError(errors)

    approved = session is not None and session.is_admin
    if session is not None:
        comment = NewComment(
            post_id=body.post_id or 0,
            user_id=session.user_id,
            author_name=session.name,
            author_email=session.email,
            author_avatar=session.avatar,
            content=body.content or "",
            approved=approved,
        )
    else:
        comment = NewComment(
            post_id=body.post_id or 0,
            author_name=(body.author_name or "").strip(),
            author_email=(body.author_email or "").strip(),
            content=body.content or "",
        )

    try:
        comment_id = await repo.create(comment)
    except ForeignKeyViolationError as e:
        # The post is there, so the session points at a deleted account
        if session is not None and await repo.post_exists(comment.post_id):
            raise UnauthorizedError(ACCOUNT_GONE_MESSAGE) from e
        raise ValidationFailedError({"post_id": "Post does not exist"}) from e

    message = "Comment created" if approved else "Comment submitted and awaiting moderation"
    return ApiResponse.created({"id": comment_id}, message)


@router.patch(
    "/{comment_id}",
    response_class=ORJSONResponse,
    summary="Moderate a comment",
    description="Set the `approved` flag of a comment. Requires a session.",
    operation_id="comments_update",
)
@with_error_handling
async def update_comment(
    request: Request,
    comment_id: int,
    body: CommentUpdate,
    session: SessionDep,
    repo: CommentRepoDep,
) -> ORJSONResponse:
    """
    Moderate a comment.

    Parameters
    ----------
    request : Request
        Current request context.
    comment_id : int
        Comment id.
    body : CommentUpdate
        ``approved`` flag; required.
    session : SessionData | None
        Current session; required.
    repo : CommentRepository
        Comment repository.

    Returns
    -------
    ORJSONResponse
        Envelope with a status message.
    """
    require_session(session)

    if body.approved is None:
        raise ValidationFailedError({"approved": "Approved must be a boolean"})

    if not await repo.update(comment_id, body):
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return ApiResponse.updated(message="Comment updated")


@router.delete(
    "/{comment_id}",
    response_class=ORJSONResponse,
    summary="Delete a comment",
    description="Remove a comment. Requires a session.",
    operation_id="comments_delete",
)
@with_error_handling
async def delete_comment(
    request: Request,
    comment_id: int,
    session: SessionDep,
    repo: CommentRepoDep,
) -> ORJSONResponse:
    """
    Delete a comment.

    Parameters
    ----------
    request : Request
        Current request context.
    comment_id : int
        Comment id.
    session : SessionData | None
        Current session; required.
    repo : CommentRepository
        Comment repository.

    Returns
    -------
    ORJSONResponse
        Envelope with a status message.
    """
    require_session(session)

    if not await repo.delete(comment_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return ApiResponse.deleted("Comment deleted")
