# app/routes/categories.py

"""
Category Routes.

Summary
-------
Endpoints include:
  - List categories with post counts
  - Create category (admin)
  - Delete category (admin); its posts become uncategorised
"""

from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from app.configs import file_logger
from app.decorators import with_error_handling
from app.dependencies import CategoryRepoDep, PostsCacheDep, SessionDep, require_admin
from app.errors import ConflictError, NotFoundError, ValidationFailedError
from app.errors.database import DuplicateEntryError
from app.schemas import CategoryCreate
from app.utils import ApiResponse

router = APIRouter(prefix="/api/categories", tags=["🗂️ Categories"])

logger = file_logger(getLogger(__name__))


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List categories",
    description="All categories ordered by name, each with its number of posts.",
    operation_id="categories_list",
)
@with_error_handling
async def list_categories(request: Request, repo: CategoryRepoDep) -> ORJSONResponse:
    """
    List categories.

    Parameters
    ----------
    request : Request
        Current request context.
    repo : CategoryRepository
        Category repository.

    Returns
    -------
    ORJSONResponse
        Envelope with the list of categories.
    """
    return ApiResponse.success(await repo.get_all_categories(), "Categories retrieved")


@router.post(
    "",
    response_class=ORJSONResponse,
    status_code=201,
    summary="Create a category",
    description="Create a category. Requires an admin session.",
    responses={
        409: {
            "description": "Category already exists",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Category already exists"},
                },
            },
        },
    },
    operation_id="categories_create",
)
@with_error_handling
async def create_category(
    request: Request,
    body: CategoryCreate,
    session: SessionDep,
    repo: CategoryRepoDep,
) -> ORJSONResponse:
    """
    Create a category.

    Parameters
    ----------
    request : Request
        Current request context.
    body : CategoryCreate
        ``name`` is required and unique.
    session : SessionData | None
        Current session; must be an admin.
    repo : CategoryRepository
        Category repository.

    Returns
    -------
    ORJSONResponse
        201 envelope with the new category id.
    """
    require_admin(session)

    if errors := body.field_errors():
        raise ValidationFailedError(errors)

    try:
        category_id = await repo.create(body)
    except DuplicateEntryError as e:
        raise ConflictError("Category already exists") from e

    return ApiResponse.created({"id": category_id}, "Category created")


@router.delete(
    "/{category_id}",
    response_class=ORJSONResponse,
    summary="Delete a category",
    description="Delete a category. Its posts are kept without a category.",
    operation_id="categories_delete",
)
@with_error_handling
async def delete_category(
    request: Request,
    category_id: int,
    session: SessionDep,
    repo: CategoryRepoDep,
    cache: PostsCacheDep,
) -> ORJSONResponse:
    """
    Delete a category.

    Parameters
    ----------
    request : Request
        Current request context.
    category_id : int
        Category id.
    session : SessionData | None
        Current session; must be an admin.
    repo : CategoryRepository
        Category repository.
    cache : TTLCache
        Application posts cache; listings carry category names.

    Returns
    -------
    ORJSONResponse
        Envelope with a status message.
    """
    require_admin(session)

    if not await repo.delete(category_id):
        raise NotFoundError("Category not found")

    cache.invalidate()
    return ApiResponse.deleted("Category deleted")
