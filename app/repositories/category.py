"""Category repository for database operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import CategoryDB
from app.models.post import PostDB
from app.repositories.base import (
    delete_record,
    find_all_records,
    find_record,
    insert_record,
    update_record,
)
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> list[CategoryDB]:
        return await find_all_records(self.session, CategoryDB)

    async def find_by_id(self, record_id: int) -> CategoryDB | None:
        return await find_record(self.session, CategoryDB, record_id)

    async def get_all_categories(self) -> list[CategoryRead]:
        """
        Get all categories ordered by name, with the number of posts in each.

        Returns:
            list[CategoryRead]: Categories with ``post_count``
        """
        statement = (
            select(CategoryDB, func.count(PostDB.id).label("post_count"))
            .outerjoin(PostDB, PostDB.category_id == CategoryDB.id)
            .group_by(CategoryDB.id)
            .order_by(CategoryDB.name)
        )
        result = await self.session.execute(statement)
        return [
            CategoryRead.model_validate({**category.model_dump(), "post_count": count})
            for category, count in result.all()
        ]

    async def create(self, data: CategoryCreate) -> int:
        """
        Create a category.

        Raises:
            DuplicateEntryError: If the name or slug already exists
        """
        category = CategoryDB(name=(data.name or "").strip(), slug=data.slug or None)
        return await insert_record(self.session, category)

    async def update(self, record_id: int, data: CategoryUpdate) -> bool:
        return await update_record(
            self.session,
            CategoryDB,
            record_id,
            data.model_dump(exclude_unset=True),
        )

    async def delete(self, record_id: int) -> bool:
        """Delete a category. Its posts keep existing without a category."""
        return await delete_record(self.session, CategoryDB, record_id)
