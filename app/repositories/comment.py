"""Comment repository for database operations."""

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.comment import CommentDB
from app.models.post import PostDB
from app.repositories.base import (
    delete_record,
    find_all_records,
    find_record,
    insert_record,
    update_record,
)
from app.schemas.comment import CommentRead, CommentUpdate, CommentWithPostTitle, NewComment

NEWEST_FIRST = (desc(CommentDB.created_at), desc(CommentDB.id))


class CommentRepository:
    """
    Repository for Comment database operations.

    Moderation is the only kind of update: ``approved`` is the sole mutable
    field.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_all(self) -> list[CommentDB]:
        return await find_all_records(self.session, CommentDB)

    async def find_by_id(self, record_id: int) -> CommentDB | None:
        return await find_record(self.session, CommentDB, record_id)

    async def get_approved_comments_by_post(self, post_id: int) -> list[CommentRead]:
        """
        Get approved comments for a post.

        Args:
            post_id: Post ID

        Returns:
            list[CommentRead]: Approved comments, newest first
        """
        statement = (
            select(CommentDB)
            .where(CommentDB.post_id == post_id, CommentDB.approved == True)  # noqa: E712
            .order_by(*NEWEST_FIRST)
        )
        result = await self.session.execute(statement)
        return [CommentRead.model_validate(comment) for comment in result.scalars().all()]

    async def get_all_comments_with_post_title(self) -> list[CommentWithPostTitle]:
        """
        Get every comment with its post title, for moderation.

        Returns:
            list[CommentWithPostTitle]: All comments, newest first
        """
        statement = (
            select(CommentDB, PostDB.title.label("post_title"))
            .outerjoin(PostDB, CommentDB.post_id == PostDB.id)
            .order_by(*NEWEST_FIRST)
        )
        result = await self.session.execute(statement)
        return [
            CommentWithPostTitle.model_validate({**comment.model_dump(), "post_title": title})
            for comment, title in result.all()
        ]

    async def get_pending_count(self) -> int:
        """Count comments awaiting moderation."""
        statement = select(func.count()).select_from(CommentDB).where(CommentDB.approved == False)  # noqa: E712
        result = await self.session.execute(statement)
        return result.scalar() or 0

    async def post_exists(self, post_id: int) -> bool:
        """Whether a post with ``post_id`` exists, published or not."""
        result = await self.session.execute(select(PostDB.id).where(PostDB.id == post_id))
        return result.scalar_one_or_none() is not None

    async def create(self, data: NewComment) -> int:
        """
        Create a comment.

        Raises:
            ForeignKeyViolationError: If the post (or user) does not exist
        """
        return await insert_record(self.session, CommentDB(**data.model_dump()))

    async def update(self, record_id: int, data: CommentUpdate) -> bool:
        """
        Moderate a comment.

        Args:
            record_id: Comment ID
            data: Body carrying ``approved``

        Returns:
            bool: True if the comment exists; False if absent or nothing to set
        """
        values = data.model_dump(include={"approved"}, exclude_unset=True, exclude_none=True)
        return await update_record(self.session, CommentDB, record_id, values)

    async def delete(self, record_id: int) -> bool:
        return await delete_record(self.session, CommentDB, record_id)
