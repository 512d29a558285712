"""Post repository for database operations."""

from logging import getLogger

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.models.category import CategoryDB
from app.models.post import PostDB
from app.repositories.base import (
    delete_record,
    find_all_records,
    find_record,
    insert_record,
    update_record,
    utcnow,
)
from app.schemas.post import PostCreate, PostDetail, PostSummary, PostUpdate

logger = file_logger(getLogger(__name__))

NEWEST_FIRST = (desc(PostDB.created_at), desc(PostDB.id))


class PostRepository:
    """
    Repository for Post database operations.

    List reads join the category name; the public variants only ever return
    published posts.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    def _detail_query(self):  # noqa: ANN202
        return select(PostDB, CategoryDB.name.label("category_name")).outerjoin(
            CategoryDB,
            PostDB.category_id == CategoryDB.id,
        )

    @staticmethod
    def _to_detail(post: PostDB, category_name: str | None) -> PostDetail:
        return PostDetail.model_validate({**post.model_dump(), "category_name": category_name})

    async def find_all(self) -> list[PostDB]:
        return await find_all_records(self.session, PostDB)

    async def find_by_id(self, record_id: int) -> PostDB | None:
        return await find_record(self.session, PostDB, record_id)

    async def get_published_posts(self) -> list[PostSummary]:
        """
        Get all published posts without their content.

        Returns:
            list[PostSummary]: Published posts, newest first
        """
        statement = (
            select(
                PostDB.id,
                PostDB.title,
                PostDB.slug,
                PostDB.excerpt,
                PostDB.category_id,
                PostDB.created_at,
                CategoryDB.name.label("category_name"),
            )
            .outerjoin(CategoryDB, PostDB.category_id == CategoryDB.id)
            .where(PostDB.published == True)  # noqa: E712
            .order_by(*NEWEST_FIRST)
        )
        result = await self.session.execute(statement)
        return [PostSummary.model_validate(dict(row._mapping)) for row in result.all()]

    async def get_all_posts(self) -> list[PostDetail]:
        """
        Get every post regardless of state, for the admin area.

        Returns:
            list[PostDetail]: All posts, newest first
        """
        result = await self.session.execute(self._detail_query().order_by(*NEWEST_FIRST))
        return [self._to_detail(post, name) for post, name in result.all()]

    async def get_post_by_slug(self, slug: str) -> PostDetail | None:
        """
        Get a published post by slug.

        Args:
            slug: Post slug

        Returns:
            PostDetail | None: The post, or None if absent or unpublished
        """
        statement = self._detail_query().where(
            PostDB.slug == slug,
            PostDB.published == True,  # noqa: E712
        )
        row = (await self.session.execute(statement)).first()
        return self._to_detail(*row) if row else None

    async def get_post_by_id(self, post_id: int) -> PostDetail | None:
        """
        Get a post by ID in any state.

        Args:
            post_id: Post ID

        Returns:
            PostDetail | None: The post if found
        """
        statement = self._detail_query().where(PostDB.id == post_id)
        row = (await self.session.execute(statement)).first()
        return self._to_detail(*row) if row else None

    async def check_slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        """
        Check if a slug is taken.

        Args:
            slug: Slug to check
            exclude_id: Post ID to ignore (the post being updated)

        Returns:
            bool: True if another post already uses the slug
        """
        statement = select(PostDB.id).where(PostDB.slug == slug)
        if exclude_id is not None:
            statement = statement.where(PostDB.id != exclude_id)
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def create(self, data: PostCreate) -> int:
        """
        Create a new post.

        Args:
            data: Validated creation body

        Returns:
            int: New post ID

        Raises:
            DuplicateEntryError: If the slug already exists
            ForeignKeyViolationError: If the category does not exist
        """
        post = PostDB(
            title=data.title or "",
            slug=data.slug or "",
            content=data.content or "",
            excerpt=data.excerpt or "",
            category_id=data.category_id,
            published=data.published,
        )
        post_id = await insert_record(self.session, post)
        logger.info(f"Created post {post_id} with slug '{post.slug}'")
        return post_id

    async def update(self, record_id: int, data: PostUpdate) -> bool:
        """
        Apply a partial update to a post.

        Args:
            record_id: Post ID
            data: Fields to change; only those present in the body are used

        Returns:
            bool: True if the post exists and was updated, False otherwise
        """
        values = data.model_dump(exclude_unset=True)
        if not values:
            return False
        values["updated_at"] = utcnow()
        return await update_record(self.session, PostDB, record_id, values)

    async def delete(self, record_id: int) -> bool:
        return await delete_record(self.session, PostDB, record_id)
