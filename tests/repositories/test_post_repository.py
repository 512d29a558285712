# tests/repositories/test_post_repository.py
"""Tests for app/repositories/post.py module."""

from collections.abc import Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import DuplicateEntryError, ForeignKeyViolationError
from app.models import CategoryDB, PostDB
from app.repositories import PostRepository
from app.schemas import PostCreate, PostUpdate


@pytest.fixture
def repo(db_session: AsyncSession) -> PostRepository:
    return PostRepository(db_session)


class TestPostReads:
    """Tests for the post listing and lookup queries."""

    @pytest.mark.asyncio
    async def test_published_posts_exclude_drafts_and_content(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
        create_category: Callable[..., Awaitable[CategoryDB]],
    ) -> None:
        news = await create_category("News")
        await create_post(slug="live", category_id=news.id)
        await create_post(slug="draft", published=False)

        posts = await repo.get_published_posts()

        assert [post.slug for post in posts] == ["live"]
        assert posts[0].category_name == "News"
        assert "content" not in posts[0].model_dump()

    @pytest.mark.asyncio
    async def test_all_posts_newest_first(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        await create_post(slug="first")
        await create_post(slug="second", published=False)
        await create_post(slug="third")

        posts = await repo.get_all_posts()

        assert [post.slug for post in posts] == ["third", "second", "first"]
        assert posts[1].published is False
        assert posts[0].category_name is None

    @pytest.mark.asyncio
    async def test_get_post_by_slug_only_published(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        await create_post(slug="live")
        await create_post(slug="draft", published=False)

        live = await repo.get_post_by_slug("live")

        assert live is not None
        assert live.content == "<p>Body</p>"
        assert await repo.get_post_by_slug("draft") is None
        assert await repo.get_post_by_slug("missing") is None

    @pytest.mark.asyncio
    async def test_get_post_by_id_any_state(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        draft = await create_post(slug="draft", published=False)

        found = await repo.get_post_by_id(draft.id)

        assert found is not None
        assert found.slug == "draft"
        assert await repo.get_post_by_id(9999) is None

    @pytest.mark.asyncio
    async def test_check_slug_exists(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        post = await create_post(slug="taken")

        assert await repo.check_slug_exists("taken") is True
        assert await repo.check_slug_exists("free") is False
        assert await repo.check_slug_exists("taken", exclude_id=post.id) is False


class TestPostWrites:
    """Tests for create, update and delete."""

    @pytest.mark.asyncio
    async def test_create_defaults_excerpt(self, repo: PostRepository) -> None:
        post_id = await repo.create(PostCreate(title="T", slug="t", content="C"))

        post = await repo.get_post_by_id(post_id)

        assert post is not None
        assert post.excerpt == ""
        assert post.published is False

    @pytest.mark.asyncio
    async def test_create_duplicate_slug(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        await create_post(slug="taken")

        with pytest.raises(DuplicateEntryError):
            await repo.create(PostCreate(title="T", slug="taken", content="C"))

    @pytest.mark.asyncio
    async def test_create_unknown_category(self, repo: PostRepository) -> None:
        with pytest.raises(ForeignKeyViolationError):
            await repo.create(PostCreate(title="T", slug="t", content="C", category_id=999))

    @pytest.mark.asyncio
    async def test_partial_update_only_touches_supplied_fields(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        post = await create_post(slug="original", title="Original")

        assert await repo.update(post.id, PostUpdate(title="Renamed")) is True

        updated = await repo.get_post_by_id(post.id)
        assert updated is not None
        assert updated.title == "Renamed"
        assert updated.slug == "original"
        assert updated.content == "<p>Body</p>"

    @pytest.mark.asyncio
    async def test_update_empty_partial_returns_false(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        post = await create_post()
        assert await repo.update(post.id, PostUpdate()) is False

    @pytest.mark.asyncio
    async def test_update_missing_post(self, repo: PostRepository) -> None:
        assert await repo.update(9999, PostUpdate(title="X")) is False

    @pytest.mark.asyncio
    async def test_delete(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        post = await create_post()

        assert await repo.delete(post.id) is True
        assert await repo.delete(post.id) is False
        assert await repo.find_by_id(post.id) is None

    @pytest.mark.asyncio
    async def test_find_all(
        self,
        repo: PostRepository,
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        await create_post(slug="a")
        await create_post(slug="b")

        assert [post.slug for post in await repo.find_all()] == ["b", "a"]
