# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before the app is imported anywhere
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession  # noqa: E402

from app.configs import settings  # noqa: E402
from app.db import build_engine, build_session_maker, get_session, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.managers.password_manager import hash_password  # noqa: E402
from app.managers.rate_limiter import limiter  # noqa: E402
from app.managers.token_manager import create_session_token  # noqa: E402
from app.models import CategoryDB, CommentDB, PostDB, UserDB  # noqa: E402
from app.schemas.auth import AuthIdentity  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "secret123"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test."""
    test_engine = build_engine(TEST_DATABASE_URL)
    await init_db(bind=test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session bound to the per-test database."""
    async with build_session_maker(engine)() as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """
    HTTP client for the application, wired to the per-test database.

    Caches are emptied and rate limiting is off; tests that exercise the
    limiter turn it back on themselves.
    """
    session_maker = build_session_maker(engine)

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.state.posts_cache.invalidate()
    app.state.identity_cache.invalidate()
    limiter.enabled = False

    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
    limiter.reset()
    limiter.enabled = True


@pytest.fixture
def create_user(db_session: AsyncSession) -> Callable[..., Awaitable[UserDB]]:
    """Factory inserting a user with a real password hash."""

    async def _create(
        email: str = "reader@example.com",
        name: str = "Reader",
        password: str = DEFAULT_PASSWORD,
        role: str = "user",
        status: str = "active",
        **extra: Any,  # noqa: ANN401
    ) -> UserDB:
        user = UserDB(
            email=email,
            name=name,
            password=await hash_password(password),
            role=role,
            status=status,
            **extra,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create


@pytest.fixture
def create_category(db_session: AsyncSession) -> Callable[..., Awaitable[CategoryDB]]:
    """Factory inserting a category."""

    async def _create(name: str = "News", slug: str | None = None) -> CategoryDB:
        category = CategoryDB(name=name, slug=slug)
        db_session.add(category)
        await db_session.commit()
        await db_session.refresh(category)
        return category

    return _create


@pytest.fixture
def create_post(db_session: AsyncSession) -> Callable[..., Awaitable[PostDB]]:
    """Factory inserting a post."""

    async def _create(
        slug: str = "hello-world",
        title: str = "Hello World",
        published: bool = True,
        category_id: int | None = None,
        content: str = "<p>Body</p>",
    ) -> PostDB:
        post = PostDB(
            title=title,
            slug=slug,
            content=content,
            excerpt="Body",
            published=published,
            category_id=category_id,
        )
        db_session.add(post)
        await db_session.commit()
        await db_session.refresh(post)
        return post

    return _create


@pytest.fixture
def create_comment(db_session: AsyncSession) -> Callable[..., Awaitable[CommentDB]]:
    """Factory inserting a guest comment."""

    async def _create(
        post_id: int,
        approved: bool = False,
        content: str = "Nice post",
    ) -> CommentDB:
        comment = CommentDB(
            post_id=post_id,
            author_name="Guest",
            author_email="guest@example.com",
            content=content,
            approved=approved,
        )
        db_session.add(comment)
        await db_session.commit()
        await db_session.refresh(comment)
        return comment

    return _create


@pytest.fixture
async def user(create_user: Callable[..., Awaitable[UserDB]]) -> UserDB:
    """A regular active user."""
    return await create_user()


@pytest.fixture
async def admin(create_user: Callable[..., Awaitable[UserDB]]) -> UserDB:
    """An active administrator."""
    return await create_user(email="admin@example.com", name="Admin", role="admin")


@pytest.fixture
def session_headers() -> Callable[[UserDB], dict[str, str]]:
    """Build a Cookie header carrying a valid session for a user."""

    def _headers(account: UserDB) -> dict[str, str]:
        token = create_session_token(AuthIdentity.model_validate(account))
        return {"Cookie": f"{settings.SESSION_COOKIE_NAME}={token}"}

    return _headers


@pytest.fixture
def user_headers(user: UserDB, session_headers: Callable[[UserDB], dict[str, str]]) -> dict[str, str]:
    return session_headers(user)


@pytest.fixture
def admin_headers(
    admin: UserDB,
    session_headers: Callable[[UserDB], dict[str, str]],
) -> dict[str, str]:
    return session_headers(admin)
