"""
Alembic environment for the Inkwell schema.

The database URL always comes from application settings, so migrations run
against the same database the API uses. PostgreSQL (asyncpg) is the
production target; SQLite (aiosqlite) is supported for local work, with
batch mode enabled because SQLite cannot alter most constraints in place.
"""

from asyncio import run as asyncio_run
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from alembic import context
from app.configs import settings

# Registers users, categories, posts and comments on SQLModel.metadata
from app.models import CategoryDB, CommentDB, PostDB, UserDB  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def database_url() -> str:
    """URL from ``-x url=...`` when given, otherwise from settings."""
    return context.get_x_argument(as_dictionary=True).get("url") or settings.DATABASE_URL


def configure_options(url: str) -> dict:
    """Context options shared by offline and online runs."""
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit SQL for review instead of touching a database."""
    url = database_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **configure_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection, url: str) -> None:
    context.configure(connection=connection, **configure_options(url))

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations over a short-lived async engine."""
    url = database_url()
    connectable = create_async_engine(url, poolclass=pool.NullPool)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations, url)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio_run(run_migrations_online())
