"""
Shared repository contract and helpers.

Every entity repository implements :class:`CrudRepository` on its own; the
helpers below hold the statements they have in common.
"""

from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import translate_integrity_error


@runtime_checkable
class CrudRepository[ModelT: SQLModel, CreateT, UpdateT](Protocol):
    """
    CRUD contract shared by all repositories.

    ``create`` returns the new id. ``update`` applies only supplied fields and
    returns whether a row was affected; an empty partial returns False.
    ``delete`` returns whether a row existed and was removed.
    """

    async def find_all(self) -> list[ModelT]: ...

    async def find_by_id(self, record_id: int) -> ModelT | None: ...

    async def create(self, data: CreateT) -> int: ...

    async def update(self, record_id: int, data: UpdateT) -> bool: ...

    async def delete(self, record_id: int) -> bool: ...


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


async def find_all_records[ModelT: SQLModel](
    session: AsyncSession,
    model: type[ModelT],
) -> list[ModelT]:
    """
    Fetch all rows of a table, newest first.

    Args:
        session: Async database session
        model: Table model with ``id`` and ``created_at`` columns

    Returns:
        list[ModelT]: Rows ordered by creation time, then id, descending
    """
    statement = select(model).order_by(
        desc(model.created_at),  # type: ignore[attr-defined]
        desc(model.id),  # type: ignore[attr-defined]
    )
    result = await session.execute(statement)
    return list(result.scalars().all())


async def find_record[ModelT: SQLModel](
    session: AsyncSession,
    model: type[ModelT],
    record_id: int,
) -> ModelT | None:
    """Fetch one row by primary key."""
    statement = select(model).where(model.id == record_id)  # type: ignore[attr-defined]
    result = await session.execute(statement)
    return result.scalar_one_or_none()


async def insert_record[ModelT: SQLModel](session: AsyncSession, record: ModelT) -> int:
    """
    Insert a row and return its generated id.

    Args:
        session: Async database session
        record: Unsaved table model instance

    Returns:
        int: New primary key

    Raises:
        DuplicateEntryError: If a unique constraint is violated
        ForeignKeyViolationError: If a referenced row does not exist
        DatabaseError: For other integrity errors
    """
    try:
        session.add(record)
        await session.flush()
    except IntegrityError as e:
        await session.rollback()
        raise translate_integrity_error(e) from e

    await session.refresh(record)
    return int(record.id)  # type: ignore[attr-defined]


async def update_record(
    session: AsyncSession,
    model: type[SQLModel],
    record_id: int,
    values: dict[str, Any],
) -> bool:
    """
    Apply ``values`` to the row with ``record_id``.

    Args:
        session: Async database session
        model: Table model
        record_id: Primary key of the row to update
        values: Column -> value map; empty means nothing to do

    Returns:
        bool: True if a row matched, False if absent or ``values`` is empty

    Raises:
        DuplicateEntryError: If a unique constraint is violated
        ForeignKeyViolationError: If a referenced row does not exist
    """
    if not values:
        return False

    statement = (
        update(model)
        .where(model.id == record_id)  # type: ignore[attr-defined]
        .values(**values)
        .execution_options(synchronize_session="fetch")
    )
    try:
        result = await session.execute(statement)
        await session.flush()
    except IntegrityError as e:
        await session.rollback()
        raise translate_integrity_error(e) from e

    return result.rowcount > 0  # type: ignore[attr-defined]


async def delete_record(session: AsyncSession, model: type[SQLModel], record_id: int) -> bool:
    """Delete the row with ``record_id`` and report whether it existed."""
    statement = delete(model).where(model.id == record_id)  # type: ignore[attr-defined]
    try:
        result = await session.execute(statement)
        await session.flush()
    except IntegrityError as e:
        await session.rollback()
        raise translate_integrity_error(e) from e

    return result.rowcount > 0  # type: ignore[attr-defined]
