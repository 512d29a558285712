from typing import Literal

from sqlalchemy.exc import IntegrityError
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.errors.base import BaseAppError

# PostgreSQL SQLSTATE and MySQL error numbers; SQLite only reports messages
DUPLICATE_KEY_CODES = frozenset({"23505", "1062", "ER_DUP_ENTRY"})
FOREIGN_KEY_CODES = frozenset(
    {"23503", "1452", "1216", "ER_NO_REFERENCED_ROW", "ER_NO_REFERENCED_ROW_2"},
)


class DatabaseError(BaseAppError):
    """Base exception for database errors."""

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DuplicateEntryError(DatabaseError):
    """Exception raised when attempting to create a duplicate entry."""

    def __init__(
        self,
        detail: str = "Resource already exists",
    ) -> None:
        super().__init__(detail, HTTP_409_CONFLICT)


class ForeignKeyViolationError(DatabaseError):
    """Exception raised when a referenced record does not exist."""

    def __init__(
        self,
        detail: str = "Referenced resource does not exist",
    ) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


def integrity_kind(exc: IntegrityError) -> Literal["duplicate", "foreign_key"] | None:
    """
    Classify a driver integrity error.

    Args:
        exc: SQLAlchemy integrity error wrapping the driver exception

    Returns:
        "duplicate", "foreign_key" or None when the error is neither
    """
    orig = exc.orig
    codes = {
        str(code)
        for code in (
            getattr(orig, "sqlstate", None),
            getattr(orig, "pgcode", None),
            getattr(orig, "errno", None),
            *(getattr(orig, "args", ()) or ())[:1],
        )
        if code is not None
    }
    message = str(orig or exc).lower()

    if codes & DUPLICATE_KEY_CODES or "unique" in message or "duplicate" in message:
        return "duplicate"
    if codes & FOREIGN_KEY_CODES or "foreign key" in message:
        return "foreign_key"
    return None


def translate_integrity_error(exc: IntegrityError) -> DatabaseError:
    """
    Convert a driver integrity error into the application taxonomy.

    Args:
        exc: SQLAlchemy integrity error

    Returns:
        DatabaseError: DuplicateEntryError, ForeignKeyViolationError or a
        generic DatabaseError for other constraint failures
    """
    kind = integrity_kind(exc)
    if kind == "duplicate":
        return DuplicateEntryError()
    if kind == "foreign_key":
        return ForeignKeyViolationError()
    error_msg = str(exc.orig) if exc.orig else str(exc)
    return DatabaseError(detail=f"Database integrity error: {error_msg}")
