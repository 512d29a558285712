from app.errors.api import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from app.errors.base import BaseAppError
from app.errors.database import (
    DatabaseError,
    DuplicateEntryError,
    ForeignKeyViolationError,
    integrity_kind,
    translate_integrity_error,
)
from app.errors.password_hasher import PasswordHashingError

__all__ = [
    "BaseAppError",
    "ConflictError",
    "DatabaseError",
    "DuplicateEntryError",
    "ForbiddenError",
    "ForeignKeyViolationError",
    "NotFoundError",
    "PasswordHashingError",
    "UnauthorizedError",
    "ValidationFailedError",
    "integrity_kind",
    "translate_integrity_error",
]
