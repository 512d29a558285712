# tests/errors/test_errors.py
"""Tests for the app/errors package."""

from sqlalchemy.exc import IntegrityError

import app.errors
from app.errors import (
    BaseAppError,
    ConflictError,
    DatabaseError,
    DuplicateEntryError,
    ForbiddenError,
    ForeignKeyViolationError,
    NotFoundError,
    PasswordHashingError,
    UnauthorizedError,
    ValidationFailedError,
    integrity_kind,
    translate_integrity_error,
)
from app.errors.validation import format_validation_errors


class DriverError(Exception):
    """Stand-in for a DBAPI exception carrying a SQLSTATE."""

    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity(message: str, sqlstate: str | None = None) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, DriverError(message, sqlstate))


class TestTaxonomy:
    def test_exported_errors(self) -> None:
        """Every exported error class is constructed somewhere in the application."""
        exported = {
            name
            for name in app.errors.__all__
            if isinstance(getattr(app.errors, name), type)
        }

        assert exported == {
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
        }


class TestBaseAppError:
    def test_defaults(self) -> None:
        error = BaseAppError()
        assert error.status_code == 500
        assert str(error) == "Internal Server Error"

    def test_custom_detail(self) -> None:
        error = BaseAppError("Boom", 503)
        assert error.detail == "Boom"
        assert error.status_code == 503


class TestApiErrors:
    """Status codes of the HTTP-facing errors."""

    def test_status_codes(self) -> None:
        assert UnauthorizedError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert NotFoundError().status_code == 404
        assert ValidationFailedError().status_code == 400
        assert ConflictError().status_code == 409

    def test_validation_error_carries_field_map(self) -> None:
        error = ValidationFailedError({"title": "Title is required"})
        assert error.errors == {"title": "Title is required"}
        assert error.detail == "Validation failed"

    def test_validation_error_defaults_to_empty_map(self) -> None:
        assert ValidationFailedError().errors == {}


class TestDatabaseErrors:
    def test_status_codes(self) -> None:
        assert DatabaseError().status_code == 500
        assert DuplicateEntryError().status_code == 409
        assert ForeignKeyViolationError().status_code == 400

    def test_password_hashing_error_is_app_error(self) -> None:
        assert isinstance(PasswordHashingError("x"), BaseAppError)


class TestIntegrityKind:
    """Tests for integrity_kind and translate_integrity_error."""

    def test_sqlite_unique_message(self) -> None:
        exc = _integrity("UNIQUE constraint failed: posts.slug")
        assert integrity_kind(exc) == "duplicate"
        assert isinstance(translate_integrity_error(exc), DuplicateEntryError)

    def test_sqlite_foreign_key_message(self) -> None:
        exc = _integrity("FOREIGN KEY constraint failed")
        assert integrity_kind(exc) == "foreign_key"
        assert isinstance(translate_integrity_error(exc), ForeignKeyViolationError)

    def test_postgres_sqlstate(self) -> None:
        assert integrity_kind(_integrity("violation", "23505")) == "duplicate"
        assert integrity_kind(_integrity("violation", "23503")) == "foreign_key"

    def test_other_constraint(self) -> None:
        exc = _integrity("NOT NULL constraint failed: posts.title")

        assert integrity_kind(exc) is None
        translated = translate_integrity_error(exc)
        assert type(translated) is DatabaseError
        assert "NOT NULL" in translated.detail


class TestFormatValidationErrors:
    def test_strips_location_prefix(self) -> None:
        errors = [
            {"loc": ("body", "published"), "msg": "Input should be a valid boolean"},
            {"loc": ("query", "postId"), "msg": "Input should be a valid integer"},
        ]

        assert format_validation_errors(errors) == {
            "published": "Input should be a valid boolean",
            "postId": "Input should be a valid integer",
        }

    def test_first_error_per_field_wins(self) -> None:
        errors = [
            {"loc": ("body", "title"), "msg": "first"},
            {"loc": ("body", "title"), "msg": "second"},
        ]
        assert format_validation_errors(errors) == {"title": "first"}

    def test_whole_body_error(self) -> None:
        assert format_validation_errors([{"loc": ("body",), "msg": "Invalid JSON"}]) == {
            "body": "Invalid JSON",
        }
