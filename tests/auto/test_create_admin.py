# tests/auto/test_create_admin.py
"""Tests for the auto/create_admin.py bootstrap script."""

from argparse import Namespace

import pytest

from app.db.database import transaction
from app.errors import DuplicateEntryError
from app.managers.password_manager import verify_password
from app.repositories import UserRepository
from auto.create_admin import (
    AdminUserData,
    create_admin_user,
    generate_secure_password,
    get_admin_data_from_args,
    validate,
)


def _args(**values: str | None) -> Namespace:
    defaults = {"email": None, "password": None, "name": None, "interactive": False}
    return Namespace(**{**defaults, **values})


class TestGenerateSecurePassword:
    def test_is_long_enough_and_random(self) -> None:
        first = generate_secure_password()

        assert len(first) >= 12
        assert first != generate_secure_password()


class TestGetAdminDataFromArgs:
    """Tests for argument and environment resolution."""

    def test_from_arguments(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ADMIN_EMAIL", raising=False)
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

        data = get_admin_data_from_args(
            _args(email="root@example.com", password="Secret123", name="Root"),
        )

        assert data == AdminUserData(email="root@example.com", password="Secret123", name="Root")

    def test_email_without_password_generates_one(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
        monkeypatch.delenv("ADMIN_NAME", raising=False)

        data = get_admin_data_from_args(_args(email="root@example.com"))

        assert data is not None
        assert data.password
        assert data.name == "Admin"

    def test_nothing_given_goes_interactive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ADMIN_EMAIL", raising=False)
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

        assert get_admin_data_from_args(_args()) is None

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ADMIN_EMAIL", "env@example.com")
        monkeypatch.setenv("ADMIN_PASSWORD", "FromEnv123")
        monkeypatch.setenv("ADMIN_NAME", "Env Admin")

        data = get_admin_data_from_args(_args())

        assert data == AdminUserData(email="env@example.com", password="FromEnv123", name="Env Admin")


class TestValidate:
    def test_valid(self) -> None:
        assert validate(AdminUserData("root@example.com", "Secret123", "Root")) is None

    def test_bad_email(self) -> None:
        assert validate(AdminUserData("root", "Secret123", "Root")) == "Invalid email: root"

    def test_short_password(self) -> None:
        error = validate(AdminUserData("root@example.com", "abc", "Root"))
        assert error is not None
        assert "at least" in error

    def test_blank_name(self) -> None:
        assert validate(AdminUserData("root@example.com", "Secret123", "  ")) == "Name cannot be empty"


class TestCreateAdminUser:
    """Tests for create_admin_user against the configured database."""

    @pytest.mark.asyncio
    async def test_creates_admin_with_hashed_password(self) -> None:
        profile = await create_admin_user(
            AdminUserData("bootstrap@example.com", "Secret123", "Bootstrap"),
        )

        assert profile.role == "admin"
        assert profile.status == "active"

        async with transaction() as session:
            stored = await UserRepository(session).get_user_password(profile.id)
        assert stored is not None
        assert stored != "Secret123"
        assert await verify_password("Secret123", stored)

        with pytest.raises(DuplicateEntryError):
            await create_admin_user(
                AdminUserData("bootstrap@example.com", "Secret123", "Bootstrap"),
            )
