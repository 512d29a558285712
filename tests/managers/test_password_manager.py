# tests/managers/test_password_manager.py
"""Tests for app/managers/password_manager.py module."""

import pytest
from bcrypt import gensalt, hashpw

from app.managers.password_manager import (
    PasswordHasher,
    get_password_hasher,
    hash_password,
    verify_password,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(level="low")


class TestPasswordHasher:
    """Tests for the PasswordHasher class."""

    def test_hash_uses_argon2id(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("secret123")
        assert hashed.startswith("$argon2id$")

    def test_hash_is_salted(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("secret123") != hasher.hash("secret123")

    def test_hash_rejects_empty_password(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="Password cannot be empty"):
            hasher.hash("")

    def test_verify_correct_password(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("secret123")
        assert hasher.verify("secret123", hashed) is True

    def test_verify_wrong_password(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("secret123")
        assert hasher.verify("wrong", hashed) is False

    def test_verify_missing_hash_is_false(self, hasher: PasswordHasher) -> None:
        """A missing hash never matches, but still runs a dummy check."""
        assert hasher.verify("secret123", None) is False
        assert hasher.verify("secret123", "   ") is False

    def test_verify_unknown_format_is_false(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("secret123", "not-a-hash") is False

    @pytest.mark.parametrize("prefix", [b"2a", b"2b"])
    def test_verify_bcrypt_hash(self, hasher: PasswordHasher, prefix: bytes) -> None:
        """Hashes written before argon2 (bcrypt, cost 10) still log people in."""
        stored = hashpw(b"secret123", gensalt(rounds=10, prefix=prefix)).decode()

        assert hasher.verify("secret123", stored) is True
        assert hasher.verify("wrong", stored) is False

    def test_new_hashes_are_never_bcrypt(self, hasher: PasswordHasher) -> None:
        assert hasher.context.identify(hasher.hash("secret123")) == "argon2"


class TestModuleHelpers:
    def test_get_password_hasher_is_shared(self) -> None:
        assert get_password_hasher() is get_password_hasher()

    @pytest.mark.asyncio
    async def test_async_round_trip(self) -> None:
        hashed = await hash_password("secret123")

        assert await verify_password("secret123", hashed) is True
        assert await verify_password("other", hashed) is False

    @pytest.mark.asyncio
    async def test_async_verifies_bcrypt(self) -> None:
        stored = hashpw(b"secret123", gensalt(rounds=10)).decode()

        assert await verify_password("secret123", stored) is True
