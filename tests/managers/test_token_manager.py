# tests/managers/test_token_manager.py
"""Tests for app/managers/token_manager.py module."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from app.configs import settings
from app.managers.token_manager import (
    SESSION_TOKEN_TYPE,
    create_session_token,
    decode_session_token,
    session_lifetime,
)
from app.schemas.auth import AuthIdentity

IDENTITY = AuthIdentity(
    id=7,
    email="admin@example.com",
    name="Admin",
    avatar="https://example.com/a.png",
    role="admin",
)


def _encode(claims: dict, secret: str | None = None) -> str:
    return jwt.encode(
        claims,
        secret or settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def _claims(**overrides: object) -> dict:
    now = datetime.now(UTC)
    claims = {
        "sub": "7",
        "email": "admin@example.com",
        "name": "Admin",
        "avatar": None,
        "role": "admin",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=1)).timestamp()),
        "iss": settings.JWT_ISSUER,
        "type": SESSION_TOKEN_TYPE,
    }
    claims.update(overrides)
    return claims


class TestCreateSessionToken:
    """Tests for create_session_token."""

    def test_round_trip_carries_identity(self) -> None:
        session = decode_session_token(create_session_token(IDENTITY))

        assert session is not None
        assert session.user_id == 7
        assert session.email == "admin@example.com"
        assert session.name == "Admin"
        assert session.avatar == "https://example.com/a.png"
        assert session.role == "admin"
        assert session.is_admin is True

    def test_expiry_is_fixed_at_issue_time(self) -> None:
        issued = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        token = create_session_token(IDENTITY, issued_at=issued)

        claims = jwt.get_unverified_claims(token)

        assert claims["iat"] == int(issued.timestamp())
        assert claims["exp"] == int((issued + session_lifetime()).timestamp())
        assert claims["type"] == SESSION_TOKEN_TYPE
        assert claims["iss"] == settings.JWT_ISSUER

    def test_session_lifetime_matches_settings(self) -> None:
        assert session_lifetime() == timedelta(hours=settings.SESSION_MAX_AGE_HOURS)


class TestDecodeSessionToken:
    """Tests for decode_session_token."""

    def test_missing_token(self) -> None:
        assert decode_session_token(None) is None
        assert decode_session_token("") is None

    def test_garbage_token(self) -> None:
        assert decode_session_token("not.a.jwt") is None

    def test_expired_token(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=2)
        token = create_session_token(IDENTITY, issued_at=issued, expires_delta=timedelta(hours=1))
        assert decode_session_token(token) is None

    def test_wrong_signature(self) -> None:
        assert decode_session_token(_encode(_claims(), secret="another-secret")) is None

    def test_wrong_issuer(self) -> None:
        assert decode_session_token(_encode(_claims(iss="someone-else"))) is None

    def test_wrong_token_type(self) -> None:
        assert decode_session_token(_encode(_claims(type="refresh"))) is None

    def test_unknown_role(self) -> None:
        assert decode_session_token(_encode(_claims(role="owner"))) is None

    def test_non_numeric_subject(self) -> None:
        assert decode_session_token(_encode(_claims(sub="abc"))) is None

    def test_valid_claims(self) -> None:
        session = decode_session_token(_encode(_claims(role="user")))

        assert session is not None
        assert session.role == "user"
        assert session.is_admin is False
        assert session.expires_at > session.issued_at
