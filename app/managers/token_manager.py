"""Session token manager: signed JWTs with an absolute lifetime."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from app.configs import settings
from app.schemas.auth import AuthIdentity, SessionData

SESSION_TOKEN_TYPE = "session"


def session_lifetime() -> timedelta:
    """Return the absolute session lifetime."""
    return timedelta(hours=settings.SESSION_MAX_AGE_HOURS)


def create_session_token(
    identity: AuthIdentity,
    issued_at: datetime | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed session token for an authenticated identity.

    The expiry is fixed at issuance; it does not slide with activity.

    Args:
        identity: Authenticated identity projection
        issued_at: Issue time (defaults to now)
        expires_delta: Optional lifetime override

    Returns:
        str: Encoded JWT session token
    """
    now = issued_at or datetime.now(UTC)
    expire = now + (expires_delta or session_lifetime())

    to_encode = {
        "sub": str(identity.id),
        "email": identity.email,
        "name": identity.name,
        "avatar": identity.avatar,
        "role": identity.role,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "iss": settings.JWT_ISSUER,
        "type": SESSION_TOKEN_TYPE,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def decode_session_token(token: str | None) -> SessionData | None:
    """
    Decode and validate a session token.

    Signature, issuer, token type and expiry are checked on every call.

    Args:
        token: JWT token string

    Returns:
        SessionData | None: Decoded session or None if invalid or expired
    """
    if not token:
        return None

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    subject = payload.get("sub")
    role = payload.get("role")
    if payload.get("type") != SESSION_TOKEN_TYPE or not subject or role not in ("user", "admin"):
        return None

    try:
        user_id = int(subject)
    except ValueError:
        return None

    return SessionData(
        user_id=user_id,
        email=payload.get("email") or "",
        name=payload.get("name") or "",
        avatar=payload.get("avatar"),
        role=role,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )
