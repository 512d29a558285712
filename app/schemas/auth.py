"""Authentication schemas: login input, identity projection and session data."""

from datetime import datetime
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

type Role = Literal["user", "admin"]


class LoginRequest(BaseModel):
    """Login credentials. Missing values are treated as invalid credentials."""

    email: str | None = Field(default=None, examples=["admin@example.com"])
    password: str | None = Field(default=None, examples=["secret123"])


class AuthIdentity(BaseModel):
    """Identity returned by a successful authorization. Never carries the hash."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    email: str
    name: str
    avatar: str | None = None
    role: Role = "user"


class AuthUser(AuthIdentity):
    """Identity plus credential fields, used inside the authentication gate only."""

    password: str
    status: Literal["active", "banned"] = "active"

    def to_identity(self) -> AuthIdentity:
        return AuthIdentity.model_validate(self.model_dump(exclude={"password", "status"}))


class AuthStatus(StrEnum):
    """Outcome of an authorization attempt."""

    OK = "ok"
    BANNED = "banned"
    INVALID_CREDENTIALS = "invalid_credentials"


class AuthResult(BaseModel):
    """Typed authorization result; ``identity`` is set only when status is OK."""

    status: AuthStatus
    identity: AuthIdentity | None = None

    @property
    def ok(self) -> bool:
        return self.status is AuthStatus.OK and self.identity is not None


class SessionData(BaseModel):
    """Session decoded from a valid, unexpired session token."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    email: str
    name: str
    avatar: str | None = None
    role: Role
    issued_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
