"""User database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class UserDB(SQLModel, table=True):
    """
    User database model.

    Users are created out-of-band (see ``auto/create_admin.py``); the API only
    reads them and updates their profile and password.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    id: int | None = Field(default=None, primary_key=True, description="User ID")

    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique)",
    )
    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name",
    )
    password: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Hashed password",
    )
    avatar: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Avatar URL",
    )
    bio: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Short biography",
    )

    role: str = Field(
        default="user",
        sa_column=Column(String(20), nullable=False, server_default="user", index=True),
        description="User role (user, admin)",
    )
    status: str = Field(
        default="active",
        sa_column=Column(String(20), nullable=False, server_default="active"),
        description="Account status (active, banned)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "email": "admin@example.com",
                "name": "Admin",
                "role": "admin",
                "status": "active",
            },
        },
    )
