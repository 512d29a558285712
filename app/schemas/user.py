"""
User profile schemas.

The password hash never appears in any schema returned to a client.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_AVATAR_LENGTH, MAX_BIO_LENGTH, MAX_NAME_LENGTH, settings


class UserProfile(BaseModel):
    """Profile projection of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    avatar: str | None = None
    bio: str | None = None
    role: str
    status: str
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    """
    Profile update body.

    ``newPassword`` triggers the password branch, which requires
    ``currentPassword``. Name, bio and avatar are applied independently.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    bio: str | None = None
    avatar: str | None = None
    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")

    def profile_fields(self) -> dict[str, str | None]:
        """Return the name/bio/avatar values present in the body."""
        return self.model_dump(include={"name", "bio", "avatar"}, exclude_unset=True)

    def field_errors(self) -> dict[str, str]:
        """
        Return a field -> message map for the submitted body.

        Returns:
            dict[str, str]: Empty when the body is valid
        """
        errors: dict[str, str] = {}
        if "name" in self.model_fields_set:
            if not (self.name or "").strip():
                errors["name"] = "Name cannot be empty"
            elif len(self.name or "") > MAX_NAME_LENGTH:
                errors["name"] = f"Name must be at most {MAX_NAME_LENGTH} characters"
        if self.bio and len(self.bio) > MAX_BIO_LENGTH:
            errors["bio"] = f"Bio must be at most {MAX_BIO_LENGTH} characters"
        if self.avatar and len(self.avatar) > MAX_AVATAR_LENGTH:
            errors["avatar"] = f"Avatar URL must be at most {MAX_AVATAR_LENGTH} characters"

        if self.new_password:
            if not self.current_password:
                errors["currentPassword"] = "Current password is required"
            elif len(self.new_password) < settings.MIN_PASSWORD_LENGTH:
                errors["newPassword"] = (
                    f"New password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
                )
        return errors


class UserCreate(BaseModel):
    """User row inserted out-of-band. ``password`` is already hashed."""

    email: str
    name: str
    password: str
    avatar: str | None = None
    bio: str | None = None
    role: Literal["user", "admin"] = "user"
    status: Literal["active", "banned"] = "active"


class UserUpdate(BaseModel):
    """Partial user update for administrative changes."""

    name: str | None = None
    avatar: str | None = None
    bio: str | None = None
    role: Literal["user", "admin"] | None = None
    status: Literal["active", "banned"] | None = None
