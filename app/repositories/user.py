"""User repository: credentials lookup and profile maintenance."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import UserDB
from app.repositories.base import (
    delete_record,
    find_all_records,
    find_record,
    insert_record,
    update_record,
    utcnow,
)
from app.schemas.auth import AuthUser
from app.schemas.user import UserCreate, UserProfile, UserUpdate


class UserRepository:
    """
    Repository for User database operations.

    Only :meth:`find_auth_user` and :meth:`get_user_password` ever return the
    password hash; every other read goes through the profile projection.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_all(self) -> list[UserDB]:
        return await find_all_records(self.session, UserDB)

    async def find_by_id(self, record_id: int) -> UserDB | None:
        return await find_record(self.session, UserDB, record_id)

    async def find_auth_user(self, email: str) -> AuthUser | None:
        """
        Get the credential record for an email address.

        Args:
            email: User email

        Returns:
            AuthUser | None: Identity with hash and status, or None if unknown
        """
        result = await self.session.execute(select(UserDB).where(UserDB.email == email))
        user = result.scalar_one_or_none()
        return AuthUser.model_validate(user) if user else None

    async def get_profile(self, user_id: int) -> UserProfile | None:
        """
        Get a user's profile without the password hash.

        Args:
            user_id: User ID

        Returns:
            UserProfile | None: Profile if the user exists
        """
        user = await self.find_by_id(user_id)
        return UserProfile.model_validate(user) if user else None

    async def get_user_password(self, user_id: int) -> str | None:
        """Get the stored password hash for a user."""
        result = await self.session.execute(select(UserDB.password).where(UserDB.id == user_id))
        return result.scalar_one_or_none()

    async def update_profile(self, user_id: int, data: dict[str, str | None]) -> bool:
        """
        Update name, bio and avatar.

        Args:
            user_id: User ID
            data: Subset of ``name``, ``bio``, ``avatar``; other keys are ignored

        Returns:
            bool: True if the user exists and something was set
        """
        values = {key: value for key, value in data.items() if key in ("name", "bio", "avatar")}
        if not values:
            return False
        values["updated_at"] = utcnow()
        return await update_record(self.session, UserDB, user_id, values)

    async def update_password(self, user_id: int, password_hash: str) -> bool:
        """
        Replace a user's password hash.

        Args:
            user_id: User ID
            password_hash: Already hashed password

        Returns:
            bool: True if the user exists
        """
        return await update_record(
            self.session,
            UserDB,
            user_id,
            {"password": password_hash, "updated_at": utcnow()},
        )

    async def create(self, data: UserCreate) -> int:
        """
        Create a user.

        Raises:
            DuplicateEntryError: If the email already exists
        """
        return await insert_record(self.session, UserDB(**data.model_dump()))

    async def update(self, record_id: int, data: UserUpdate) -> bool:
        values = data.model_dump(exclude_unset=True)
        if not values:
            return False
        values["updated_at"] = utcnow()
        return await update_record(self.session, UserDB, record_id, values)

    async def delete(self, record_id: int) -> bool:
        return await delete_record(self.session, UserDB, record_id)
