"""Database models for the application."""

from app.models.category import CategoryDB
from app.models.comment import CommentDB
from app.models.post import PostDB
from app.models.user import UserDB

__all__ = ["CategoryDB", "CommentDB", "PostDB", "UserDB"]
