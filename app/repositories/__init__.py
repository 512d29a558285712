"""Repository layer for database operations."""

from app.repositories.base import CrudRepository
from app.repositories.category import CategoryRepository
from app.repositories.comment import CommentRepository
from app.repositories.post import PostRepository
from app.repositories.user import UserRepository

__all__ = [
    "CategoryRepository",
    "CommentRepository",
    "CrudRepository",
    "PostRepository",
    "UserRepository",
]
