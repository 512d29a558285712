"""Comment schemas."""

from datetime import datetime
from re import fullmatch

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import EMAIL_PATTERN, MAX_EMAIL_LENGTH, MAX_NAME_LENGTH


class CommentCreate(BaseModel):
    """
    Comment creation body.

    ``author_name`` and ``author_email`` are only read for guests; a signed-in
    author's identity comes from the session.
    """

    post_id: int | None = Field(default=None, examples=[1])
    content: str | None = Field(default=None, examples=["Great post!"])
    author_name: str | None = Field(default=None, examples=["Jane"])
    author_email: str | None = Field(default=None, examples=["jane@example.com"])

    def field_errors(self, *, guest: bool) -> dict[str, str]:
        """
        Return a field -> message map for the submitted body.

        Args:
            guest: Whether the author has no session

        Returns:
            dict[str, str]: Empty when the body is valid
        """
        errors: dict[str, str] = {}
        if not self.post_id:
            errors["post_id"] = "Post ID is required"
        if not (self.content or "").strip():
            errors["content"] = "Comment content is required"
        if errors or not guest:
            return errors

        if not (self.author_name or "").strip():
            errors["author_name"] = "Name is required"
        elif len(self.author_name or "") > MAX_NAME_LENGTH:
            errors["author_name"] = f"Name must be at most {MAX_NAME_LENGTH} characters"
        if not (self.author_email or "").strip():
            errors["author_email"] = "Email is required"
        elif len(self.author_email or "") > MAX_EMAIL_LENGTH:
            errors["author_email"] = f"Email must be at most {MAX_EMAIL_LENGTH} characters"
        elif not fullmatch(EMAIL_PATTERN, self.author_email or ""):
            errors["author_email"] = "Invalid email format"
        return errors


class CommentUpdate(BaseModel):
    """Moderation body; ``approved`` is the only mutable field."""

    approved: bool | None = None


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    user_id: int | None = None
    author_name: str
    author_email: str
    author_avatar: str | None = None
    content: str
    approved: bool
    created_at: datetime


class CommentWithPostTitle(CommentRead):
    """Admin listing row with the parent post title."""

    post_title: str | None = None


class PendingCount(BaseModel):
    count: int


class NewComment(BaseModel):
    """Comment row as stored, after identity resolution and moderation."""

    post_id: int
    user_id: int | None = None
    author_name: str
    author_email: str
    author_avatar: str | None = None
    content: str
    approved: bool = False
