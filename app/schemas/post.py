"""
Post schemas.

Request bodies are lenient (every field optional) so that missing values are
reported in the envelope's field map by the route handler rather than by the
framework.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_EXCERPT_LENGTH, MAX_SLUG_LENGTH, MAX_TITLE_LENGTH
from app.schemas.comment import CommentRead

LENGTH_LIMITS = {
    "title": MAX_TITLE_LENGTH,
    "slug": MAX_SLUG_LENGTH,
    "excerpt": MAX_EXCERPT_LENGTH,
}


class PostCreate(BaseModel):
    """Post creation body."""

    title: str | None = Field(default=None, examples=["Hello World"])
    slug: str | None = Field(default=None, examples=["hello-world"])
    content: str | None = Field(default=None, examples=["<p>First post</p>"])
    excerpt: str | None = None
    category_id: int | None = None
    published: bool = False

    def field_errors(self) -> dict[str, str]:
        """
        Return a field -> message map for missing or oversized values.

        Returns:
            dict[str, str]: Empty when the body is valid
        """
        errors: dict[str, str] = {}
        if not (self.title or "").strip():
            errors["title"] = "Title is required"
        elif len(self.title or "") > MAX_TITLE_LENGTH:
            errors["title"] = f"Title must be at most {MAX_TITLE_LENGTH} characters"
        if not (self.slug or "").strip():
            errors["slug"] = "Slug is required"
        elif len(self.slug or "") > MAX_SLUG_LENGTH:
            errors["slug"] = f"Slug must be at most {MAX_SLUG_LENGTH} characters"
        if not (self.content or "").strip():
            errors["content"] = "Content is required"
        if self.excerpt and len(self.excerpt) > MAX_EXCERPT_LENGTH:
            errors["excerpt"] = f"Excerpt must be at most {MAX_EXCERPT_LENGTH} characters"
        return errors


class PostUpdate(BaseModel):
    """Partial post update. Only fields present in the body are applied."""

    title: str | None = None
    slug: str | None = None
    content: str | None = None
    excerpt: str | None = None
    category_id: int | None = None
    published: bool | None = None

    def field_errors(self) -> dict[str, str]:
        """Reject supplied values that are empty or too long for their column."""
        errors: dict[str, str] = {}
        for field in ("title", "slug", "content"):
            if field in self.model_fields_set and not (getattr(self, field) or "").strip():
                errors[field] = f"{field.capitalize()} cannot be empty"
        for field, limit in LENGTH_LIMITS.items():
            value = getattr(self, field)
            if field not in errors and value and len(value) > limit:
                errors[field] = f"{field.capitalize()} must be at most {limit} characters"
        if "published" in self.model_fields_set and self.published is None:
            errors["published"] = "Published must be a boolean"
        return errors


class PostSummary(BaseModel):
    """Public list projection: no content, joined category name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    excerpt: str | None = None
    category_id: int | None = None
    category_name: str | None = None
    created_at: datetime


class PostDetail(PostSummary):
    """Full post with joined category name."""

    content: str
    published: bool
    updated_at: datetime


class PostWithComments(BaseModel):
    """A published post together with its approved comments."""

    post: PostDetail
    comments: list[CommentRead]


class PostCreated(BaseModel):
    id: int
    slug: str
