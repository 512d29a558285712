"""Category schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.configs.settings import MAX_CATEGORY_SLUG_LENGTH, MAX_NAME_LENGTH


class CategoryCreate(BaseModel):
    name: str | None = None
    slug: str | None = None

    def field_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not (self.name or "").strip():
            errors["name"] = "Category name is required"
        elif len(self.name or "") > MAX_NAME_LENGTH:
            errors["name"] = f"Category name must be at most {MAX_NAME_LENGTH} characters"
        if self.slug and len(self.slug) > MAX_CATEGORY_SLUG_LENGTH:
            errors["slug"] = f"Slug must be at most {MAX_CATEGORY_SLUG_LENGTH} characters"
        return errors


class CategoryRead(BaseModel):
    """Category with the number of posts filed under it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str | None = None
    created_at: datetime
    post_count: int = 0


class CategoryUpdate(BaseModel):
    name: str | None = None
    slug: str | None = None
