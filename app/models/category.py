"""Category database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class CategoryDB(SQLModel, table=True):
    """Category database model. Posts reference categories optionally."""

    __tablename__ = cast("declared_attr[str]", "categories")

    id: int | None = Field(default=None, primary_key=True, description="Category ID")
    name: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False),
        description="Category name (unique)",
    )
    slug: str | None = Field(
        default=None,
        sa_column=Column(String(100), unique=True),
        description="URL-friendly slug",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
