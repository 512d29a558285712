"""Post database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class PostDB(SQLModel, table=True):
    """
    Post database model.

    ``slug`` is the URL key and is unique across all posts. ``category_id`` is
    optional; deleting a category leaves its posts uncategorised.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (Index("ix_posts_published_created", "published", "created_at"),)

    id: int | None = Field(default=None, primary_key=True, description="Post ID")

    title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Post title",
    )
    slug: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post content (HTML)",
    )
    excerpt: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Post excerpt",
    )
    category_id: int | None = Field(
        default=None,
        sa_column=Column(
            "category_id",
            ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        description="Category ID (foreign key to categories.id)",
    )
    published: bool = Field(default=False, nullable=False, description="Published flag")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
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
                "title": "Hello World",
                "slug": "hello-world",
                "content": "<p>First post</p>",
                "excerpt": "First post",
                "category_id": 2,
                "published": True,
            },
        },
    )
