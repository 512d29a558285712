"""Comment database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from sqlalchemy import DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class CommentDB(SQLModel, table=True):
    """
    Comment database model.

    Every comment belongs to exactly one post. ``user_id`` is set for
    registered authors; guests are identified by name and email only.
    """

    __tablename__ = cast("declared_attr[str]", "comments")

    __table_args__ = (Index("ix_comments_post_approved", "post_id", "approved"),)

    id: int | None = Field(default=None, primary_key=True, description="Comment ID")

    post_id: int = Field(
        sa_column=Column(
            "post_id",
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Post ID (foreign key to posts.id)",
    )
    user_id: int | None = Field(
        default=None,
        sa_column=Column(
            "user_id",
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        description="Registered author ID",
    )
    author_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Author display name",
    )
    author_email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Author email",
    )
    author_avatar: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Author avatar URL",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Comment body",
    )
    approved: bool = Field(default=False, nullable=False, description="Visible to the public")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
