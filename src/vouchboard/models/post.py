# src/vouchboard/models/post.py
"""SQLAlchemy models for posts, replies, tags and likes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vouchboard.db.session import Base
from vouchboard.db.time import utcnow

from .category import Category
from .user import User


class Post(Base):
    """Marketplace listing owned by its author.

    Replies, tags and likes are owned by the post and go away with it.
    """

    __tablename__ = "post"
    __table_args__ = (Index("ix_post_created_at", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    # Nulled out when the category is deleted.
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("category.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    is_free: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    author: Mapped[User] = relationship("User", lazy="joined")
    category: Mapped[Category | None] = relationship("Category", lazy="joined")
    tag_rows: Mapped[list[PostTag]] = relationship(
        "PostTag",
        cascade="all, delete-orphan",
        order_by="PostTag.position",
    )
    likes: Mapped[list[PostLike]] = relationship(
        "PostLike",
        cascade="all, delete-orphan",
        order_by="PostLike.created_at",
    )
    replies: Mapped[list[Reply]] = relationship(
        "Reply",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Reply.id",
    )

    @property
    def tags(self) -> list[str]:
        """Return tag strings in the order they were supplied."""
        return [row.tag for row in self.tag_rows]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        existing = {row.tag: row for row in self.tag_rows}
        rows: list[PostTag] = []
        for idx, tag in enumerate(dict.fromkeys(values)):
            row = existing.get(tag) or PostTag(tag=tag)
            row.position = idx
            rows.append(row)
        # Rows dropped from the list are deleted as orphans.
        self.tag_rows = rows

    @property
    def like_user_ids(self) -> list[int]:
        """Return ids of users who liked the post."""
        return [like.user_id for like in self.likes]


class PostTag(Base):
    """Tag attached to a post; ``position`` preserves the submitted order."""

    __tablename__ = "post_tag"
    __table_args__ = (Index("ix_post_tag_tag", "tag"),)

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag: Mapped[str] = mapped_column(String(50), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class PostLike(Base):
    """Per-user like on a post."""

    __tablename__ = "post_like"

    # Composite primary key prevents duplicate likes from the same user.
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Reply(Base):
    """Comment on a post."""

    __tablename__ = "reply"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    post: Mapped[Post] = relationship("Post", back_populates="replies")
    user: Mapped[User] = relationship("User", lazy="joined")
    likes: Mapped[list[ReplyLike]] = relationship(
        "ReplyLike",
        cascade="all, delete-orphan",
        order_by="ReplyLike.created_at",
    )

    @property
    def like_user_ids(self) -> list[int]:
        """Return ids of users who liked the reply."""
        return [like.user_id for like in self.likes]


class ReplyLike(Base):
    """Per-user like on a reply."""

    __tablename__ = "reply_like"

    reply_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("reply.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
