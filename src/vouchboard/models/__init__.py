# src/vouchboard/models/__init__.py
"""SQLAlchemy models for the Vouchboard application."""

from .category import Category
from .post import Post, PostLike, PostTag, Reply, ReplyLike
from .user import User, Vouch

__all__ = [
    "Category",
    "Post", "PostLike", "PostTag", "Reply", "ReplyLike",
    "User", "Vouch",
]
