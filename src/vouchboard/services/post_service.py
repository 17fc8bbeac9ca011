"""Service-level helpers for listings, replies and likes."""
from __future__ import annotations

import logging

from sqlalchemy import case, func, or_, select
from sqlalchemy.orm import Session

from vouchboard.core.errors import NotFoundError, PermissionDeniedError
from vouchboard.core.permissions import Permission, ensure_can_modify_post, has_permission
from vouchboard.db.time import utcnow
from vouchboard.models import Category, Post, PostLike, PostTag, Reply, ReplyLike, User
from vouchboard.schemas.post import PostCreate, PostSort, PostUpdate

__all__ = [
    "list_posts",
    "get_post_or_404",
    "view_post",
    "create_post",
    "update_post",
    "delete_post",
    "toggle_post_like",
    "add_reply",
    "toggle_reply_like",
]

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _adjust_post_count(db: Session, user_id: int, delta: int) -> None:
    """Shift a user's denormalized post counter, never going below zero."""
    new_value = User.post_count + delta
    db.query(User).filter(User.id == user_id).update(
        {User.post_count: case((new_value < 0, 0), else_=new_value)},
        synchronize_session="fetch",
    )


def _ensure_category_exists(db: Session, category_id: int) -> None:
    if db.get(Category, category_id) is None:
        raise NotFoundError("Category not found")


def list_posts(
    db: Session,
    *,
    category_id: int | None = None,
    author_id: int | None = None,
    q: str | None = None,
    sort: PostSort = "latest",
) -> list[Post]:
    """Return posts matching every provided filter.

    Args:
        db: Database session
        category_id: Only posts in this category
        author_id: Only posts written by this user
        q: Case-insensitive substring of title or content, or an exact tag
        sort: ``latest`` and ``relevance`` order newest first; ``popular`` by
            like count; ``price-low``/``price-high`` by price

    Returns:
        Matching posts; ties always fall back to newest first.
    """
    query = db.query(Post)

    if category_id is not None:
        query = query.filter(Post.category_id == category_id)
    if author_id is not None:
        query = query.filter(Post.author_id == author_id)
    if q:
        pattern = f"%{_escape_like(q)}%"
        tagged = select(PostTag.post_id).where(PostTag.tag == q)
        query = query.filter(
            or_(
                Post.title.ilike(pattern, escape="\\"),
                Post.content.ilike(pattern, escape="\\"),
                Post.id.in_(tagged),
            )
        )

    newest = (Post.created_at.desc(), Post.id.desc())
    if sort == "popular":
        like_count = (
            select(func.count())
            .where(PostLike.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        query = query.order_by(like_count.desc(), *newest)
    elif sort == "price-low":
        query = query.order_by(Post.price.asc(), *newest)
    elif sort == "price-high":
        query = query.order_by(Post.price.desc(), *newest)
    else:
        # No ranking exists for "relevance"; it shares the default order.
        query = query.order_by(*newest)

    return query.all()


def get_post_or_404(db: Session, post_id: int) -> Post:
    """Return a post by id or raise ``NotFoundError``."""
    post = db.query(Post).filter(Post.id == post_id).first()
    if post is None:
        raise NotFoundError("Post not found")
    return post


def view_post(db: Session, post_id: int) -> Post:
    """Return a post with its replies and count the view."""
    post = get_post_or_404(db, post_id)
    db.query(Post).filter(Post.id == post.id).update(
        {Post.views: Post.views + 1},
        synchronize_session="fetch",
    )
    db.commit()
    db.refresh(post)
    return post


def create_post(db: Session, principal: User, payload: PostCreate) -> Post:
    """Create a listing authored by the principal and bump their post count.

    Raises:
        NotFoundError: If the category does not exist.
    """
    _ensure_category_exists(db, payload.category_id)

    now = utcnow()
    post = Post(
        title=payload.title,
        content=payload.content,
        author_id=principal.id,
        category_id=payload.category_id,
        price=0.0 if payload.is_free else payload.price,
        is_free=payload.is_free,
        created_at=now,
        updated_at=now,
    )
    post.tags = payload.tags
    db.add(post)
    db.flush()
    _adjust_post_count(db, principal.id, 1)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", principal.id, post.id)
    return post


def update_post(db: Session, principal: User, post_id: int, update: PostUpdate) -> Post:
    """Apply the provided fields to a post the principal may modify.

    Raises:
        NotFoundError: If the post or the new category does not exist.
        PermissionDeniedError: If the principal is neither the author nor a
            moderator, or a non-moderator tries to change ``is_pinned``.
    """
    post = get_post_or_404(db, post_id)
    ensure_can_modify_post(principal, post, "update")

    fields = update.model_dump(exclude_unset=True, exclude_none=True)
    if "is_pinned" in fields and not has_permission(principal.role, Permission.MODERATE_POSTS):
        raise PermissionDeniedError("Not authorized to pin posts")
    if "category_id" in fields:
        _ensure_category_exists(db, fields["category_id"])

    for key in ("title", "content", "category_id", "is_sold", "is_pinned"):
        if key in fields:
            setattr(post, key, fields[key])
    if "tags" in fields:
        post.tags = fields["tags"]

    if "is_free" in fields:
        post.is_free = fields["is_free"]
    if post.is_free:
        post.price = 0.0
    elif "price" in fields:
        post.price = fields["price"]

    post.updated_at = utcnow()
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, principal: User, post_id: int) -> None:
    """Delete a post with its replies and likes and decrement the author's count.

    Raises:
        NotFoundError: If the post does not exist.
        PermissionDeniedError: If the principal may not modify the post.
    """
    post = get_post_or_404(db, post_id)
    ensure_can_modify_post(principal, post, "delete")

    author_id = post.author_id
    db.delete(post)
    db.flush()
    _adjust_post_count(db, author_id, -1)
    db.commit()
    logger.info("User %s deleted post %s by %s", principal.id, post_id, author_id)


def toggle_post_like(db: Session, principal: User, post_id: int) -> list[int]:
    """Like the post, or remove the principal's like if already present."""
    post = get_post_or_404(db, post_id)
    existing = next((like for like in post.likes if like.user_id == principal.id), None)
    if existing is not None:
        post.likes.remove(existing)
    else:
        post.likes.append(PostLike(user_id=principal.id))
    db.commit()
    logger.debug("User %s toggled like on post %s", principal.id, post.id)
    return post.like_user_ids


def add_reply(db: Session, principal: User, post_id: int, content: str) -> list[Reply]:
    """Append a reply by the principal and return the post's replies in order."""
    post = get_post_or_404(db, post_id)
    post.replies.append(Reply(user_id=principal.id, content=content))
    db.commit()
    db.refresh(post)
    return list(post.replies)


def toggle_reply_like(db: Session, principal: User, post_id: int, reply_id: int) -> list[int]:
    """Like a reply, or remove the principal's like if already present.

    Raises:
        NotFoundError: If the post, or the reply within that post, does not exist.
    """
    post = get_post_or_404(db, post_id)
    reply = (
        db.query(Reply)
        .filter(Reply.id == reply_id, Reply.post_id == post.id)
        .first()
    )
    if reply is None:
        raise NotFoundError("Reply not found")

    existing = next((like for like in reply.likes if like.user_id == principal.id), None)
    if existing is not None:
        reply.likes.remove(existing)
    else:
        reply.likes.append(ReplyLike(user_id=principal.id))
    db.commit()
    logger.debug("User %s toggled like on reply %s", principal.id, reply.id)
    return reply.like_user_ids
