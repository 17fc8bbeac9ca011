# src/vouchboard/api/v1/endpoints/posts.py
"""Post-related endpoints for the Vouchboard API."""

from fastapi import APIRouter, Query, status

from vouchboard.api.v1.dependencies import CurrentUserDep, SessionDep
from vouchboard.models import Post
from vouchboard.schemas.post import (
    LikesResponse,
    PostCreate,
    PostResponse,
    PostSort,
    PostSummary,
    PostUpdate,
    RepliesResponse,
    ReplyCreate,
    ReplyResponse,
)
from vouchboard.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostSummary])
async def list_posts(
    db: SessionDep,
    category: int | None = Query(None, description="Filter by category id"),
    author: int | None = Query(None, description="Filter by author id"),
    q: str | None = Query(None, description="Substring of title/content or exact tag"),
    sort_by: PostSort = Query("latest", alias="sortBy", description="Result ordering"),
    sort: PostSort | None = Query(None, description="Same as sortBy; wins when both are given"),
) -> list[Post]:
    """List posts newest first with optional filters.

    Args:
        db: Database session
        category: Only posts in this category
        author: Only posts by this user
        q: Free-text filter
        sort_by: ``latest``, ``popular``, ``price-low``, ``price-high`` or ``relevance``
        sort: Alternative name for ``sortBy``

    Returns:
        Matching posts
    """
    return post_service.list_posts(
        db,
        category_id=category,
        author_id=author,
        q=q,
        sort=sort or sort_by,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep) -> Post:
    """Get a post with its replies; each call counts as one view."""
    return post_service.view_post(db, post_id)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Create a new listing authored by the caller."""
    return post_service.create_post(db, current_user, post_data)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    update: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Update a post; allowed for its author and for moderators."""
    return post_service.update_post(db, current_user, post_id, update)


@router.delete("/{post_id}")
async def delete_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> dict[str, str]:
    """Delete a post; allowed for its author and for moderators."""
    post_service.delete_post(db, current_user, post_id)
    return {"detail": "Post deleted"}


@router.post("/{post_id}/like", response_model=LikesResponse)
async def like_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikesResponse:
    """Toggle the caller's like on a post."""
    likes = post_service.toggle_post_like(db, current_user, post_id)
    return LikesResponse(likes=likes)


@router.post("/{post_id}/replies", response_model=RepliesResponse)
async def add_reply(
    post_id: int,
    reply: ReplyCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> RepliesResponse:
    """Reply to a post and return every reply in order."""
    replies = post_service.add_reply(db, current_user, post_id, reply.content)
    return RepliesResponse(replies=[ReplyResponse.model_validate(r) for r in replies])


@router.post("/{post_id}/replies/{reply_id}/like", response_model=LikesResponse)
async def like_reply(
    post_id: int,
    reply_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> LikesResponse:
    """Toggle the caller's like on a reply."""
    likes = post_service.toggle_reply_like(db, current_user, post_id, reply_id)
    return LikesResponse(likes=likes)
