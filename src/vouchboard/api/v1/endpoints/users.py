"""User profile, vouch and reputation endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from vouchboard.api.v1.dependencies import CurrentUserDep, SessionDep
from vouchboard.models import User
from vouchboard.schemas.user import (
    ProfileUpdateRequest,
    ReputationResponse,
    UserPrivate,
    UserPublic,
    VouchResponse,
)
from vouchboard.services import social_service, user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/profile", response_model=UserPrivate)
async def update_my_profile(
    update: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Update the caller's bio, custom URL, email or avatar."""
    return user_service.update_profile(db, current_user, update)


@router.get("/{username}", response_model=UserPublic)
async def get_user_profile(username: str, db: SessionDep) -> UserPublic:
    """Return a user's public profile including their vouch sets."""
    user = user_service.get_user_by_username(db, username)
    profile = UserPublic.model_validate(user)
    return profile.model_copy(update={"vouches": social_service.vouch_summary(db, user.id)})


@router.post("/{user_id}/vouch", response_model=VouchResponse)
async def vouch_for_user(user_id: int, current_user: CurrentUserDep, db: SessionDep) -> VouchResponse:
    """Toggle the caller's vouch for another user."""
    vouches = social_service.toggle_vouch(db, current_user, user_id)
    return VouchResponse(vouches=vouches)


@router.post("/{user_id}/rep", response_model=ReputationResponse)
async def give_reputation(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReputationResponse:
    """Give another user one reputation point."""
    reputation = social_service.give_rep(db, current_user, user_id)
    return ReputationResponse(reputation=reputation)
