"""Vouch and reputation operations between users."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from vouchboard.core.errors import BadRequestError
from vouchboard.models import User, Vouch
from vouchboard.schemas.user import VouchSummary

from .user_service import get_user_or_404

__all__ = ["vouch_summary", "toggle_vouch", "give_rep"]

logger = logging.getLogger(__name__)


def vouch_summary(db: Session, user_id: int) -> VouchSummary:
    """Return the users ``user_id`` vouched for and the users vouching for them."""
    given = (
        db.query(Vouch.vouchee_id)
        .filter(Vouch.voucher_id == user_id)
        .order_by(Vouch.created_at, Vouch.vouchee_id)
        .all()
    )
    received = (
        db.query(Vouch.voucher_id)
        .filter(Vouch.vouchee_id == user_id)
        .order_by(Vouch.created_at, Vouch.voucher_id)
        .all()
    )
    return VouchSummary(
        given=[row[0] for row in given],
        received=[row[0] for row in received],
    )


def toggle_vouch(db: Session, principal: User, target_id: int) -> VouchSummary:
    """Add the principal's vouch for the target, or remove it if present.

    The edge is a single row, so the voucher's ``given`` and the target's
    ``received`` change together in one commit.

    Returns:
        The target user's vouch summary after the toggle.

    Raises:
        NotFoundError: If the target user does not exist.
        BadRequestError: If the principal targets themselves.
    """
    target = get_user_or_404(db, target_id)
    if target.id == principal.id:
        raise BadRequestError("You cannot vouch yourself")

    existing = db.get(Vouch, (principal.id, target.id))
    if existing is not None:
        db.delete(existing)
        logger.debug("User %s withdrew vouch for %s", principal.id, target.id)
    else:
        db.add(Vouch(voucher_id=principal.id, vouchee_id=target.id))
        logger.debug("User %s vouched for %s", principal.id, target.id)
    db.commit()

    return vouch_summary(db, target.id)


def give_rep(db: Session, principal: User, target_id: int) -> int:
    """Increment the target's reputation by one and return the new value.

    Repeat calls from the same principal keep incrementing.

    Raises:
        NotFoundError: If the target user does not exist.
        BadRequestError: If the principal targets themselves.
    """
    target = get_user_or_404(db, target_id)
    if target.id == principal.id:
        raise BadRequestError("You cannot give reputation to yourself")

    db.query(User).filter(User.id == target.id).update(
        {User.reputation: User.reputation + 1},
        synchronize_session="fetch",
    )
    db.commit()
    db.refresh(target)
    return target.reputation
