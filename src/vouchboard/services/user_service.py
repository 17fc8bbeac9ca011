"""CRUD-style helpers for managing user accounts."""
from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vouchboard.core import security
from vouchboard.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from vouchboard.db.time import utcnow
from vouchboard.models import User
from vouchboard.schemas.user import ProfileUpdateRequest, RegisterRequest

__all__ = [
    "get_user",
    "get_user_or_404",
    "get_user_by_username",
    "register_user",
    "authenticate",
    "update_profile",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_or_404(db: Session, user_id: int) -> User:
    """Return a user by primary key or raise ``NotFoundError``."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(db: Session, username: str) -> User:
    """Return a user by username or raise ``NotFoundError``."""
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def register_user(db: Session, payload: RegisterRequest) -> User:
    """Create a new account with a hashed password.

    Raises:
        ConflictError: If the username or email is already registered.
    """
    email = payload.email.lower()
    existing = (
        db.query(User)
        .filter(or_(User.username == payload.username, User.email == email))
        .first()
    )
    if existing is not None:
        if existing.username == payload.username:
            raise ConflictError("Username is already taken")
        raise ConflictError("Email is already registered")

    user = User(
        username=payload.username,
        email=email,
        password_hash=security.hash_password(payload.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Username or email is already registered") from err
    db.refresh(user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user matching the credentials and refresh ``last_active``.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong.
        PermissionDeniedError: If the account is banned.
    """
    user = db.query(User).filter(User.email == email.lower()).first()
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        raise PermissionDeniedError("Account is banned")

    user.last_active = utcnow()
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, principal: User, update: ProfileUpdateRequest) -> User:
    """Apply the provided profile fields to the principal's own account.

    Raises:
        ConflictError: If ``custom_url`` or ``email`` belongs to another user.
    """
    if update.custom_url:
        taken = (
            db.query(User)
            .filter(User.custom_url == update.custom_url, User.id != principal.id)
            .first()
        )
        if taken is not None:
            raise ConflictError("Custom URL is already taken")

    email = update.email.lower() if update.email else None
    if email and email != principal.email:
        taken = db.query(User).filter(User.email == email, User.id != principal.id).first()
        if taken is not None:
            raise ConflictError("Email is already taken")

    if email:
        principal.email = email
    if update.bio:
        principal.bio = update.bio
    if update.custom_url:
        principal.custom_url = update.custom_url
    if update.avatar:
        principal.avatar = update.avatar

    db.add(principal)
    db.commit()
    db.refresh(principal)
    return principal
