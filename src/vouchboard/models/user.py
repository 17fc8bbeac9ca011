# src/vouchboard/models/user.py
"""SQLAlchemy models for user accounts and vouch edges."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vouchboard.core.permissions import Role
from vouchboard.core.settings import settings
from vouchboard.db.session import Base
from vouchboard.db.time import utcnow


class User(Base):
    """Marketplace account with profile, role and reputation counters."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(
            Role,
            native_enum=False,
            length=16,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=Role.USER,
    )

    # Profile fields are flattened; the API nests them under "profile".
    avatar: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=lambda: settings.default_avatar,
    )
    bio: Mapped[str | None] = mapped_column(String(500), nullable=True)
    custom_url: Mapped[str | None] = mapped_column(String(100), unique=True, nullable=True)

    reputation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Denormalized; kept in step with post create/delete.
    post_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    last_active: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Vouch(Base):
    """Endorsement edge from one user to another.

    A single row backs both ``vouches.given`` of the voucher and
    ``vouches.received`` of the vouchee, so the two views cannot diverge.
    """

    __tablename__ = "vouch"

    voucher_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    vouchee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
