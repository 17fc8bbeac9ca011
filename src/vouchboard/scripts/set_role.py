# src/vouchboard/scripts/set_role.py
"""
Maintenance command to change a user's role from the shell.

Typical use is bootstrapping the first admin after registering through the API:

    python -m vouchboard.scripts.set_role admin@example.com admin
"""

from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from vouchboard.core.permissions import Role
from vouchboard.db.session import SessionLocal, create_tables
from vouchboard.models import User

logger = logging.getLogger("vouchboard.scripts.set_role")


def set_role_by_email(db: Session, email: str, role: Role) -> User | None:
    """Set the role of the user registered with ``email``.

    Args:
        db: Database session
        email: Account email (matched case-insensitively)
        role: New role

    Returns:
        The updated user, or None if no account uses that email
    """
    user = db.query(User).filter(User.email == email.lower()).first()
    if user is None:
        return None
    user.role = role
    db.commit()
    db.refresh(user)
    return user


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Change the role of a Vouchboard user")
    p.add_argument("email", nargs="?", help="Email of the account to update")
    p.add_argument(
        "role",
        nargs="?",
        choices=[role.value for role in Role],
        help="Role to assign",
    )
    p.add_argument("--init-db", action="store_true",
                   help="Create missing tables before updating")
    args = p.parse_args(argv)
    if not args.init_db and (args.email is None or args.role is None):
        p.error("email and role are required unless --init-db is given")
    if (args.email is None) != (args.role is None):
        p.error("email and role must be given together")
    return args


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = parse_args(argv)

    if args.init_db:
        create_tables()
        logger.info("Database tables created")
    if args.email is None:
        return 0

    db = SessionLocal()
    try:
        user = set_role_by_email(db, args.email, Role(args.role))
    finally:
        db.close()

    if user is None:
        logger.error("User not found: %s", args.email)
        return 1
    logger.info("User %s role updated to %s", user.username, user.role.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
