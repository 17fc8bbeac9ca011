# tests/test_set_role_script.py
"""Tests for the role maintenance command."""

import pytest

from vouchboard.core.permissions import Role
from vouchboard.models import User
from vouchboard.scripts import set_role


def test_set_role_by_email(db_session, test_user) -> None:
    user = set_role.set_role_by_email(db_session, "ALICE@example.com", Role.ADMIN)
    assert user is not None
    assert user.id == test_user.id
    assert user.role is Role.ADMIN


def test_set_role_by_email_unknown(db_session) -> None:
    assert set_role.set_role_by_email(db_session, "ghost@example.com", Role.ADMIN) is None


def test_parse_args() -> None:
    args = set_role.parse_args(["a@example.com", "moderator"])
    assert args.email == "a@example.com"
    assert args.role == "moderator"
    assert args.init_db is False


def test_parse_args_rejects_unknown_role() -> None:
    with pytest.raises(SystemExit):
        set_role.parse_args(["a@example.com", "superuser"])


def test_parse_args_requires_email_without_init_db() -> None:
    with pytest.raises(SystemExit):
        set_role.parse_args([])


def test_main_uses_session_factory(monkeypatch, db_session, test_user) -> None:
    user_id, email = test_user.id, test_user.email
    monkeypatch.setattr(set_role, "SessionLocal", lambda: db_session)
    assert set_role.main([email, "owner"]) == 0
    # main() closes the session, which detaches test_user.
    assert db_session.get(User, user_id).role is Role.OWNER


def test_main_reports_missing_user(monkeypatch, db_session) -> None:
    monkeypatch.setattr(set_role, "SessionLocal", lambda: db_session)
    assert set_role.main(["ghost@example.com", "admin"]) == 1
