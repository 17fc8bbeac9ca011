# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from vouchboard.core.permissions import Role  # noqa: E402
from vouchboard.core.security import create_access_token, hash_password  # noqa: E402
from vouchboard.db.session import Base  # noqa: E402
from vouchboard.db.session import get_db as app_get_session  # noqa: E402
from vouchboard.main import app as fastapi_app  # noqa: E402
from vouchboard.models import Category, Post, User  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"

_USER_COUNTER = count(1)
# Hashing is slow; every fixture user shares one hash.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with the shared test password."""

    def _make_user(username: str | None = None, role: Role = Role.USER, **fields: object) -> User:
        n = next(_USER_COUNTER)
        username = username or f"user{n}"
        email = fields.pop("email", f"{username}@example.com")
        user = User(
            username=username,
            email=email,
            password_hash=_PASSWORD_HASH,
            role=role,
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


def auth_headers(user: User) -> dict[str, str]:
    """Return authorization headers carrying a token for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def token_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building authorization headers for any user."""
    return auth_headers


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted regular user."""
    return make_user("alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted regular user."""
    return make_user("bob")


@pytest.fixture()
def moderator(make_user: Callable[..., User]) -> User:
    return make_user("mod", role=Role.MODERATOR)


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("admin", role=Role.ADMIN)


@pytest.fixture()
def owner_user(make_user: Callable[..., User]) -> User:
    return make_user("owner", role=Role.OWNER)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user)


@pytest.fixture()
def admin_token(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture()
def category(db_session: Session) -> Category:
    """Create a default test category."""
    category = Category(
        name="Digital Goods",
        slug="digital-goods",
        description="Software, keys and other downloads",
        order=1,
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture()
def test_post(db_session: Session, test_user: User, category: Category) -> Post:
    """Create a baseline post authored by ``test_user``."""
    post = Post(
        title="Test listing",
        content="Test post content",
        author_id=test_user.id,
        category_id=category.id,
        price=10.0,
        is_free=False,
        tags=["keys", "software"],
    )
    db_session.add(post)
    test_user.post_count += 1
    db_session.commit()
    db_session.refresh(post)
    return post
