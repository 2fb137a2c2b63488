"""
Shared test setup: in-memory SQLite (one shared connection), no default-page seed, no admin bootstrap.
Env must be set before forum.config is imported.
"""
import os
import uuid

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SEED_DEFAULT_PAGES"] = "false"
os.environ["ADMIN_EMAIL"] = ""
os.environ["ENV"] = "test"

import pytest

from forum.database import Base, SessionLocal, create_tables, engine
from forum.models.page import Page
from forum.models.user import User, ROLE_ADMIN, ROLE_USER
from forum.services.auth import create_access_token, hash_password

# bcrypt is slow on purpose; hash once for every fixture user
PASSWORD = "testpass123"
_PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def db():
    """Fresh schema per test; yields a session."""
    Base.metadata.drop_all(bind=engine)
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _make_user(db, name: str, role: str = ROLE_USER, email: str | None = None) -> User:
    user = User(
        name=name,
        email=email or f"{name.lower()}-{uuid.uuid4().hex[:8]}@spark-forum.io",
        password_hash=_PASSWORD_HASH,
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_user(db):
    def factory(name: str = "user", role: str = ROLE_USER, email: str | None = None) -> User:
        return _make_user(db, name, role, email)
    return factory


@pytest.fixture
def alice(make_user):
    return make_user("Alice")


@pytest.fixture
def bob(make_user):
    return make_user("Bob")


@pytest.fixture
def admin(make_user):
    return make_user("Admin", role=ROLE_ADMIN)


@pytest.fixture
def cse(db):
    page = Page(name="CSE", description="Computer Science and Engineering")
    db.add(page)
    db.commit()
    db.refresh(page)
    return page


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email, user.role)}"}
