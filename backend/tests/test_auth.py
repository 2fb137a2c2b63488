"""Tests for registration, login and token round trip."""
import pytest

from forum.services.auth import (
    authenticate,
    create_access_token,
    decode_access_token,
    ensure_admin,
    hash_password,
    register_user,
    verify_password,
)
from forum.services.errors import ConflictError, UnauthorizedError


def test_hash_and_verify():
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_malformed_hash_is_false():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_register_sets_user_role(db):
    user = register_user(db, "Alice", "a@x.com", "password1")
    assert user.role == "USER"
    assert user.email == "a@x.com"
    assert user.password_hash != "password1"


def test_register_duplicate_email_conflict(db):
    register_user(db, "Alice", "a@x.com", "password1")
    with pytest.raises(ConflictError):
        register_user(db, "Another", "a@x.com", "password2")


def test_login_wrong_password_unauthorized(db):
    register_user(db, "Alice", "a@x.com", "password1")
    assert authenticate(db, "a@x.com", "password1").name == "Alice"
    with pytest.raises(UnauthorizedError):
        authenticate(db, "a@x.com", "nope")
    with pytest.raises(UnauthorizedError):
        authenticate(db, "missing@x.com", "password1")


def test_token_round_trip(alice):
    payload = decode_access_token(create_access_token(alice.id, alice.email, alice.role))
    assert payload["sub"] == str(alice.id)
    assert payload["email"] == alice.email
    assert payload["role"] == "USER"
    assert decode_access_token("garbage") is None


def test_ensure_admin_creates_then_promotes(db, alice):
    created = ensure_admin(db, "Root", "root@x.com", "rootpass")
    assert created.role == "ADMIN"
    assert ensure_admin(db, "Root", "root@x.com", "rootpass").id == created.id

    promoted = ensure_admin(db, "ignored", alice.email, "ignored")
    assert promoted.id == alice.id
    assert promoted.role == "ADMIN"
