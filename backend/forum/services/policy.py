"""
Authorization policy for questions and replies.
Update: only the author. Delete: the author or any ADMIN.
Ownership is decided on the stable user id resolved from the token; email equality is the fallback
when either side has no id (e.g. a caller built from a bare email).
"""
from typing import Protocol
from uuid import UUID

from forum.models.user import ROLE_ADMIN
from forum.services.errors import ForbiddenError


class Identity(Protocol):
    id: UUID | None
    email: str
    role: str


def is_owner(actor: Identity, owner: Identity) -> bool:
    actor_id = getattr(actor, "id", None)
    owner_id = getattr(owner, "id", None)
    if actor_id is not None and owner_id is not None:
        return actor_id == owner_id
    return actor.email == owner.email


def can_mutate(actor: Identity, owner: Identity) -> bool:
    return is_owner(actor, owner)


def can_delete(actor: Identity, owner: Identity) -> bool:
    return is_owner(actor, owner) or actor.role == ROLE_ADMIN


def ensure_can_mutate(actor: Identity, owner: Identity, kind: str) -> None:
    if not can_mutate(actor, owner):
        raise ForbiddenError(f"You are not authorized to update this {kind}")


def ensure_can_delete(actor: Identity, owner: Identity, kind: str) -> None:
    if not can_delete(actor, owner):
        raise ForbiddenError(f"You are not authorized to delete this {kind}")
