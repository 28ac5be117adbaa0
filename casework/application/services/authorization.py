"""Role and ownership checks shared by the workflow services."""

from __future__ import annotations

from collections.abc import Iterable

from casework.domain.entities import Actor, DocumentEntity
from casework.domain.enums import ActorRole
from casework.domain.exceptions import ForbiddenException


def require_role(actor: Actor, allowed: Iterable[ActorRole], action: str) -> None:
    """Raise ForbiddenException unless the actor's role is in allowed."""
    if actor.role not in set(allowed):
        raise ForbiddenException(actor.role.value, action)


def require_owner(actor: Actor, document: DocumentEntity, action: str) -> None:
    """Clients may only act on their own documents; other roles pass."""
    if actor.role == ActorRole.CLIENT and not document.belongs_to(actor.id):
        raise ForbiddenException(
            actor.role.value,
            action,
            reason=f"Document {document.id} does not belong to actor {actor.id}",
        )
