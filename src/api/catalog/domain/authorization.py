"""Collaboration authorization rules.

Stateless policy consulted before any change to a hoagie's collaborator
set. Adding and removing collaborators share the same rule.
"""

from __future__ import annotations

from catalog.domain.aggregates import Hoagie
from shared_kernel.identity import UserId


def can_mutate_collaborators(hoagie: Hoagie, requester_id: UserId) -> bool:
    """Whether ``requester_id`` may add or remove collaborators on ``hoagie``.

    Only the creator may. Collaborators cannot change the set themselves.
    """
    return hoagie.creator_id == requester_id
