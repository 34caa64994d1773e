"""Hoagie aggregate for the catalog context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from catalog.domain.value_objects import HoagieId, HoagieUpdate
from shared_kernel.exceptions import InvalidInputError
from shared_kernel.identity import UserId


def _validate_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise InvalidInputError("Hoagie name is required")
    return name.strip()


def _validate_ingredients(ingredients: Iterable[str] | None) -> tuple[str, ...]:
    if ingredients is None:
        raise InvalidInputError("Ingredients are required")
    cleaned = tuple(ingredients)
    if not cleaned:
        raise InvalidInputError("A hoagie needs at least one ingredient")
    if any(not isinstance(i, str) or not i.strip() for i in cleaned):
        raise InvalidInputError("Ingredients must be non-empty strings")
    return tuple(i.strip() for i in cleaned)


@dataclass
class Hoagie:
    """Hoagie aggregate: a named, user-created sandwich.

    The comment count is denormalized from the comment collection. It is
    loaded from the store and changed only through the repository's atomic
    counter operations, never by assigning to this object.

    Business rules:
    - Name is non-blank
    - Ingredients are a non-empty ordered list of non-blank strings
    - The creator is set at creation and never reassigned
    - The creator is never a member of its own collaborator set
    - comment_count is never negative
    """

    id: HoagieId
    name: str
    ingredients: tuple[str, ...]
    creator_id: UserId
    picture: str | None = None
    collaborator_ids: frozenset[UserId] = field(default_factory=frozenset)
    comment_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        name: str,
        ingredients: Iterable[str],
        creator_id: UserId,
        picture: str | None = None,
    ) -> Hoagie:
        """Factory method for creating a new hoagie.

        Args:
            name: Display name
            ingredients: Ordered ingredient list, at least one entry
            creator_id: The creating user
            picture: Optional picture reference

        Returns:
            A new Hoagie with no collaborators and zero comments

        Raises:
            InvalidInputError: If name or ingredients are missing or blank
        """
        return cls(
            id=HoagieId.generate(),
            name=_validate_name(name),
            ingredients=_validate_ingredients(ingredients),
            creator_id=creator_id,
            picture=picture or None,
        )

    def is_creator(self, user_id: UserId) -> bool:
        """Whether ``user_id`` created this hoagie."""
        return self.creator_id == user_id

    def is_collaborator(self, user_id: UserId) -> bool:
        """Whether ``user_id`` is in the collaborator set."""
        return user_id in self.collaborator_ids

    def ensure_can_collaborate(self, user_id: UserId) -> None:
        """Reject the creator as a collaborator candidate.

        Raises:
            InvalidInputError: If ``user_id`` is the creator
        """
        if self.is_creator(user_id):
            raise InvalidInputError("The creator cannot be added as a collaborator")

    def apply_update(self, update: HoagieUpdate) -> None:
        """Apply a partial update to the mutable fields.

        Validation runs for every supplied field before any is assigned, so
        a rejected update leaves the aggregate untouched.

        Raises:
            InvalidInputError: If a supplied field is invalid or the new
                collaborator set contains the creator
        """
        name = self.name if update.name is None else _validate_name(update.name)
        ingredients = (
            self.ingredients
            if update.ingredients is None
            else _validate_ingredients(update.ingredients)
        )
        collaborators = self.collaborator_ids
        if update.collaborator_ids is not None:
            for user_id in update.collaborator_ids:
                self.ensure_can_collaborate(user_id)
            collaborators = frozenset(update.collaborator_ids)

        self.name = name
        self.ingredients = ingredients
        self.collaborator_ids = collaborators
        if update.picture is not None:
            self.picture = update.picture or None

    def __eq__(self, other: object) -> bool:
        """Hoagies are equal if they have the same ID."""
        if not isinstance(other, Hoagie):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
