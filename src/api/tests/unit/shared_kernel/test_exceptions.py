"""Unit tests for the shared error kinds."""

from shared_kernel.exceptions import (
    DomainError,
    ForbiddenError,
    InconsistencyError,
    InvalidInputError,
    NotFoundError,
)


def test_not_found_carries_entity_and_id():
    error = NotFoundError("hoagie", "01ARZ3NDEKTSV4RRFFQ69G5FAV")

    assert error.entity == "hoagie"
    assert error.entity_id == "01ARZ3NDEKTSV4RRFFQ69G5FAV"
    assert str(error) == "Hoagie 01ARZ3NDEKTSV4RRFFQ69G5FAV not found"


def test_error_kinds_share_domain_base():
    for kind in (ForbiddenError, InvalidInputError, InconsistencyError):
        assert issubclass(kind, DomainError)
    assert issubclass(NotFoundError, DomainError)


def test_error_kinds_subclass_closest_builtin():
    assert issubclass(NotFoundError, LookupError)
    assert issubclass(ForbiddenError, PermissionError)
    assert issubclass(InvalidInputError, ValueError)
