"""Pagination/listing protocol shared by all list operations.

Pages are 1-indexed. ``limit`` is clamped server-side so a caller can never
request an unbounded result set. Out-of-range pages are not errors: they
yield no items alongside the full matching total.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

from shared_kernel.exceptions import InvalidInputError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PageRequest:
    """A validated page/limit pair.

    Use ``PageRequest.create`` rather than the constructor so that bounds
    are enforced.
    """

    page: int
    limit: int

    @classmethod
    def create(cls, page: int, limit: int, max_limit: int) -> PageRequest:
        """Validate and bound a page request.

        Args:
            page: 1-indexed page number
            limit: Requested page size
            max_limit: Largest page size the server honors

        Returns:
            PageRequest with ``limit`` clamped to ``max_limit``

        Raises:
            InvalidInputError: If page or limit is below 1
        """
        if page < 1:
            raise InvalidInputError(f"page must be >= 1, got {page}")
        if limit < 1:
            raise InvalidInputError(f"limit must be >= 1, got {limit}")
        return cls(page=page, limit=min(limit, max_limit))

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit

    def is_past(self, total: int) -> bool:
        """Whether this page starts after the last of ``total`` rows.

        Such pages are answered without querying rows, so page numbers too
        large for a database OFFSET still yield an empty page.
        """
        return self.page > 1 and self.offset >= total


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total number of matches."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        """Number of pages needed to show ``total`` items."""
        return math.ceil(self.total / self.limit) if self.limit else 0

    def map(self, fn: Callable[[T], U]) -> Page[U]:
        """Return a page with ``fn`` applied to every item."""
        return Page(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            limit=self.limit,
        )

    def with_items(self, items: list[U]) -> Page[U]:
        """Return a page carrying ``items`` with the same paging metadata."""
        return Page(items=items, total=self.total, page=self.page, limit=self.limit)
