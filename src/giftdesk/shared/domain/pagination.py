"""Pagination value objects and the generic paginated result."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import field_validator

from .value_object import SingleValueObject

T = TypeVar("T")
U = TypeVar("U")

MAX_PER_PAGE = 100


class Page(SingleValueObject):
    """1-based page number."""

    value: int = 1

    @field_validator("value")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Page must be greater than or equal to 1")
        return value

    @property
    def offset_factor(self) -> int:
        return self.value - 1

    def offset(self, per_page: PerPage) -> int:
        return self.offset_factor * per_page.value


class PerPage(SingleValueObject):
    value: int = 10

    @field_validator("value")
    @classmethod
    def _in_range(cls, value: int) -> int:
        if value < 1:
            raise ValueError("PerPage must be greater than or equal to 1")
        if value > MAX_PER_PAGE:
            raise ValueError(f"PerPage cannot exceed {MAX_PER_PAGE}")
        return value


class Total(SingleValueObject):
    value: int = 0

    @field_validator("value")
    @classmethod
    def _not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Total cannot be negative")
        return value


class SearchTerm(SingleValueObject):
    """Free-text filter: either empty (no filter) or at least two characters."""

    value: str = ""

    @field_validator("value")
    @classmethod
    def _min_length(cls, value: str) -> str:
        value = value.strip()
        if value and len(value) < 2:
            raise ValueError("Search term must be at least 2 characters long")
        return value

    @property
    def is_empty(self) -> bool:
        return not self.value

    def matches(self, *candidates: str) -> bool:
        """Case-insensitive substring match against any candidate."""
        if self.is_empty:
            return True
        needle = self.value.lower()
        return any(needle in candidate.lower() for candidate in candidates)


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of items plus the arithmetic the UI needs."""

    items: list[T]
    page: Page
    per_page: PerPage
    total: Total

    @property
    def total_pages(self) -> int:
        if self.total.value == 0:
            return 1
        return math.ceil(self.total.value / self.per_page.value)

    @property
    def has_next_page(self) -> bool:
        return self.page.value < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page.value > 1

    def map(self, fn: Callable[[T], U]) -> PaginatedResult[U]:
        return PaginatedResult(
            items=[fn(item) for item in self.items],
            page=self.page,
            per_page=self.per_page,
            total=self.total,
        )
