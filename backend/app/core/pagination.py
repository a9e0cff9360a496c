"""Pagination — pure normalization of page requests and page-result assembly.

Invariants:
    - After normalization MIN_PAGE_SIZE <= size <= MAX_PAGE_SIZE and
      0 <= page * size <= MAX_OFFSET
    - Out-of-range inputs are clamped, never rejected
    - Invalid sort direction raises before any IO can happen
    - total_pages == ceil(total_elements / size)
    - has_next == (page < total_pages - 1), has_previous == (page > 0)
    - is_first == (page == 0), is_last == (page == total_pages - 1)

Design Decisions:
    - Pure functions, no store access: PaginationEngine (services/) owns the IO
    - Flags computed from the formulas above rather than from the slice length,
      so an empty catalog reports is_last=False with total_pages=0
"""

import math
from dataclasses import dataclass
from typing import Sequence

from app.core.domain_types import (
    MAX_OFFSET, MAX_PAGE_SIZE, MIN_PAGE_SIZE, SortDirection,
)
from app.core.player import ID_FIELD, Player, resolve_field_name


@dataclass(frozen=True)
class PageRequest:
    """Normalized page request, safe to hand to the store."""
    page: int
    size: int
    sort_field: str
    sort_direction: SortDirection

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class PageResult:
    """One page of players plus pagination metadata."""
    players: tuple[Player, ...]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size > 0 else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return self.page == self.total_pages - 1


def clamp_page(page: int, size: int = MIN_PAGE_SIZE) -> int:
    """Non-negative, and small enough that page * size is a valid 64-bit OFFSET."""
    return max(0, min(page, MAX_OFFSET // size))


def clamp_size(size: int) -> int:
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, size))


def normalize_sort_field(sort_field: str | None) -> str:
    """Blank → identifier field; known aliases → canonical; unknown passes through."""
    if sort_field is None or not sort_field.strip():
        return ID_FIELD
    return resolve_field_name(sort_field) or sort_field.strip()


def normalize_page_request(
    page: int,
    size: int,
    sort_field: str | None = None,
    sort_direction: str | None = None,
) -> PageRequest:
    """Clamp and default every parameter. Raises InvalidSortDirectionError."""
    direction = SortDirection.parse(sort_direction)
    size = clamp_size(size)
    return PageRequest(
        page=clamp_page(page, size),
        size=size,
        sort_field=normalize_sort_field(sort_field),
        sort_direction=direction,
    )


def build_page_result(
    request: PageRequest, content: Sequence[Player], total_elements: int,
) -> PageResult:
    """Wrap a store slice into a PageResult for the normalized request."""
    return PageResult(
        players=tuple(content),
        page=request.page,
        size=request.size,
        total_elements=total_elements,
    )
