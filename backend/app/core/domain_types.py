"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PlayerId wraps str — the catalog identifier is opaque, never parsed
    - Page size is bounded MIN_PAGE_SIZE–MAX_PAGE_SIZE, page index is >= 0
    - Sort direction encoded as Enum — no raw "asc"/"desc" matching outside parse()

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType

from app.core.errors import InvalidSortDirectionError


# ─── Identity Types ──────────────────────────────────────────────

PlayerId = NewType("PlayerId", str)


# ─── Pagination Bounds ───────────────────────────────────────────

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# largest row offset a store can bind (signed 64-bit)
MAX_OFFSET = 2**63 - 1


# ─── Enums ───────────────────────────────────────────────────────

class SortDirection(str, Enum):
    """Ordering applied by the store to a paginated query."""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        """Case-insensitive parse. Blank or None means ascending."""
        if value is None or not value.strip():
            return cls.ASC
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidSortDirectionError(value) from None


class PoolName(str, Enum):
    """The two worker pools backing async dispatch."""
    RECORD = "record"
    PAGINATION = "pagination"
