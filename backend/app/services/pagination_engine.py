"""Pagination Engine — normalizes a page request, queries the store, wraps the envelope.

Invariants:
    - Parameters are normalized (core/pagination.py) before the store is touched
    - InvalidSortDirectionError propagates untouched; it is the caller's mistake
    - Any store failure surfaces as RetrievalFailureError with the cause chained
    - Stateless: one instance is shared by every thread

Design Decisions:
    - Pure math lives in core/pagination.py; this class is the IO shell around it
"""

import logging

from app.core.errors import RetrievalFailureError
from app.core.pagination import PageResult, build_page_result, normalize_page_request
from app.core.repository_protocols import PlayerRepository

logger = logging.getLogger(__name__)


class PaginationEngine:
    """Paginated, sorted listing over a PlayerRepository."""

    def __init__(self, repository: PlayerRepository):
        self._repository = repository

    def get_page(
        self,
        page: int,
        size: int,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> PageResult:
        request = normalize_page_request(page, size, sort_field, sort_direction)
        try:
            content, total = self._repository.find_all_paged(
                request.page, request.size,
                request.sort_field, request.sort_direction,
            )
        except Exception as e:
            logger.error(
                f"Exception in get_page: {e}",
                extra={"page": request.page, "size": request.size,
                       "sort_field": request.sort_field},
            )
            raise RetrievalFailureError("retrieve paginated players") from e

        result = build_page_result(request, content, total)
        logger.info(
            "Paginated players retrieved",
            extra={"page": result.page, "size": result.size,
                   "total_elements": result.total_elements},
        )
        return result
