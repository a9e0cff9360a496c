"""Pagination Engine — store delegation, normalization before IO, failure wrapping."""

import pytest

from app.core.domain_types import SortDirection
from app.core.errors import InvalidSortDirectionError, RetrievalFailureError
from app.services.pagination_engine import PaginationEngine


@pytest.fixture
def engine(fake_repository):
    return PaginationEngine(fake_repository)


def _ids(result):
    return [p.player_id for p in result.players]


def test_first_page_sorted_by_id(engine):
    result = engine.get_page(0, 2, "id", "asc")
    assert _ids(result) == ["A", "B"]
    assert result.total_elements == 3
    assert result.total_pages == 2
    assert result.has_next
    assert not result.has_previous
    assert result.is_first
    assert not result.is_last


def test_second_page_sorted_by_id(engine):
    result = engine.get_page(1, 2, "id", "asc")
    assert _ids(result) == ["C"]
    assert not result.has_next
    assert result.has_previous
    assert result.is_last


def test_descending_order(engine):
    assert _ids(engine.get_page(0, 10, "id", "DESC")) == ["C", "B", "A"]


def test_sort_by_camel_case_field(engine):
    # Aaron, Cobb, Ruth
    assert _ids(engine.get_page(0, 10, "lastName", "asc")) == ["A", "C", "B"]


def test_store_receives_normalized_parameters(engine, fake_repository):
    engine.get_page(-4, 1000, None, None)
    assert fake_repository.last_paged_args == (0, 100, "player_id", SortDirection.ASC)


def test_invalid_direction_raises_before_store_access(engine, fake_repository):
    with pytest.raises(InvalidSortDirectionError):
        engine.get_page(0, 10, "id", "sideways")
    assert fake_repository.calls["find_all_paged"] == 0


def test_store_failure_wrapped_with_cause(engine, fake_repository):
    boom = RuntimeError("connection reset")
    fake_repository.fail_with = boom
    with pytest.raises(RetrievalFailureError) as exc_info:
        engine.get_page(0, 10)
    assert exc_info.value.__cause__ is boom


def test_unknown_sort_field_surfaces_as_retrieval_failure(engine):
    with pytest.raises(RetrievalFailureError) as exc_info:
        engine.get_page(0, 10, "salary", "asc")
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_engine_holds_no_state_between_calls(engine):
    first = engine.get_page(0, 2)
    engine.get_page(1, 2, "id", "desc")
    again = engine.get_page(0, 2)
    assert _ids(first) == _ids(again)
