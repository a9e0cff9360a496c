"""Player Service — sync/async variants, pool routing, overload and pool isolation.

Tests cover:
    - Sync list-all, page, lookup, save (and their failure modes)
    - Save refreshes the cached entry
    - Async variants run on the right pool and propagate errors via the Future
    - A saturated or shut-down pool rejects on the Future, never by raising
    - Blocked record-pool work does not delay pagination-pool work
"""

import threading

import pytest

from app.core.errors import (
    InvalidSortDirectionError, OverloadedError, RetrievalFailureError,
)
from app.core.player import Player, PlayerCollection
from app.infrastructure.worker_pool import (
    BoundedWorkerPool, PoolClosedError, WorkerPools,
)
from app.services.player_service import create_player_service
from tests.fake_repository import FakePlayerRepository


# ─── Synchronous ─────────────────────────────────────────────────

def test_get_players_in_store_order(small_pools):
    repo = FakePlayerRepository([Player("C"), Player("A"), Player("B")])
    service = create_player_service(repo, small_pools)
    players = service.get_players()
    assert isinstance(players, PlayerCollection)
    assert [p.player_id for p in players] == ["C", "A", "B"]


def test_get_players_failure_is_retrieval_failure(player_service, fake_repository):
    fake_repository.fail_with = RuntimeError("store down")
    with pytest.raises(RetrievalFailureError):
        player_service.get_players()


def test_sync_calls_run_on_callers_thread(player_service, fake_repository):
    player_service.get_page(0, 2)
    assert fake_repository.threads["find_all_paged"] == threading.current_thread().name


def test_get_player_by_id_absent_is_none(player_service):
    assert player_service.get_player_by_id("Z") is None


def test_save_refreshes_cached_entry(player_service, fake_repository):
    assert player_service.get_player_by_id("A").first_name == "Hank"
    player_service.save_player(Player("A", first_name="Henry"))
    assert player_service.get_player_by_id("A").first_name == "Henry"
    assert fake_repository.calls["find_by_id"] == 1


def test_save_makes_previously_absent_player_visible(player_service):
    assert player_service.get_player_by_id("Z") is None
    player_service.save_player(Player("Z"))
    assert player_service.get_player_by_id("Z") == Player("Z")


def test_save_failure_leaves_cache_untouched(player_service, fake_repository):
    player_service.get_player_by_id("A")
    fake_repository.fail_with = RuntimeError("disk full")
    with pytest.raises(RetrievalFailureError) as exc_info:
        player_service.save_player(Player("A", first_name="Henry"))
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    fake_repository.fail_with = None
    assert player_service.get_player_by_id("A").first_name == "Hank"


# ─── Asynchronous ────────────────────────────────────────────────

def test_get_players_async(player_service, fake_repository):
    players = player_service.get_players_async().result(timeout=5)
    assert len(players) == 3
    assert fake_repository.threads["find_all"].startswith("TestPlayer-")


def test_get_page_async_runs_on_pagination_pool(player_service, fake_repository):
    result = player_service.get_page_async(1, 2, "id", "asc").result(timeout=5)
    assert [p.player_id for p in result.players] == ["C"]
    assert fake_repository.threads["find_all_paged"].startswith("TestPaginated-")


def test_get_player_by_id_async_runs_on_record_pool(player_service, fake_repository):
    player = player_service.get_player_by_id_async("B").result(timeout=5)
    assert player.last_name == "Ruth"
    assert fake_repository.threads["find_by_id"].startswith("TestPlayer-")


def test_save_player_async(player_service, fake_repository):
    saved = player_service.save_player_async(Player("D")).result(timeout=5)
    assert saved == Player("D")
    assert fake_repository.threads["save"].startswith("TestPlayer-")


def test_async_lookup_failure_still_yields_none(player_service, fake_repository):
    fake_repository.fail_with = RuntimeError("store down")
    assert player_service.get_player_by_id_async("A").result(timeout=5) is None


def test_async_validation_error_delivered_on_future(player_service):
    future = player_service.get_page_async(0, 10, "id", "sideways")
    assert isinstance(future.exception(timeout=5), InvalidSortDirectionError)


def test_async_retrieval_failure_delivered_on_future(player_service, fake_repository):
    fake_repository.fail_with = RuntimeError("store down")
    future = player_service.get_page_async(0, 10)
    assert isinstance(future.exception(timeout=5), RetrievalFailureError)


# ─── Backpressure & Isolation ────────────────────────────────────

@pytest.fixture
def tight_pools():
    pools = WorkerPools(
        record=BoundedWorkerPool(
            "record", core_size=1, max_size=1, queue_capacity=1,
            keep_alive_seconds=1, thread_name_prefix="TightPlayer-",
        ),
        pagination=BoundedWorkerPool(
            "pagination", core_size=1, max_size=1, queue_capacity=1,
            keep_alive_seconds=1, thread_name_prefix="TightPaginated-",
        ),
    )
    yield pools
    pools.shutdown(wait=False)


def test_saturated_pool_rejects_on_future(fake_repository, tight_pools):
    service = create_player_service(fake_repository, tight_pools)
    fake_repository.block = threading.Event()
    try:
        running = service.get_player_by_id_async("A")
        queued = service.get_player_by_id_async("B")
        rejected = service.get_player_by_id_async("C")

        assert rejected.done()
        error = rejected.exception()
        assert isinstance(error, OverloadedError)
        assert error.pool == "record"
        assert error.context.operation == "get_player_by_id"
    finally:
        fake_repository.block.set()
    assert running.result(timeout=5).player_id == "A"
    assert queued.result(timeout=5).player_id == "B"


def test_record_pool_saturation_does_not_reject_pagination(fake_repository, tight_pools):
    service = create_player_service(fake_repository, tight_pools)
    fake_repository.block = threading.Event()
    try:
        service.get_player_by_id_async("A")
        service.get_player_by_id_async("B")
        assert isinstance(service.get_players_async().exception(timeout=1), OverloadedError)

        page = service.get_page_async(0, 2).result(timeout=2)
        assert [p.player_id for p in page.players] == ["A", "B"]
    finally:
        fake_repository.block.set()


def test_blocked_lookups_do_not_delay_pagination(player_service, fake_repository):
    fake_repository.add(Player("D"))
    fake_repository.block = threading.Event()
    try:
        lookups = [player_service.get_player_by_id_async(pid) for pid in "ABCD"]
        page = player_service.get_page_async(0, 3).result(timeout=2)
        assert page.total_elements == 4
        assert not any(f.done() for f in lookups)
    finally:
        fake_repository.block.set()
    assert [f.result(timeout=5).player_id for f in lookups] == list("ABCD")


def test_async_after_shutdown_fails_on_future(player_service, small_pools):
    small_pools.shutdown(wait=True)
    futures = [
        player_service.get_players_async(),
        player_service.get_page_async(0, 10),
        player_service.get_player_by_id_async("A"),
        player_service.save_player_async(Player("D")),
    ]
    assert all(isinstance(f.exception(timeout=0), PoolClosedError) for f in futures)
