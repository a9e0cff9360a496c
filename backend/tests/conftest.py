"""Root conftest — shared test configuration and fixtures."""

import os

import pytest

# Ensure tests never touch a developer database or sleep on lookups
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PLAYER_LOOKUP_DELAY_SECONDS", "0")

from app.core.player import Player  # noqa: E402
from app.infrastructure.worker_pool import BoundedWorkerPool, WorkerPools  # noqa: E402
from app.services.player_service import create_player_service  # noqa: E402
from tests.fake_repository import FakePlayerRepository  # noqa: E402


@pytest.fixture
def players_abc():
    return [
        Player("A", first_name="Hank", last_name="Aaron"),
        Player("B", first_name="Babe", last_name="Ruth"),
        Player("C", first_name="Ty", last_name="Cobb"),
    ]


@pytest.fixture
def fake_repository(players_abc):
    return FakePlayerRepository(players_abc)


@pytest.fixture
def small_pools():
    """Small, fast pools so saturation is reachable in a test."""
    pools = WorkerPools(
        record=BoundedWorkerPool(
            "record", core_size=1, max_size=2, queue_capacity=2,
            keep_alive_seconds=1, thread_name_prefix="TestPlayer-",
        ),
        pagination=BoundedWorkerPool(
            "pagination", core_size=1, max_size=1, queue_capacity=2,
            keep_alive_seconds=1, thread_name_prefix="TestPaginated-",
        ),
    )
    yield pools
    pools.shutdown(wait=False)


@pytest.fixture
def player_service(fake_repository, small_pools):
    return create_player_service(fake_repository, small_pools)
