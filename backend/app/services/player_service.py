"""Player Service — synchronous and asynchronous forms of every catalog operation.

Invariants:
    - Sync methods run on the caller's thread and return or raise
    - *_async methods return a Future immediately and never raise
    - get_page_async runs on the pagination pool; every other async
      variant runs on the record pool
    - List-all, paginated listing and save failures surface as RetrievalFailureError
    - Single-record lookup never raises (absent or failed → None)
    - A successful save refreshes the cached entry for that player_id

Design Decisions:
    - Two pools isolate cheap paginated reads from slow single-record lookups
      (the lookup carries a latency floor), so neither class starves the other
    - Pools, cache and repository are injected: tests substitute small pools
      and a counting fake store
"""

import logging
from concurrent.futures import Future

from app.core.domain_types import PlayerId
from app.core.errors import RetrievalFailureError
from app.core.pagination import PageResult
from app.core.player import Player, PlayerCollection
from app.core.repository_protocols import PlayerRepository
from app.infrastructure.worker_pool import WorkerPools
from app.services.dispatch import dispatch
from app.services.pagination_engine import PaginationEngine
from app.services.player_cache import PlayerCache, PlayerLookup

logger = logging.getLogger(__name__)


class PlayerService:
    """Dispatch layer over the catalog: list-all, page, lookup, save."""

    def __init__(
        self,
        repository: PlayerRepository,
        pagination: PaginationEngine,
        lookup: PlayerLookup,
        pools: WorkerPools,
    ):
        self._repository = repository
        self._pagination = pagination
        self._lookup = lookup
        self._pools = pools

    @property
    def pools(self) -> WorkerPools:
        return self._pools

    # ─── List All ────────────────────────────────────────────────

    def get_players(self) -> PlayerCollection:
        try:
            players = self._repository.find_all()
        except Exception as e:
            logger.error(f"Exception in get_players: {e}")
            raise RetrievalFailureError("retrieve players") from e
        return PlayerCollection(tuple(players))

    def get_players_async(self) -> Future:
        return dispatch(
            self._pools.record, "get_players", self.get_players,
            summarize=lambda players: {"count": len(players)},
        )

    # ─── Paginated Listing ───────────────────────────────────────

    def get_page(
        self,
        page: int,
        size: int,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> PageResult:
        return self._pagination.get_page(page, size, sort_field, sort_direction)

    def get_page_async(
        self,
        page: int,
        size: int,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> Future:
        return dispatch(
            self._pools.pagination, "get_page", self.get_page,
            page, size, sort_field, sort_direction,
            log_fields={"page": page, "size": size},
        )

    # ─── Single Record ───────────────────────────────────────────

    def get_player_by_id(self, player_id: PlayerId) -> Player | None:
        return self._lookup.get_by_id(player_id)

    def get_player_by_id_async(self, player_id: PlayerId) -> Future:
        return dispatch(
            self._pools.record, "get_player_by_id", self.get_player_by_id,
            player_id,
            log_fields={"player_id": player_id},
            summarize=lambda player: {"found": player is not None},
        )

    # ─── Upsert ──────────────────────────────────────────────────

    def save_player(self, player: Player) -> Player:
        try:
            saved = self._repository.save(player)
        except Exception as e:
            logger.error(
                f"Exception in save_player: {e}",
                extra={"player_id": player.player_id},
            )
            raise RetrievalFailureError("save player") from e
        self._lookup.refresh(saved)
        logger.info(
            "Player saved successfully", extra={"player_id": saved.player_id},
        )
        return saved

    def save_player_async(self, player: Player) -> Future:
        return dispatch(
            self._pools.record, "save_player", self.save_player, player,
            log_fields={"player_id": player.player_id},
        )


def create_player_service(
    repository: PlayerRepository,
    pools: WorkerPools,
    lookup_delay_seconds: float = 0.0,
    cache: PlayerCache | None = None,
) -> PlayerService:
    """Wire engine, cache and lookup around a repository."""
    if cache is None:
        cache = PlayerCache()
    return PlayerService(
        repository=repository,
        pagination=PaginationEngine(repository),
        lookup=PlayerLookup(repository, cache, delay_seconds=lookup_delay_seconds),
        pools=pools,
    )
