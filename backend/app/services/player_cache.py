"""Single-Record Cache — memoized player lookup in front of the record store.

Invariants:
    - A cache hit never touches the store
    - Both outcomes of a successful fetch are cached: found and confirmed-absent
    - A failed fetch returns None and is NOT cached — the next call retries
    - PlayerCache is internally locked; callers never synchronize
    - At most one in-flight store fetch per identifier (single-flight)

Design Decisions:
    - No TTL, no eviction, no size bound: entries live as long as the PlayerCache
      instance (one per process, created in the app lifespan)
    - Cache is an explicit object handed to PlayerLookup, never a module global,
      so tests get a fresh one per case
    - Per-key locks instead of one global lock: a slow fetch for one identifier
      does not serialize lookups of other identifiers
    - Simulated latency floor after each store fetch is a configurable hook
      (PLAYER_LOOKUP_DELAY_SECONDS); tests set it to 0
"""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from app.core.domain_types import PlayerId
from app.core.player import Player
from app.core.repository_protocols import PlayerRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Memoized lookup outcome. player=None means confirmed absent."""
    player: Player | None

    @property
    def found(self) -> bool:
        return self.player is not None


class PlayerCache:
    """Thread-safe identifier → CacheEntry map."""

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, player_id: PlayerId) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(player_id)

    def put_if_absent(self, player_id: PlayerId, player: Player | None) -> CacheEntry:
        """First writer wins; returns whichever entry ends up stored."""
        with self._lock:
            return self._entries.setdefault(player_id, CacheEntry(player))

    def put(self, player_id: PlayerId, player: Player | None) -> CacheEntry:
        entry = CacheEntry(player)
        with self._lock:
            self._entries[player_id] = entry
        return entry

    def __contains__(self, player_id: PlayerId) -> bool:
        with self._lock:
            return player_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class _KeyedLocks:
    """Reference-counted lock per key; entries vanish when nobody holds them."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, tuple[threading.Lock, int]] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock, users = self._locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[key] = (lock, users + 1)
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                lock, users = self._locks[key]
                if users == 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)


class PlayerLookup:
    """get_by_id with memoization, single-flight and swallowed fetch failures."""

    def __init__(
        self,
        repository: PlayerRepository,
        cache: PlayerCache,
        delay_seconds: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._repository = repository
        self._cache = cache
        self._delay_seconds = delay_seconds
        self._sleep = sleep
        self._in_flight = _KeyedLocks()

    @property
    def cache(self) -> PlayerCache:
        return self._cache

    def get_by_id(self, player_id: PlayerId) -> Player | None:
        entry = self._cache.get(player_id)
        if entry is not None:
            logger.debug(
                f"Cache hit for player {player_id}",
                extra={"player_id": player_id, "found": entry.found},
            )
            return entry.player
        with self._in_flight.hold(player_id):
            # another thread may have filled it while we waited
            entry = self._cache.get(player_id)
            if entry is not None:
                return entry.player
            return self._fetch(player_id)

    def _fetch(self, player_id: PlayerId) -> Player | None:
        logger.info(
            f"Fetching player {player_id} from store",
            extra={"player_id": player_id},
        )
        try:
            player = self._repository.find_by_id(player_id)
            if self._delay_seconds > 0:
                self._sleep(self._delay_seconds)
        except Exception as e:
            logger.error(
                f"Exception in get_by_id: {e}", extra={"player_id": player_id},
            )
            return None
        entry = self._cache.put_if_absent(player_id, player)
        logger.info(
            f"Cached player {player_id}",
            extra={"player_id": player_id, "found": entry.found},
        )
        return entry.player

    def refresh(self, player: Player) -> None:
        """Replace the cached entry after a successful save."""
        self._cache.put(player.player_id, player)
