"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The record store is accessed only through PlayerRepository
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Synchronous methods: every call already runs on a worker thread or on the
      caller's thread, so the store contract stays blocking
"""

from typing import Protocol, Sequence

from app.core.domain_types import PlayerId, SortDirection
from app.core.player import Player


class PlayerRepository(Protocol):
    """Contract for the player record store — implemented by shell."""
    def find_by_id(self, player_id: PlayerId) -> Player | None: ...
    def find_all(self) -> Sequence[Player]: ...
    def find_all_paged(
        self, page: int, size: int,
        sort_field: str, sort_direction: SortDirection,
    ) -> tuple[Sequence[Player], int]: ...
    def save(self, player: Player) -> Player: ...
