"""SQLAlchemy Player Repository — record store adapter over the PLAYERS table.

Invariants:
    - Implements core.repository_protocols.PlayerRepository
    - Returns core Player objects only — ORM rows never leave this module
    - find_all preserves primary-key order (the table's natural iteration order)
    - save() is an upsert keyed on player_id

Design Decisions:
    - Session.merge for upsert: portable across SQLite and PostgreSQL
    - Unknown sort fields raise ValueError instead of silently falling back;
      the pagination engine surfaces that as a retrieval failure
"""

import logging
from typing import Sequence

from sqlalchemy import func, select

from app.core.domain_types import PlayerId, SortDirection
from app.core.player import Player
from app.infrastructure.database import DatabaseSessionManager
from app.models.player import PlayerRow

logger = logging.getLogger(__name__)


class SqlAlchemyPlayerRepository:
    """PlayerRepository backed by a relational database."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    def find_by_id(self, player_id: PlayerId) -> Player | None:
        with self._db.session() as session:
            row = session.get(PlayerRow, player_id)
            return row.to_domain() if row else None

    def find_all(self) -> list[Player]:
        with self._db.session() as session:
            rows = session.scalars(
                select(PlayerRow).order_by(PlayerRow.player_id),
            ).all()
            return [row.to_domain() for row in rows]

    def find_all_paged(
        self, page: int, size: int,
        sort_field: str, sort_direction: SortDirection,
    ) -> tuple[Sequence[Player], int]:
        column = _sort_column(sort_field)
        order = column.desc() if sort_direction is SortDirection.DESC else column.asc()
        query = select(PlayerRow).order_by(order)
        if sort_field != "player_id":
            # deterministic paging when the sort column has duplicates
            query = query.order_by(PlayerRow.player_id)
        with self._db.session() as session:
            total = session.scalar(select(func.count()).select_from(PlayerRow)) or 0
            rows = session.scalars(query.offset(page * size).limit(size)).all()
            return [row.to_domain() for row in rows], total

    def save(self, player: Player) -> Player:
        with self._db.session() as session:
            row = session.merge(PlayerRow.from_domain(player))
            session.commit()
            return row.to_domain()


def _sort_column(sort_field: str):
    column = PlayerRow.__mapper__.columns.get(sort_field)
    if column is None:
        raise ValueError(f"No property '{sort_field}' found for type 'Player'")
    return getattr(PlayerRow, sort_field)
