"""Player Schemas — Pydantic models for the HTTP boundary.

Invariants:
    - Wire names are camelCase (playerId, birthYear, ...); snake_case accepted on input
    - throws is exposed as throwStats on the wire
    - Schemas convert to/from core types; core never sees Pydantic models

Design Decisions:
    - alias_generator over per-field aliases: one rule for 24 fields,
      explicit alias only where the wire name is not the camelCase form
    - Envelope flags copied from PageResult, never recomputed here
"""

from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.pagination import PageResult
from app.core.player import Player, PlayerCollection


class PlayerSchema(BaseModel):
    """Player as sent and received over HTTP."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True,
    )

    player_id: str = Field(min_length=1, max_length=255)
    birth_year: str | None = None
    birth_month: str | None = None
    birth_day: str | None = None
    birth_country: str | None = None
    birth_state: str | None = None
    birth_city: str | None = None
    death_year: str | None = None
    death_month: str | None = None
    death_day: str | None = None
    death_country: str | None = None
    death_state: str | None = None
    death_city: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    given_name: str | None = None
    weight: str | None = None
    height: str | None = None
    bats: str | None = None
    throws: str | None = Field(None, alias="throwStats")
    debut: str | None = None
    final_game: str | None = None
    retro_id: str | None = None
    bbref_id: str | None = None

    def to_domain(self) -> Player:
        return Player(**self.model_dump())

    @classmethod
    def from_domain(cls, player: Player) -> "PlayerSchema":
        return cls(**asdict(player))


class PlayersResponse(BaseModel):
    """Unpaginated listing."""
    players: list[PlayerSchema]

    @classmethod
    def from_collection(cls, collection: PlayerCollection) -> "PlayersResponse":
        return cls(players=[PlayerSchema.from_domain(p) for p in collection])


class PaginatedPlayersResponse(BaseModel):
    """One page of players plus pagination metadata."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    players: list[PlayerSchema]
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool
    has_previous: bool
    first: bool
    last: bool

    @classmethod
    def from_page(cls, result: PageResult) -> "PaginatedPlayersResponse":
        return cls(
            players=[PlayerSchema.from_domain(p) for p in result.players],
            page=result.page,
            size=result.size,
            total_elements=result.total_elements,
            total_pages=result.total_pages,
            has_next=result.has_next,
            has_previous=result.has_previous,
            first=result.is_first,
            last=result.is_last,
        )
