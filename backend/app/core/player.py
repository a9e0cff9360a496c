"""Player Record — the flat catalog entry and its ordered collection.

Invariants:
    - player_id is the only mandatory field; every other field is optional text
    - Player is frozen — cached instances can be shared across threads safely
    - PlayerCollection preserves store iteration order

Design Decisions:
    - Frozen dataclass over ORM object in core: core never imports SQLAlchemy
    - Biographical fields kept as free-form strings (the source data mixes
      blanks, partial dates and unknowns — parsing belongs to consumers)
    - Sort field aliases resolved here so the store adapter only ever sees
      canonical attribute names
"""

from dataclasses import dataclass, fields
from typing import Iterator

from app.core.domain_types import PlayerId

ID_FIELD = "player_id"


@dataclass(frozen=True)
class Player:
    """A single player's catalog entry."""
    player_id: PlayerId
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
    throws: str | None = None
    debut: str | None = None
    final_game: str | None = None
    retro_id: str | None = None
    bbref_id: str | None = None


@dataclass(frozen=True)
class PlayerCollection:
    """Unfiltered listing, in store iteration order."""
    players: tuple[Player, ...] = ()

    def __len__(self) -> int:
        return len(self.players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players)


PLAYER_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(Player))


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


# "id" and the camelCase wire names are accepted wherever a field is named
_FIELD_ALIASES: dict[str, str] = {
    **{name: name for name in PLAYER_FIELDS},
    **{_camel(name): name for name in PLAYER_FIELDS},
    "id": ID_FIELD,
    "throwStats": "throws",
}


def resolve_field_name(name: str) -> str | None:
    """Map an attribute name or alias to the canonical Player attribute."""
    return _FIELD_ALIASES.get(name.strip())
