"""Player ORM — maps the PLAYERS table onto the core Player record.

Invariants:
    - PLAYERID is the primary key (natural key, assigned by the data source)
    - Every other column is nullable text
    - Column names are the upper-case names used by the source dataset

Design Decisions:
    - ORM row kept separate from core Player: core stays SQLAlchemy-free,
      conversion happens at the adapter boundary (to_domain / from_domain)
    - Every column is text (VARCHAR(255) via Base.type_annotation_map): the
      dataset stores numbers and dates as text
"""

from dataclasses import asdict

from sqlalchemy.orm import Mapped, mapped_column

from app.core.player import PLAYER_FIELDS, Player
from app.db.base import Base


class PlayerRow(Base):
    """One catalog entry."""
    __tablename__ = "PLAYERS"

    player_id: Mapped[str] = mapped_column("PLAYERID", primary_key=True)
    birth_year: Mapped[str | None] = mapped_column("BIRTHYEAR")
    birth_month: Mapped[str | None] = mapped_column("BIRTHMONTH")
    birth_day: Mapped[str | None] = mapped_column("BIRTHDAY")
    birth_country: Mapped[str | None] = mapped_column("BIRTHCOUNTRY")
    birth_state: Mapped[str | None] = mapped_column("BIRTHSTATE")
    birth_city: Mapped[str | None] = mapped_column("BIRTHCITY")
    death_year: Mapped[str | None] = mapped_column("DEATHYEAR")
    death_month: Mapped[str | None] = mapped_column("DEATHMONTH")
    death_day: Mapped[str | None] = mapped_column("DEATHDAY")
    death_country: Mapped[str | None] = mapped_column("DEATHCOUNTRY")
    death_state: Mapped[str | None] = mapped_column("DEATHSTATE")
    death_city: Mapped[str | None] = mapped_column("DEATHCITY")
    first_name: Mapped[str | None] = mapped_column("NAMEFIRST")
    last_name: Mapped[str | None] = mapped_column("NAMELAST")
    given_name: Mapped[str | None] = mapped_column("NAMEGIVEN")
    weight: Mapped[str | None] = mapped_column("WEIGHT")
    height: Mapped[str | None] = mapped_column("HEIGHT")
    bats: Mapped[str | None] = mapped_column("BATS")
    throws: Mapped[str | None] = mapped_column("THROWS")
    debut: Mapped[str | None] = mapped_column("DEBUT")
    final_game: Mapped[str | None] = mapped_column("FINALGAME")
    retro_id: Mapped[str | None] = mapped_column("RETROID")
    bbref_id: Mapped[str | None] = mapped_column("BBREFID")

    def to_domain(self) -> Player:
        return Player(**{name: getattr(self, name) for name in PLAYER_FIELDS})

    @classmethod
    def from_domain(cls, player: Player) -> "PlayerRow":
        return cls(**asdict(player))
