"""Initial schema — PLAYERS table.

Revision ID: 001_players
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_players"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_TEXT_COLUMNS = (
    "BIRTHYEAR", "BIRTHMONTH", "BIRTHDAY", "BIRTHCOUNTRY", "BIRTHSTATE", "BIRTHCITY",
    "DEATHYEAR", "DEATHMONTH", "DEATHDAY", "DEATHCOUNTRY", "DEATHSTATE", "DEATHCITY",
    "NAMEFIRST", "NAMELAST", "NAMEGIVEN", "WEIGHT", "HEIGHT", "BATS", "THROWS",
    "DEBUT", "FINALGAME", "RETROID", "BBREFID",
)


def upgrade() -> None:
    op.create_table(
        "PLAYERS",
        sa.Column("PLAYERID", sa.String(255), primary_key=True),
        *(sa.Column(name, sa.String(255), nullable=True) for name in _TEXT_COLUMNS),
    )


def downgrade() -> None:
    op.drop_table("PLAYERS")
