"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never cross into core/ — adapters convert them to domain records

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for alembic and create_all
"""

from app.models.player import PlayerRow  # noqa: F401
