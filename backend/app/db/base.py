"""SQLAlchemy Declarative Base — shared base class and type map for catalog ORM models.

Invariants:
    - All models inherit from Base; Base.metadata is what alembic and create_all see
    - Mapped[str] columns default to VARCHAR(255), the width of every catalog column

Design Decisions:
    - Separate file for Base: alembic env and models import it without cycles
"""

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    type_annotation_map = {str: String(255)}
