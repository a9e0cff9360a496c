"""Session Factory — provides DB sessions for direct usage outside the app lifespan.

Invariants:
    - Meant for scripts, migrations, and test fixtures
    - Sessions never expire attributes on commit (rows are converted after commit)

Design Decisions:
    - Separate from infrastructure/database.py: scripts and fixtures need a raw
      factory without the error-mapping wrapper
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker


def create_session_factory(database_url: str, **engine_kwargs) -> sessionmaker[Session]:
    """Create a session factory for the given database URL."""
    engine = create_engine(database_url, echo=False, **engine_kwargs)
    return sessionmaker(engine, class_=Session, expire_on_commit=False)
