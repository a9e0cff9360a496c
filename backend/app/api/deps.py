"""API Dependencies — FastAPI providers for objects built in the lifespan.

Invariants:
    - Routes never construct services; they receive them via Depends
    - Objects live on app.state (set by the lifespan or by test fixtures)
"""

from fastapi import Request

from app.infrastructure.database import DatabaseSessionManager
from app.services.player_service import PlayerService


def get_player_service(request: Request) -> PlayerService:
    return request.app.state.player_service


def get_db_manager(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "db_manager", None)
