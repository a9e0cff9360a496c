"""Player Catalog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CatalogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, worker pools and PlayerService built in the lifespan and
      stored on app.state; pools drained on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: tests build an app and set app.state themselves
      (ASGITransport does not run the lifespan)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import health, players
from app.config import get_settings
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.observability import setup_logging
from app.infrastructure.player_repository import SqlAlchemyPlayerRepository
from app.infrastructure.worker_pool import build_worker_pools
from app.services.player_service import create_player_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    pools = build_worker_pools(settings)
    app.state.db_manager = db
    app.state.player_service = create_player_service(
        SqlAlchemyPlayerRepository(db),
        pools,
        lookup_delay_seconds=settings.player_lookup_delay_seconds,
    )
    logger.info("Player Catalog API started")
    yield
    logger.info("Player Catalog API shutting down")
    pools.shutdown(wait=True)
    db.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Player Catalog API", version="1.0.0", lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health.router)
    app.include_router(players.router)
    register_error_handlers(app)
    return app


app = create_app()
