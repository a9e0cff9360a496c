"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
    - Readiness always reports both worker pools' occupancy

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      the load balancer
    - Pool saturation is reported, not failed on: a full queue is backpressure,
      not an unhealthy process
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_db_manager, get_player_service
from app.infrastructure.database import DatabaseSessionManager
from app.services.player_service import PlayerService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "player-catalog-api",
        "version": "1.0.0",
    }


@router.get("/ready")
def readiness_check(
    db: DatabaseSessionManager | None = Depends(get_db_manager),
    service: PlayerService = Depends(get_player_service),
):
    """Readiness probe — database connectivity plus pool statistics."""
    pools = {
        "record": asdict(service.pools.record.stats()),
        "pagination": asdict(service.pools.pagination.stats()),
    }
    db_ok = db.health_check() if db else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "pools": pools,
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "pools": pools,
    }
