"""Player Routes — HTTP surface over PlayerService, sync and async variants.

Invariants:
    - GET /paginated with neither page nor size returns the full listing,
      never a default-sized first page
    - Sync routes are plain `def`: FastAPI runs them on its own threadpool,
      i.e. on the caller's thread from the service's point of view
    - Async routes await the service Future via asyncio.wrap_future and never
      block the event loop
    - Absent player → 404 via ResourceNotFoundError; all other failures
      propagate to the global error handlers

Design Decisions:
    - Literal route paths (/paginated, /async) declared before /{player_id}
      so they are not captured as identifiers
    - POST /create and /create/async are aliases of POST "" and /async, kept
      for clients of the earlier controller
    - Mounted under /api/v1 like every other router; the earlier controller
      served v1/players
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_player_service
from app.config import Settings, get_settings
from app.core.domain_types import PlayerId
from app.core.errors import ResourceNotFoundError
from app.schemas.player import (
    PaginatedPlayersResponse, PlayerSchema, PlayersResponse,
)
from app.services.player_service import PlayerService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/players", tags=["players"])


@router.get("/paginated")
def get_players(
    page: int | None = Query(None),
    size: int | None = Query(None),
    sort_by: str = Query("playerId", alias="sortBy"),
    sort_direction: str = Query("asc", alias="sortDirection"),
    service: PlayerService = Depends(get_player_service),
    settings: Settings = Depends(get_settings),
):
    """Full listing when unpaginated, otherwise one page."""
    if page is None and size is None:
        return PlayersResponse.from_collection(service.get_players())
    result = service.get_page(
        page if page is not None else 0,
        size if size is not None else settings.default_page_size,
        sort_by, sort_direction,
    )
    return PaginatedPlayersResponse.from_page(result)


@router.get("/paginated/async", response_model=PaginatedPlayersResponse)
async def get_players_paginated_async(
    page: int = Query(0),
    size: int = Query(10),
    sort_by: str = Query("playerId", alias="sortBy"),
    sort_direction: str = Query("asc", alias="sortDirection"),
    service: PlayerService = Depends(get_player_service),
):
    """One page, computed on the pagination pool."""
    result = await asyncio.wrap_future(
        service.get_page_async(page, size, sort_by, sort_direction),
    )
    return PaginatedPlayersResponse.from_page(result)


@router.get("/async", response_model=PlayersResponse)
async def get_all_players_async(
    service: PlayerService = Depends(get_player_service),
):
    """Full listing, computed on the record pool."""
    players = await asyncio.wrap_future(service.get_players_async())
    return PlayersResponse.from_collection(players)


@router.get("/{player_id}", response_model=PlayerSchema)
def get_player_by_id(
    player_id: str, service: PlayerService = Depends(get_player_service),
):
    player = service.get_player_by_id(PlayerId(player_id))
    if player is None:
        raise ResourceNotFoundError("Player", player_id)
    return PlayerSchema.from_domain(player)


@router.get("/{player_id}/async", response_model=PlayerSchema)
async def get_player_by_id_async(
    player_id: str, service: PlayerService = Depends(get_player_service),
):
    player = await asyncio.wrap_future(
        service.get_player_by_id_async(PlayerId(player_id)),
    )
    if player is None:
        raise ResourceNotFoundError("Player", player_id)
    return PlayerSchema.from_domain(player)


@router.post(
    "", response_model=PlayerSchema, status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/create", response_model=PlayerSchema, status_code=status.HTTP_201_CREATED,
)
def create_player(
    body: PlayerSchema, service: PlayerService = Depends(get_player_service),
):
    """Upsert a player by playerId."""
    saved = service.save_player(body.to_domain())
    return PlayerSchema.from_domain(saved)


@router.post(
    "/async", response_model=PlayerSchema, status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/create/async", response_model=PlayerSchema,
    status_code=status.HTTP_201_CREATED,
)
async def create_player_async(
    body: PlayerSchema, service: PlayerService = Depends(get_player_service),
):
    saved = await asyncio.wrap_future(service.save_player_async(body.to_domain()))
    return PlayerSchema.from_domain(saved)
