"""Player catalogue endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from cryptosports.db.models import Player, Sport
from cryptosports.db.store import MemoryStore
from cryptosports.dependencies import get_store
from cryptosports.errors import NotFoundError

router = APIRouter(prefix="/api/players", tags=["Players"])


@router.get("", response_model=list[Player])
async def list_players(
    sport: Sport | None = Query(None),
    store: MemoryStore = Depends(get_store),
):
    """List players, optionally filtered by sport."""
    return await store.list_players(sport.value if sport else None)


@router.get("/{player_id}", response_model=Player)
async def get_player(player_id: int, store: MemoryStore = Depends(get_store)):
    """Get a single player."""
    player = await store.get_player(player_id)
    if player is None:
        raise NotFoundError("Player not found")
    return player
