"""Achievement endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cryptosports.achievements.schemas import AchievementCheckResponse, UserAchievementWithDetails
from cryptosports.achievements.service import check_achievements, get_user_achievements
from cryptosports.db.models import Achievement
from cryptosports.db.store import MemoryStore
from cryptosports.dependencies import get_store
from cryptosports.errors import NotFoundError

router = APIRouter(prefix="/api/achievements", tags=["Achievements"])


async def _require_user(store: MemoryStore, user_id: int) -> None:
    if await store.get_user(user_id) is None:
        raise NotFoundError("User not found")


@router.get("", response_model=list[Achievement])
async def list_achievements(store: MemoryStore = Depends(get_store)):
    """All achievement definitions."""
    return await store.list_achievements()


@router.get("/{user_id}", response_model=list[UserAchievementWithDetails])
async def list_user_achievements(user_id: int, store: MemoryStore = Depends(get_store)):
    """A user's progress on every achievement."""
    await _require_user(store, user_id)
    return await get_user_achievements(store, user_id)


@router.post("/{user_id}/check", response_model=AchievementCheckResponse)
async def check_user_achievements(user_id: int, store: MemoryStore = Depends(get_store)):
    """Recompute a user's achievements from their current activity."""
    await _require_user(store, user_id)
    result = await check_achievements(store, user_id)
    return AchievementCheckResponse(
        achievements=result.achievements,
        newly_completed=result.newly_completed,
    )
