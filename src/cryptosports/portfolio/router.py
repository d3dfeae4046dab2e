"""Portfolio and holdings endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cryptosports.db.store import MemoryStore
from cryptosports.dependencies import get_store
from cryptosports.errors import NotFoundError
from cryptosports.portfolio.schemas import HoldingWithPlayer, Portfolio
from cryptosports.portfolio.service import compute_portfolio, get_user_tokens

router = APIRouter(prefix="/api", tags=["Portfolio"])


async def _require_user(store: MemoryStore, user_id: int) -> None:
    if await store.get_user(user_id) is None:
        raise NotFoundError("User not found")


@router.get("/portfolio/{user_id}", response_model=Portfolio)
async def get_portfolio(user_id: int, store: MemoryStore = Depends(get_store)):
    """Valued portfolio with holdings, transactions and history."""
    await _require_user(store, user_id)
    return await compute_portfolio(store, user_id)


@router.get("/holdings/{user_id}", response_model=list[HoldingWithPlayer])
async def get_holdings(user_id: int, store: MemoryStore = Depends(get_store)):
    """Token holdings of a user, each with its player."""
    await _require_user(store, user_id)
    return await get_user_tokens(store, user_id)
