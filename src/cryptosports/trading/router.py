"""Trading endpoints and transaction history."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cryptosports.db.store import MemoryStore
from cryptosports.dependencies import get_store
from cryptosports.errors import NotFoundError
from cryptosports.portfolio.schemas import TransactionWithPlayers
from cryptosports.portfolio.service import get_user_transactions
from cryptosports.trading.schemas import SwapRequest, SwapResponse, TradeRequest, TradeResponse
from cryptosports.trading.service import buy_tokens, sell_tokens, swap_tokens

router = APIRouter(prefix="/api/transactions", tags=["Trading"])


@router.post("/buy", response_model=TradeResponse, status_code=201)
async def buy(body: TradeRequest, store: MemoryStore = Depends(get_store)):
    """Buy player tokens."""
    result = await buy_tokens(store, body.user_id, body.player_id, body.amount, body.price)
    return TradeResponse(transaction=result.transaction, holding=result.holding)


@router.post("/sell", response_model=TradeResponse)
async def sell(body: TradeRequest, store: MemoryStore = Depends(get_store)):
    """Sell player tokens."""
    result = await sell_tokens(store, body.user_id, body.player_id, body.amount, body.price)
    return TradeResponse(transaction=result.transaction, holding=result.holding)


@router.post("/swap", response_model=SwapResponse)
async def swap(body: SwapRequest, store: MemoryStore = Depends(get_store)):
    """Swap tokens of one player for another."""
    result = await swap_tokens(store, body.user_id, body.from_player_id, body.to_player_id, body.amount)
    return SwapResponse(
        transaction=result.transaction,
        holding=result.holding,
        from_holding=result.from_holding,
    )


@router.get("/{user_id}", response_model=list[TransactionWithPlayers])
async def list_transactions(user_id: int, store: MemoryStore = Depends(get_store)):
    """Transaction history for a user, newest first."""
    if await store.get_user(user_id) is None:
        raise NotFoundError("User not found")
    return await get_user_transactions(store, user_id)
