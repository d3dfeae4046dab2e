"""Staking endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cryptosports.db.models import StakingPlan
from cryptosports.db.store import MemoryStore
from cryptosports.dependencies import get_store
from cryptosports.staking.schemas import StakeRequest, StakeResponse, UnstakeRequest
from cryptosports.staking.service import stake_tokens, unstake_tokens

router = APIRouter(prefix="/api/staking", tags=["Staking"])


@router.get("/plans", response_model=list[StakingPlan])
async def list_plans(store: MemoryStore = Depends(get_store)):
    """All staking plans."""
    return await store.list_staking_plans()


@router.post("/stake", response_model=StakeResponse)
async def stake(body: StakeRequest, store: MemoryStore = Depends(get_store)):
    """Stake a holding under a plan."""
    result = await stake_tokens(store, body.user_id, body.player_id, body.amount, body.plan_id)
    return StakeResponse(holding=result.holding, transaction=result.transaction)


@router.post("/unstake", response_model=StakeResponse)
async def unstake(body: UnstakeRequest, store: MemoryStore = Depends(get_store)):
    """Release a staked holding after its lock period."""
    result = await unstake_tokens(store, body.user_id, body.player_id)
    return StakeResponse(holding=result.holding, transaction=result.transaction)
