"""Request/response schemas for staking endpoints."""

from __future__ import annotations

from pydantic import Field

from cryptosports.db.models import CamelModel, TokenHolding, Transaction


class StakeRequest(CamelModel):
    user_id: int
    player_id: int
    amount: int = Field(..., gt=0)
    plan_id: int


class UnstakeRequest(CamelModel):
    user_id: int
    player_id: int


class StakeResponse(CamelModel):
    holding: TokenHolding
    transaction: Transaction
