"""Request/response schemas for trading endpoints."""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from cryptosports.db.models import CamelModel, TokenHolding, Transaction


class TradeRequest(CamelModel):
    """Buy or sell ``amount`` tokens of a player at ``price``."""

    user_id: int
    player_id: int
    amount: int = Field(..., gt=0)
    price: Decimal = Field(..., gt=0)


class SwapRequest(CamelModel):
    """Swap ``amount`` tokens of one player for another at current prices."""

    user_id: int
    from_player_id: int
    to_player_id: int
    amount: int = Field(..., gt=0)


class TradeResponse(CamelModel):
    transaction: Transaction
    holding: TokenHolding


class SwapResponse(CamelModel):
    transaction: Transaction
    holding: TokenHolding
    from_holding: TokenHolding
