"""Pydantic response models for portfolio and holdings endpoints."""

from __future__ import annotations

from decimal import Decimal

from cryptosports.db.models import CamelModel, Player, PortfolioHistory, TokenHolding, Transaction


class HoldingWithPlayer(TokenHolding):
    player: Player


class TransactionWithPlayers(Transaction):
    player: Player
    from_player: Player | None = None


class Portfolio(CamelModel):
    total_value: Decimal
    total_tokens: int
    nba_tokens: int
    nfl_tokens: int
    staked_tokens: int
    tokens: list[HoldingWithPlayer]
    transactions: list[TransactionWithPlayers]
    history: list[PortfolioHistory]
