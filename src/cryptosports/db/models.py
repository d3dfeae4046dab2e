"""In-memory entity records.

Records are frozen pydantic models. The store replaces a record with a merged
copy on every update, so references handed out by the store never change
underneath their holder.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys, accepting either case on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Record(CamelModel):
    """Immutable stored entity."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int


class Sport(str, Enum):
    NBA = "NBA"
    NFL = "NFL"


class TransactionType(str, Enum):
    BUY = "buy"
    SELL = "sell"
    SWAP = "swap"
    STAKE = "stake"
    UNSTAKE = "unstake"


class User(Record):
    username: str
    password_hash: str = Field(exclude=True)
    email: str
    wallet_address: str | None = None
    balance: Decimal = Decimal("0")
    created_at: datetime


class Player(Record):
    name: str
    team: str
    sport: Sport
    position: str
    image_url: str | None = None
    stats: dict[str, Any] = {}
    token_price: Decimal
    price_change: Decimal | None = None
    # Informational only; trades never touch supply.
    total_supply: int
    available_supply: int


class TokenHolding(Record):
    user_id: int
    player_id: int
    amount: int
    purchase_price: Decimal
    is_staked: bool = False
    staking_plan: str | None = None
    staking_start: datetime | None = None
    staking_end: datetime | None = None


class Transaction(Record):
    user_id: int
    player_id: int
    type: TransactionType
    amount: int
    price: Decimal
    timestamp: datetime
    from_player_id: int | None = None


class PortfolioHistory(Record):
    user_id: int
    total_value: Decimal
    timestamp: datetime


class StakingPlan(Record):
    name: str
    apy: Decimal
    lock_period_days: int
    min_tokens: int
    description: str | None = None
    is_popular: bool = False


class Achievement(Record):
    name: str
    description: str
    image: str | None = None
    requirement: str
    requirement_value: int
    reward_amount: int
    category: str


class UserAchievement(Record):
    user_id: int
    achievement_id: int
    progress: int = 0
    completed: bool = False
    completed_at: datetime | None = None
    created_at: datetime
