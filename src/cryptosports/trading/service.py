"""Trading engine for player tokens.

Each operation runs inside the acting user's unit of work: validation,
holding updates, the transaction record and the portfolio snapshot either
all land or are all rolled back.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

import structlog

from cryptosports.db.models import TokenHolding, Transaction, TransactionType
from cryptosports.db.store import MemoryStore
from cryptosports.errors import BusinessRuleViolation, NotFoundError, ValidationError
from cryptosports.portfolio.service import snapshot_portfolio

logger = structlog.get_logger()


@dataclass(frozen=True)
class TradeResult:
    transaction: Transaction
    holding: TokenHolding
    from_holding: TokenHolding | None = None


def _require_positive_amount(amount: int) -> None:
    if amount <= 0:
        raise ValidationError("Amount must be a positive number of tokens")


def _require_positive_price(price: Decimal) -> None:
    if price <= 0:
        raise ValidationError("Price must be positive")


async def _credit_holding(
    store: MemoryStore,
    user_id: int,
    player_id: int,
    amount: int,
    price: Decimal,
    *,
    reprice: bool,
) -> TokenHolding:
    """Add tokens to the user's holding for a player, creating it if needed."""
    holding = await store.get_token_holding(user_id, player_id)
    if holding is None:
        return await store.create_token_holding(
            user_id=user_id,
            player_id=player_id,
            amount=amount,
            purchase_price=price,
        )
    updates: dict[str, object] = {"amount": holding.amount + amount}
    if reprice:
        updates["purchase_price"] = price
    return await store.update_token_holding(holding.id, **updates)


async def _debitable_holding(store: MemoryStore, user_id: int, player_id: int, amount: int, verb: str) -> TokenHolding:
    """Return the holding tokens can be taken from, or raise."""
    holding = await store.get_token_holding(user_id, player_id)
    if holding is None:
        raise NotFoundError("You don't own this token")
    if holding.is_staked:
        raise BusinessRuleViolation(f"Cannot {verb} staked tokens")
    if holding.amount < amount:
        raise BusinessRuleViolation(f"Not enough tokens to {verb}")
    return holding


async def buy_tokens(
    store: MemoryStore,
    user_id: int,
    player_id: int,
    amount: int,
    price: Decimal,
) -> TradeResult:
    """Buy tokens of a player at the given price.

    An existing holding is topped up and its purchase price overwritten with
    the latest price; there is no cost averaging.
    """
    _require_positive_amount(amount)
    _require_positive_price(price)

    async with store.transaction(user_id):
        if await store.get_player(player_id) is None:
            raise NotFoundError("Player not found")
        if await store.get_user(user_id) is None:
            raise NotFoundError("User not found")

        holding = await _credit_holding(store, user_id, player_id, amount, price, reprice=True)
        transaction = await store.create_transaction(
            user_id=user_id,
            player_id=player_id,
            type=TransactionType.BUY,
            amount=amount,
            price=price,
        )
        await snapshot_portfolio(store, user_id)

    logger.info("tokens_bought", user_id=user_id, player_id=player_id, amount=amount, price=str(price))
    return TradeResult(transaction=transaction, holding=holding)


async def sell_tokens(
    store: MemoryStore,
    user_id: int,
    player_id: int,
    amount: int,
    price: Decimal,
) -> TradeResult:
    """Sell tokens from an unstaked holding."""
    _require_positive_amount(amount)
    _require_positive_price(price)

    async with store.transaction(user_id):
        holding = await _debitable_holding(store, user_id, player_id, amount, "sell")
        holding = await store.update_token_holding(holding.id, amount=holding.amount - amount)
        transaction = await store.create_transaction(
            user_id=user_id,
            player_id=player_id,
            type=TransactionType.SELL,
            amount=amount,
            price=price,
        )
        await snapshot_portfolio(store, user_id)

    logger.info("tokens_sold", user_id=user_id, player_id=player_id, amount=amount, price=str(price))
    return TradeResult(transaction=transaction, holding=holding)


def swap_amount(amount: int, from_price: Decimal, to_price: Decimal) -> int:
    """Destination tokens received for ``amount`` source tokens at current prices."""
    return math.floor(amount * from_price / to_price)


async def swap_tokens(
    store: MemoryStore,
    user_id: int,
    from_player_id: int,
    to_player_id: int,
    amount: int,
) -> TradeResult:
    """Convert tokens of one player into another at current token prices.

    A single ``swap`` transaction is recorded against the destination player,
    with ``from_player_id`` kept for audit.
    """
    _require_positive_amount(amount)
    if from_player_id == to_player_id:
        raise ValidationError("Cannot swap a token for itself")

    async with store.transaction(user_id):
        from_holding = await _debitable_holding(store, user_id, from_player_id, amount, "swap")

        from_player = await store.get_player(from_player_id)
        to_player = await store.get_player(to_player_id)
        if from_player is None or to_player is None:
            raise NotFoundError("Player not found")

        to_amount = swap_amount(amount, from_player.token_price, to_player.token_price)
        if to_amount <= 0:
            raise BusinessRuleViolation("Swap amount too small")

        from_holding = await store.update_token_holding(from_holding.id, amount=from_holding.amount - amount)
        to_holding = await _credit_holding(
            store, user_id, to_player_id, to_amount, to_player.token_price, reprice=False
        )
        transaction = await store.create_transaction(
            user_id=user_id,
            player_id=to_player_id,
            from_player_id=from_player_id,
            type=TransactionType.SWAP,
            amount=to_amount,
            price=to_player.token_price,
        )
        await snapshot_portfolio(store, user_id)

    logger.info(
        "tokens_swapped",
        user_id=user_id,
        from_player_id=from_player_id,
        to_player_id=to_player_id,
        amount=amount,
        received=to_amount,
    )
    return TradeResult(transaction=transaction, holding=to_holding, from_holding=from_holding)
