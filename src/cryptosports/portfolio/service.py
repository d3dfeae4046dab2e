"""Portfolio valuation at current prices, plus history snapshots."""

from __future__ import annotations

import logging
from decimal import Decimal

from cryptosports.db.models import PortfolioHistory, Sport
from cryptosports.db.store import MemoryStore
from cryptosports.errors import NotFoundError
from cryptosports.portfolio.schemas import HoldingWithPlayer, Portfolio, TransactionWithPlayers

logger = logging.getLogger(__name__)


async def get_user_tokens(store: MemoryStore, user_id: int) -> list[HoldingWithPlayer]:
    """All holdings of a user, each joined with its player."""
    tokens = []
    for holding in await store.list_holdings(user_id):
        player = await store.get_player(holding.player_id)
        if player is None:
            raise NotFoundError(f"Player with id {holding.player_id} not found")
        tokens.append(HoldingWithPlayer(**holding.model_dump(), player=player))
    return tokens


async def get_user_transactions(store: MemoryStore, user_id: int) -> list[TransactionWithPlayers]:
    """User's transactions newest-first, joined with player and swap source."""
    result = []
    for transaction in await store.list_transactions(user_id):
        player = await store.get_player(transaction.player_id)
        if player is None:
            raise NotFoundError(f"Player with id {transaction.player_id} not found")
        from_player = None
        if transaction.from_player_id is not None:
            from_player = await store.get_player(transaction.from_player_id)
        result.append(TransactionWithPlayers(**transaction.model_dump(), player=player, from_player=from_player))
    return result


async def compute_portfolio(store: MemoryStore, user_id: int) -> Portfolio:
    """Value every holding at its player's current token price.

    Recomputed on each call; nothing is cached.
    """
    tokens = await get_user_tokens(store, user_id)

    total_value = Decimal("0")
    total_tokens = 0
    nba_tokens = 0
    nfl_tokens = 0
    staked_tokens = 0
    for token in tokens:
        total_value += token.amount * token.player.token_price
        total_tokens += token.amount
        if token.player.sport == Sport.NBA:
            nba_tokens += token.amount
        elif token.player.sport == Sport.NFL:
            nfl_tokens += token.amount
        if token.is_staked:
            staked_tokens += token.amount

    return Portfolio(
        total_value=total_value,
        total_tokens=total_tokens,
        nba_tokens=nba_tokens,
        nfl_tokens=nfl_tokens,
        staked_tokens=staked_tokens,
        tokens=tokens,
        transactions=await get_user_transactions(store, user_id),
        history=await store.list_portfolio_history(user_id),
    )


async def snapshot_portfolio(store: MemoryStore, user_id: int) -> PortfolioHistory:
    """Append the user's current total value to their portfolio history."""
    portfolio = await compute_portfolio(store, user_id)
    entry = await store.create_portfolio_history(user_id=user_id, total_value=portfolio.total_value)
    logger.debug("Portfolio snapshot for user %d: %s", user_id, portfolio.total_value)
    return entry
