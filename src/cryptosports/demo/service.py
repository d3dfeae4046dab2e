"""Demo account bootstrap."""

from __future__ import annotations

import structlog

from cryptosports.achievements.service import check_achievements
from cryptosports.auth.password import hash_password
from cryptosports.config import Settings
from cryptosports.db.models import User
from cryptosports.db.store import MemoryStore
from cryptosports.staking.service import stake_tokens
from cryptosports.trading.service import buy_tokens

logger = structlog.get_logger()

# Tokens bought for each of the first players, in catalogue order.
DEMO_PURCHASES: tuple[int, ...] = (3, 2, 1, 2)


async def setup_demo_account(store: MemoryStore, settings: Settings) -> tuple[User, bool]:
    """
    Create the demo account if it does not exist yet.

    User creation, purchases, the stake and the achievement check form one
    unit of work keyed on the demo username, so a failure leaves no demo user.

    Returns:
        Tuple of (user, created).
    """
    async with store.transaction(f"signup:{settings.demo_username}"):
        user = await store.get_user_by_username(settings.demo_username)
        if user is not None:
            return user, False

        user = await store.create_user(
            username=settings.demo_username,
            password_hash=hash_password(settings.demo_password),
            email=settings.demo_email,
        )

        players = await store.list_players()
        for player, amount in zip(players, DEMO_PURCHASES):
            await buy_tokens(store, user.id, player.id, amount, player.token_price)

        plans = await store.list_staking_plans()
        if players and plans:
            holding = await store.get_token_holding(user.id, players[0].id)
            if holding is not None and holding.amount >= plans[0].min_tokens:
                await stake_tokens(store, user.id, players[0].id, plans[0].min_tokens, plans[0].id)

        await check_achievements(store, user.id)

    logger.info("demo_account_created", user_id=user.id)
    return user, True
