"""Reference data seeding.

All seed functions are idempotent: rows are matched by name (or username)
and only missing ones are created.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from cryptosports.auth.password import hash_password
from cryptosports.config import Settings
from cryptosports.db.store import MemoryStore

logger = logging.getLogger(__name__)

PLAYER_SEED_DATA: list[dict] = [
    # NBA
    {
        "name": "LeBron James",
        "team": "Los Angeles Lakers",
        "sport": "NBA",
        "position": "SF",
        "image_url": "/players/nba/lebron-james.jpeg",
        "stats": {"ppg": 27.5, "rpg": 8.3, "apg": 10.2, "fg_pct": 51.2, "three_pct": 36.7},
        "token_price": Decimal("2.65"),
        "price_change": Decimal("0.15"),
        "total_supply": 1000,
        "available_supply": 850,
    },
    {
        "name": "Stephen Curry",
        "team": "Golden State Warriors",
        "sport": "NBA",
        "position": "PG",
        "image_url": "/players/nba/stephen-curry-new.png",
        "stats": {"ppg": 32.0, "rpg": 5.2, "apg": 6.3, "fg_pct": 48.3, "three_pct": 43.7},
        "token_price": Decimal("2.98"),
        "price_change": Decimal("0.21"),
        "total_supply": 1000,
        "available_supply": 800,
    },
    {
        "name": "Giannis Antetokounmpo",
        "team": "Milwaukee Bucks",
        "sport": "NBA",
        "position": "PF",
        "image_url": "/players/nba/giannis-antetokounmpo.webp",
        "stats": {"ppg": 29.2, "rpg": 11.6, "apg": 5.8, "fg_pct": 58.0, "three_pct": 30.1},
        "token_price": Decimal("2.75"),
        "price_change": Decimal("0.12"),
        "total_supply": 1000,
        "available_supply": 820,
    },
    {
        "name": "Nikola Jokic",
        "team": "Denver Nuggets",
        "sport": "NBA",
        "position": "C",
        "image_url": "/players/nba/nikola-jokic.webp",
        "stats": {"ppg": 26.8, "rpg": 12.1, "apg": 8.7, "fg_pct": 57.5, "three_pct": 38.2},
        "token_price": Decimal("2.89"),
        "price_change": Decimal("0.18"),
        "total_supply": 1000,
        "available_supply": 840,
    },
    # NFL
    {
        "name": "Patrick Mahomes",
        "team": "Kansas City Chiefs",
        "sport": "NFL",
        "position": "QB",
        "image_url": "/players/nfl/patrick-mahomes.png",
        "stats": {"pass_yds": 5250, "pass_tds": 41, "qbr": 78.5, "rush_yds": 358},
        "token_price": Decimal("2.55"),
        "price_change": Decimal("-0.08"),
        "total_supply": 1000,
        "available_supply": 900,
    },
    {
        "name": "Travis Kelce",
        "team": "Kansas City Chiefs",
        "sport": "NFL",
        "position": "TE",
        "image_url": "/players/nfl/travis-kelce-new.jpeg",
        "stats": {"rec": 92, "rec_yds": 1125, "rec_tds": 12, "yds": 1125},
        "token_price": Decimal("2.25"),
        "price_change": Decimal("0.45"),
        "total_supply": 1000,
        "available_supply": 850,
    },
    {
        "name": "Josh Allen",
        "team": "Buffalo Bills",
        "sport": "NFL",
        "position": "QB",
        "image_url": "/players/nfl/josh-allen.jpeg",
        "stats": {"pass_yds": 4544, "pass_tds": 37, "qbr": 75.3, "rush_yds": 762, "rush_tds": 7},
        "token_price": Decimal("2.42"),
        "price_change": Decimal("0.12"),
        "total_supply": 1000,
        "available_supply": 880,
    },
    {
        "name": "JJ Watt",
        "team": "Houston Texans",
        "sport": "NFL",
        "position": "DE",
        "image_url": "/players/nfl/jj-watt.webp",
        "stats": {"tackles": 64, "sacks": 18, "ints": 1},
        "token_price": Decimal("1.95"),
        "price_change": Decimal("-0.05"),
        "total_supply": 1000,
        "available_supply": 920,
    },
    # More NBA
    {
        "name": "Luka Doncic",
        "team": "Los Angeles Lakers",
        "sport": "NBA",
        "position": "PG",
        "image_url": "/players/nba/luka-doncic-lakers.jpeg",
        "stats": {"ppg": 32.4, "rpg": 8.6, "apg": 9.1, "fg_pct": 49.8, "three_pct": 38.2},
        "token_price": Decimal("2.95"),
        "price_change": Decimal("0.48"),
        "total_supply": 1000,
        "available_supply": 810,
    },
    {
        "name": "Ja Morant",
        "team": "Memphis Grizzlies",
        "sport": "NBA",
        "position": "PG",
        "image_url": "/players/nba/ja-morant-new.jpeg",
        "stats": {"ppg": 26.2, "rpg": 5.9, "apg": 8.1, "fg_pct": 47.5, "three_pct": 30.7},
        "token_price": Decimal("2.70"),
        "price_change": Decimal("-0.15"),
        "total_supply": 1000,
        "available_supply": 845,
    },
    {
        "name": "Kevin Durant",
        "team": "Phoenix Suns",
        "sport": "NBA",
        "position": "SF",
        "image_url": "/players/nba/kevin-durant.webp",
        "stats": {"ppg": 28.5, "rpg": 7.2, "apg": 4.8, "fg_pct": 53.2, "three_pct": 41.5},
        "token_price": Decimal("2.82"),
        "price_change": Decimal("0.16"),
        "total_supply": 1000,
        "available_supply": 830,
    },
]

STAKING_PLAN_SEED_DATA: list[dict] = [
    {
        "name": "Rookie Stake",
        "apy": Decimal("5"),
        "lock_period_days": 30,
        "min_tokens": 2,
        "description": "Entry-level staking plan with 5% APY",
        "is_popular": False,
    },
    {
        "name": "All-Star Stake",
        "apy": Decimal("8"),
        "lock_period_days": 90,
        "min_tokens": 5,
        "description": "Mid-level staking plan with 8% APY",
        "is_popular": True,
    },
    {
        "name": "MVP Stake",
        "apy": Decimal("12"),
        "lock_period_days": 180,
        "min_tokens": 10,
        "description": "Premium staking plan with 12% APY",
        "is_popular": False,
    },
]

ACHIEVEMENT_SEED_DATA: list[dict] = [
    # Trading volume
    {
        "name": "First Trade",
        "description": "Complete your first token transaction",
        "image": "badge_first_trade.svg",
        "requirement": "total_transactions",
        "requirement_value": 1,
        "reward_amount": 50,
        "category": "trade",
    },
    {
        "name": "Trading Novice",
        "description": "Complete 5 token transactions",
        "image": "badge_trading_novice.svg",
        "requirement": "total_transactions",
        "requirement_value": 5,
        "reward_amount": 100,
        "category": "trade",
    },
    {
        "name": "Trading Enthusiast",
        "description": "Complete 25 token transactions",
        "image": "badge_trading_enthusiast.svg",
        "requirement": "total_transactions",
        "requirement_value": 25,
        "reward_amount": 250,
        "category": "trade",
    },
    {
        "name": "Trading Expert",
        "description": "Complete 100 token transactions",
        "image": "badge_trading_expert.svg",
        "requirement": "total_transactions",
        "requirement_value": 100,
        "reward_amount": 500,
        "category": "trade",
    },
    # Portfolio value
    {
        "name": "Portfolio Starter",
        "description": "Reach a portfolio value of $1,000",
        "image": "badge_portfolio_starter.svg",
        "requirement": "total_value",
        "requirement_value": 1000,
        "reward_amount": 100,
        "category": "portfolio",
    },
    {
        "name": "Portfolio Builder",
        "description": "Reach a portfolio value of $5,000",
        "image": "badge_portfolio_builder.svg",
        "requirement": "total_value",
        "requirement_value": 5000,
        "reward_amount": 250,
        "category": "portfolio",
    },
    {
        "name": "Portfolio Manager",
        "description": "Reach a portfolio value of $10,000",
        "image": "badge_portfolio_manager.svg",
        "requirement": "total_value",
        "requirement_value": 10000,
        "reward_amount": 500,
        "category": "portfolio",
    },
    # Diversity
    {
        "name": "Diversifier",
        "description": "Own tokens from 5 different players",
        "image": "badge_diversifier.svg",
        "requirement": "different_players",
        "requirement_value": 5,
        "reward_amount": 150,
        "category": "diversity",
    },
    {
        "name": "NBA Enthusiast",
        "description": "Own tokens from 3 NBA players",
        "image": "badge_nba_enthusiast.svg",
        "requirement": "nba_players",
        "requirement_value": 3,
        "reward_amount": 100,
        "category": "sport",
    },
    {
        "name": "NFL Fan",
        "description": "Own tokens from 3 NFL players",
        "image": "badge_nfl_fan.svg",
        "requirement": "nfl_players",
        "requirement_value": 3,
        "reward_amount": 100,
        "category": "sport",
    },
    # Staking
    {
        "name": "Staking Beginner",
        "description": "Stake your first player token",
        "image": "badge_staking_beginner.svg",
        "requirement": "staked_tokens",
        "requirement_value": 1,
        "reward_amount": 75,
        "category": "staking",
    },
    {
        "name": "Staking Enthusiast",
        "description": "Stake tokens from 3 different players",
        "image": "badge_staking_enthusiast.svg",
        "requirement": "staked_tokens",
        "requirement_value": 3,
        "reward_amount": 200,
        "category": "staking",
    },
]


async def seed_reference_data(store: MemoryStore) -> None:
    """Seed players, staking plans and achievements (idempotent)."""
    existing_players = {p.name for p in await store.list_players()}
    for data in PLAYER_SEED_DATA:
        if data["name"] not in existing_players:
            await store.create_player(**data)

    existing_plans = {p.name for p in await store.list_staking_plans()}
    for data in STAKING_PLAN_SEED_DATA:
        if data["name"] not in existing_plans:
            await store.create_staking_plan(**data)

    existing_achievements = {a.name for a in await store.list_achievements()}
    for data in ACHIEVEMENT_SEED_DATA:
        if data["name"] not in existing_achievements:
            await store.create_achievement(**data)

    logger.info(
        "Seeded %d players, %d staking plans, %d achievements",
        len(PLAYER_SEED_DATA),
        len(STAKING_PLAN_SEED_DATA),
        len(ACHIEVEMENT_SEED_DATA),
    )


async def seed_admin_user(store: MemoryStore, settings: Settings) -> None:
    """Create the admin account holding tokens of every player (idempotent)."""
    if await store.get_user_by_username(settings.admin_username) is not None:
        return

    admin = await store.create_user(
        username=settings.admin_username,
        password_hash=hash_password(settings.admin_password),
        email=settings.admin_email,
        balance=settings.admin_balance,
    )
    for player in await store.list_players():
        await store.create_token_holding(
            user_id=admin.id,
            player_id=player.id,
            amount=settings.admin_tokens_per_player,
            purchase_price=player.token_price,
        )
    logger.info(
        "Admin user created: username=%s, %d tokens of each player",
        settings.admin_username,
        settings.admin_tokens_per_player,
    )
