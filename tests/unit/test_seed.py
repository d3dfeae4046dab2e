"""Tests for reference data and account seeding."""

from decimal import Decimal

from cryptosports.config import Settings
from cryptosports.db.seed import (
    ACHIEVEMENT_SEED_DATA,
    PLAYER_SEED_DATA,
    STAKING_PLAN_SEED_DATA,
    seed_admin_user,
    seed_reference_data,
)
from cryptosports.db.store import MemoryStore


async def test_reference_data_counts(store):
    assert len(await store.list_players()) == len(PLAYER_SEED_DATA) == 11
    assert [p.name for p in await store.list_staking_plans()] == ["Rookie Stake", "All-Star Stake", "MVP Stake"]
    assert len(await store.list_achievements()) == len(ACHIEVEMENT_SEED_DATA) == 12


async def test_both_sports_seeded(store):
    assert len(await store.list_players("NBA")) == 7
    assert len(await store.list_players("NFL")) == 4


async def test_plan_terms(store):
    plans = {p.name: p for p in await store.list_staking_plans()}
    assert (plans["Rookie Stake"].lock_period_days, plans["Rookie Stake"].min_tokens) == (30, 2)
    assert (plans["All-Star Stake"].lock_period_days, plans["All-Star Stake"].min_tokens) == (90, 5)
    assert (plans["MVP Stake"].lock_period_days, plans["MVP Stake"].min_tokens) == (180, 10)
    assert plans["All-Star Stake"].is_popular is True
    assert len(STAKING_PLAN_SEED_DATA) == 3


async def test_reference_seeding_is_idempotent(store):
    await seed_reference_data(store)
    assert len(await store.list_players()) == 11
    assert len(await store.list_staking_plans()) == 3
    assert len(await store.list_achievements()) == 12


async def test_admin_holds_every_player(clock):
    store = MemoryStore(clock=clock)
    await seed_reference_data(store)
    settings = Settings(admin_tokens_per_player=60, admin_balance=Decimal("200"))

    await seed_admin_user(store, settings)
    await seed_admin_user(store, settings)

    admin = await store.get_user_by_username(settings.admin_username)
    assert admin.balance == Decimal("200")
    holdings = await store.list_holdings(admin.id)
    assert len(holdings) == 11
    assert {h.amount for h in holdings} == {60}
    assert await store.get_user(admin.id + 1) is None
