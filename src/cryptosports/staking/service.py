"""Staking engine. Locks holdings under a staking plan and releases them after the lock period.

State progression per holding: unstaked -> staked -> unstaked.
Transitions are validated; there is no early exit from a running lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from cryptosports.db.models import TokenHolding, Transaction, TransactionType
from cryptosports.db.store import MemoryStore
from cryptosports.errors import BusinessRuleViolation, NotFoundError, ValidationError
from cryptosports.portfolio.service import snapshot_portfolio

logger = logging.getLogger(__name__)

UNSTAKED = "unstaked"
STAKED = "staked"

VALID_TRANSITIONS: dict[str, list[str]] = {
    UNSTAKED: [STAKED],
    STAKED: [UNSTAKED],
}


@dataclass(frozen=True)
class StakeResult:
    holding: TokenHolding
    transaction: Transaction


def holding_state(holding: TokenHolding) -> str:
    return STAKED if holding.is_staked else UNSTAKED


def validate_transition(current_state: str, target_state: str) -> None:
    """Validate a staking state transition. Raises BusinessRuleViolation if invalid."""
    if target_state not in VALID_TRANSITIONS.get(current_state, []):
        if current_state == STAKED:
            raise BusinessRuleViolation("These tokens are already staked")
        raise BusinessRuleViolation("These tokens are not currently staked")


async def _require_holding(store: MemoryStore, user_id: int, player_id: int) -> TokenHolding:
    holding = await store.get_token_holding(user_id, player_id)
    if holding is None:
        raise NotFoundError(f"Token holding not found for user {user_id} and player {player_id}")
    return holding


async def stake_tokens(
    store: MemoryStore,
    user_id: int,
    player_id: int,
    amount: int,
    plan_id: int,
) -> StakeResult:
    """Stake a holding under a plan.

    The whole holding is flagged as staked, even when ``amount`` is only part
    of it; ``amount`` is checked against the plan minimum and the holding size
    and recorded on the ``stake`` transaction.
    """
    if amount <= 0:
        raise ValidationError("Amount must be a positive number of tokens")

    async with store.transaction(user_id):
        holding = await _require_holding(store, user_id, player_id)
        plan = await store.get_staking_plan(plan_id)
        if plan is None:
            raise NotFoundError(f"Staking plan with id {plan_id} not found")
        validate_transition(holding_state(holding), STAKED)

        if amount > holding.amount:
            raise BusinessRuleViolation(
                f"Not enough tokens to stake. Required: {amount}, Available: {holding.amount}"
            )
        if amount < plan.min_tokens:
            raise BusinessRuleViolation(f"Minimum tokens required for this plan: {plan.min_tokens}")

        player = await store.get_player(player_id)
        if player is None:
            raise NotFoundError("Player not found")

        staking_start = store.now()
        holding = await store.update_token_holding(
            holding.id,
            is_staked=True,
            staking_plan=plan.name,
            staking_start=staking_start,
            staking_end=staking_start + timedelta(days=plan.lock_period_days),
        )
        transaction = await store.create_transaction(
            user_id=user_id,
            player_id=player_id,
            type=TransactionType.STAKE,
            amount=amount,
            price=player.token_price,
        )
        await snapshot_portfolio(store, user_id)

    logger.info("User %d staked %d tokens of player %d on plan %s", user_id, amount, player_id, plan.name)
    return StakeResult(holding=holding, transaction=transaction)


async def unstake_tokens(store: MemoryStore, user_id: int, player_id: int) -> StakeResult:
    """Release a staked holding once its lock period has ended."""
    async with store.transaction(user_id):
        holding = await _require_holding(store, user_id, player_id)
        validate_transition(holding_state(holding), UNSTAKED)

        if holding.staking_end is not None and store.now() < holding.staking_end:
            raise BusinessRuleViolation("Staking period is not over yet. Early unstaking is not allowed.")

        player = await store.get_player(player_id)
        if player is None:
            raise NotFoundError("Player not found")

        holding = await store.update_token_holding(
            holding.id,
            is_staked=False,
            staking_plan=None,
            staking_start=None,
            staking_end=None,
        )
        transaction = await store.create_transaction(
            user_id=user_id,
            player_id=player_id,
            type=TransactionType.UNSTAKE,
            amount=holding.amount,
            price=player.token_price,
        )
        await snapshot_portfolio(store, user_id)

    logger.info("User %d unstaked %d tokens of player %d", user_id, holding.amount, player_id)
    return StakeResult(holding=holding, transaction=transaction)
