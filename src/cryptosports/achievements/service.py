"""Achievement tracker: recompute progress from activity and flag completion.

Progress per (user, achievement) never decreases: a recomputed value is only
stored when it beats the stored one. Completion is recorded once and never
revoked.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from cryptosports.achievements.schemas import UserAchievementWithDetails
from cryptosports.db.models import Sport, TransactionType, UserAchievement
from cryptosports.db.store import MemoryStore
from cryptosports.errors import NotFoundError
from cryptosports.portfolio.schemas import Portfolio
from cryptosports.portfolio.service import compute_portfolio

logger = logging.getLogger(__name__)


class Requirement(str, Enum):
    TOTAL_TRANSACTIONS = "total_transactions"
    TOTAL_BUYS = "total_buys"
    TOTAL_SELLS = "total_sells"
    TOTAL_SWAPS = "total_swaps"
    TOTAL_VALUE = "total_value"
    DIFFERENT_PLAYERS = "different_players"
    NBA_PLAYERS = "nba_players"
    NFL_PLAYERS = "nfl_players"
    STAKED_TOKENS = "staked_tokens"


def _count_type(portfolio: Portfolio, kind: TransactionType) -> int:
    return sum(1 for t in portfolio.transactions if t.type == kind)


def _held_in_sport(portfolio: Portfolio, sport: Sport) -> int:
    return sum(1 for h in portfolio.tokens if h.player.sport == sport)


PROGRESS_HANDLERS: dict[Requirement, Callable[[Portfolio], int]] = {
    Requirement.TOTAL_TRANSACTIONS: lambda p: len(p.transactions),
    Requirement.TOTAL_BUYS: lambda p: _count_type(p, TransactionType.BUY),
    Requirement.TOTAL_SELLS: lambda p: _count_type(p, TransactionType.SELL),
    Requirement.TOTAL_SWAPS: lambda p: _count_type(p, TransactionType.SWAP),
    Requirement.TOTAL_VALUE: lambda p: math.floor(p.total_value),
    Requirement.DIFFERENT_PLAYERS: lambda p: len({h.player_id for h in p.tokens}),
    Requirement.NBA_PLAYERS: lambda p: _held_in_sport(p, Sport.NBA),
    Requirement.NFL_PLAYERS: lambda p: _held_in_sport(p, Sport.NFL),
    Requirement.STAKED_TOKENS: lambda p: sum(1 for h in p.tokens if h.is_staked),
}

_missing = set(Requirement) - set(PROGRESS_HANDLERS)
if _missing:
    raise RuntimeError(f"No progress handler for requirements: {sorted(r.value for r in _missing)}")


def compute_progress(requirement: Requirement, portfolio: Portfolio) -> int:
    """Current progress value for one requirement kind."""
    return PROGRESS_HANDLERS[requirement](portfolio)


@dataclass(frozen=True)
class AchievementCheck:
    achievements: list[UserAchievementWithDetails]
    newly_completed: list[UserAchievementWithDetails]


async def update_progress(
    store: MemoryStore,
    user_id: int,
    achievement_id: int,
    progress: int,
) -> UserAchievement:
    """Record progress for one user achievement, completing it on reaching the threshold."""
    achievement = await store.get_achievement(achievement_id)
    if achievement is None:
        raise NotFoundError(f"Achievement with id {achievement_id} not found")

    now = store.now()
    reached = progress >= achievement.requirement_value
    user_achievement = await store.get_user_achievement(user_id, achievement_id)

    if user_achievement is None:
        return await store.create_user_achievement(
            user_id=user_id,
            achievement_id=achievement_id,
            progress=progress,
            completed=reached,
            completed_at=now if reached else None,
        )

    if progress <= user_achievement.progress:
        return user_achievement

    updates: dict[str, object] = {"progress": progress}
    if reached and not user_achievement.completed:
        updates["completed"] = True
        updates["completed_at"] = now
    return await store.update_user_achievement(user_achievement.id, **updates)


async def _with_details(store: MemoryStore, user_achievement: UserAchievement) -> UserAchievementWithDetails:
    achievement = await store.get_achievement(user_achievement.achievement_id)
    if achievement is None:
        raise NotFoundError(f"Achievement with id {user_achievement.achievement_id} not found")
    return UserAchievementWithDetails(**user_achievement.model_dump(), achievement=achievement)


async def get_user_achievements(store: MemoryStore, user_id: int) -> list[UserAchievementWithDetails]:
    """All achievements for a user, completed first then by progress.

    Achievements the user has no record for yet get one with progress 0.
    """
    async with store.transaction(user_id):
        existing = {ua.achievement_id for ua in await store.list_user_achievements(user_id)}
        for achievement in await store.list_achievements():
            if achievement.id not in existing:
                await store.create_user_achievement(user_id=user_id, achievement_id=achievement.id)

        records = await store.list_user_achievements(user_id)

    details = [await _with_details(store, ua) for ua in records]
    details.sort(key=lambda ua: (not ua.completed, -ua.progress))
    return details


async def check_achievements(store: MemoryStore, user_id: int) -> AchievementCheck:
    """Recompute every achievement for a user from current activity."""
    updated: list[UserAchievementWithDetails] = []
    newly_completed: list[UserAchievementWithDetails] = []

    async with store.transaction(user_id):
        portfolio = await compute_portfolio(store, user_id)

        for achievement in await store.list_achievements():
            try:
                requirement = Requirement(achievement.requirement)
            except ValueError:
                logger.warning("Skipping achievement %d: unknown requirement %r", achievement.id, achievement.requirement)
                continue

            before = await store.get_user_achievement(user_id, achievement.id)
            was_completed = before is not None and before.completed

            progress = compute_progress(requirement, portfolio)
            user_achievement = await update_progress(store, user_id, achievement.id, progress)
            detailed = await _with_details(store, user_achievement)
            updated.append(detailed)

            if user_achievement.completed and not was_completed:
                newly_completed.append(detailed)
                logger.info("User %d completed achievement %r", user_id, achievement.name)

    return AchievementCheck(achievements=updated, newly_completed=newly_completed)
