"""In-memory entity store.

One ``MemoryStore`` is built per application and injected into request
handlers. Every table is a ``dict[int, Record]`` with its own id sequence.

Writes that belong together run inside ``store.transaction(user_id)``: the
unit of work holds a per-key lock and journals each write, id sequences
included, restoring the previous state if the body raises.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable, Hashable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, TypeVar

import structlog

from cryptosports.db.models import (
    Achievement,
    Player,
    PortfolioHistory,
    Record,
    StakingPlan,
    TokenHolding,
    Transaction,
    User,
    UserAchievement,
)
from cryptosports.errors import NotFoundError, ValidationError

logger = structlog.get_logger()

R = TypeVar("R", bound=Record)

Clock = Callable[[], datetime]

# (mapping, key, previous value or None when the key was absent)
_JournalEntry = tuple[dict[Any, Any], Any, Any]

_journal: ContextVar[list[_JournalEntry] | None] = ContextVar("store_journal", default=None)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    """Keyed in-memory tables for every marketplace entity."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or utcnow
        self._users: dict[int, User] = {}
        self._players: dict[int, Player] = {}
        self._holdings: dict[int, TokenHolding] = {}
        self._transactions: dict[int, Transaction] = {}
        self._history: dict[int, PortfolioHistory] = {}
        self._plans: dict[int, StakingPlan] = {}
        self._achievements: dict[int, Achievement] = {}
        self._user_achievements: dict[int, UserAchievement] = {}
        # Last id handed out per record type
        self._sequences: dict[type[Record], int] = {}
        self._locks: dict[Hashable, asyncio.Lock] = {}

    def now(self) -> datetime:
        """Current time according to the store clock."""
        return self._clock()

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def transaction(self, key: Hashable) -> AsyncIterator[None]:
        """Serialise and journal all writes under one lock key.

        The key is a user id for everything that acts on an existing user.
        Re-entering while a unit of work is already open in the current task
        joins the outer one.
        """
        if _journal.get() is not None:
            yield
            return

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            journal: list[_JournalEntry] = []
            token = _journal.set(journal)
            try:
                yield
            except BaseException:
                self._rollback(journal)
                logger.warning("store_transaction_rolled_back", key=key, writes=len(journal))
                raise
            finally:
                _journal.reset(token)

    @staticmethod
    def _rollback(journal: list[_JournalEntry]) -> None:
        for mapping, key, previous in reversed(journal):
            if previous is None:
                mapping.pop(key, None)
            else:
                mapping[key] = previous

    # ------------------------------------------------------------------
    # Table primitives
    # ------------------------------------------------------------------

    @staticmethod
    def _write(mapping: dict[Any, Any], key: Any, value: Any) -> None:
        journal = _journal.get()
        if journal is not None:
            journal.append((mapping, key, mapping.get(key)))
        mapping[key] = value

    def _put(self, table: dict[int, R], record: R) -> R:
        self._write(table, record.id, record)
        return record

    def _insert(self, table: dict[int, R], model: type[R], **fields: Any) -> R:
        record_id = self._sequences.get(model, 0) + 1
        record = model(id=record_id, **fields)
        self._write(self._sequences, model, record_id)
        return self._put(table, record)

    def _update(self, table: dict[int, R], record_id: int, label: str, fields: dict[str, Any]) -> R:
        current = table.get(record_id)
        if current is None:
            raise NotFoundError(f"{label} with id {record_id} not found")
        return self._put(table, current.model_copy(update=fields))

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    async def create_user(
        self,
        username: str,
        password_hash: str,
        email: str,
        wallet_address: str | None = None,
        balance: Decimal | None = None,
    ) -> User:
        if await self.get_user_by_username(username) is not None:
            raise ValidationError("Username already exists")
        return self._insert(
            self._users,
            User,
            username=username,
            password_hash=password_hash,
            email=email,
            wallet_address=wallet_address,
            balance=balance if balance is not None else Decimal("0"),
            created_at=self.now(),
        )

    async def update_user(self, user_id: int, **fields: Any) -> User:
        return self._update(self._users, user_id, "User", fields)

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------

    async def get_player(self, player_id: int) -> Player | None:
        return self._players.get(player_id)

    async def list_players(self, sport: str | None = None) -> list[Player]:
        players = list(self._players.values())
        if sport:
            return [p for p in players if p.sport == sport]
        return players

    async def create_player(self, **fields: Any) -> Player:
        return self._insert(self._players, Player, **fields)

    async def update_player_price(self, player_id: int, new_price: Decimal, price_change: Decimal) -> Player:
        return self._update(
            self._players,
            player_id,
            "Player",
            {"token_price": new_price, "price_change": price_change},
        )

    # ------------------------------------------------------------------
    # Token holdings
    # ------------------------------------------------------------------

    async def get_token_holding(self, user_id: int, player_id: int) -> TokenHolding | None:
        return next(
            (h for h in self._holdings.values() if h.user_id == user_id and h.player_id == player_id),
            None,
        )

    async def list_holdings(self, user_id: int) -> list[TokenHolding]:
        return [h for h in self._holdings.values() if h.user_id == user_id]

    async def create_token_holding(
        self,
        user_id: int,
        player_id: int,
        amount: int,
        purchase_price: Decimal,
        is_staked: bool = False,
    ) -> TokenHolding:
        """One holding per (user, player); top-ups go through ``update_token_holding``."""
        if await self.get_token_holding(user_id, player_id) is not None:
            raise ValidationError(f"Token holding already exists for user {user_id} and player {player_id}")
        return self._insert(
            self._holdings,
            TokenHolding,
            user_id=user_id,
            player_id=player_id,
            amount=amount,
            purchase_price=purchase_price,
            is_staked=is_staked,
        )

    async def update_token_holding(self, holding_id: int, **fields: Any) -> TokenHolding:
        return self._update(self._holdings, holding_id, "Token holding", fields)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def list_transactions(self, user_id: int) -> list[Transaction]:
        """User's transactions, newest first."""
        return sorted(
            (t for t in self._transactions.values() if t.user_id == user_id),
            key=lambda t: (t.timestamp, t.id),
            reverse=True,
        )

    async def create_transaction(self, **fields: Any) -> Transaction:
        return self._insert(self._transactions, Transaction, timestamp=self.now(), **fields)

    # ------------------------------------------------------------------
    # Portfolio history
    # ------------------------------------------------------------------

    async def list_portfolio_history(self, user_id: int) -> list[PortfolioHistory]:
        """User's portfolio snapshots, oldest first."""
        return sorted(
            (h for h in self._history.values() if h.user_id == user_id),
            key=lambda h: (h.timestamp, h.id),
        )

    async def create_portfolio_history(self, user_id: int, total_value: Decimal) -> PortfolioHistory:
        return self._insert(
            self._history,
            PortfolioHistory,
            user_id=user_id,
            total_value=total_value,
            timestamp=self.now(),
        )

    # ------------------------------------------------------------------
    # Staking plans
    # ------------------------------------------------------------------

    async def get_staking_plan(self, plan_id: int) -> StakingPlan | None:
        return self._plans.get(plan_id)

    async def list_staking_plans(self) -> list[StakingPlan]:
        return list(self._plans.values())

    async def create_staking_plan(self, **fields: Any) -> StakingPlan:
        return self._insert(self._plans, StakingPlan, **fields)

    # ------------------------------------------------------------------
    # Achievements
    # ------------------------------------------------------------------

    async def get_achievement(self, achievement_id: int) -> Achievement | None:
        return self._achievements.get(achievement_id)

    async def list_achievements(self) -> list[Achievement]:
        return list(self._achievements.values())

    async def create_achievement(self, **fields: Any) -> Achievement:
        return self._insert(self._achievements, Achievement, **fields)

    async def get_user_achievement(self, user_id: int, achievement_id: int) -> UserAchievement | None:
        return next(
            (
                ua
                for ua in self._user_achievements.values()
                if ua.user_id == user_id and ua.achievement_id == achievement_id
            ),
            None,
        )

    async def list_user_achievements(self, user_id: int) -> list[UserAchievement]:
        return [ua for ua in self._user_achievements.values() if ua.user_id == user_id]

    async def create_user_achievement(
        self,
        user_id: int,
        achievement_id: int,
        progress: int = 0,
        completed: bool = False,
        completed_at: datetime | None = None,
    ) -> UserAchievement:
        return self._insert(
            self._user_achievements,
            UserAchievement,
            user_id=user_id,
            achievement_id=achievement_id,
            progress=progress,
            completed=completed,
            completed_at=completed_at,
            created_at=self.now(),
        )

    async def update_user_achievement(self, user_achievement_id: int, **fields: Any) -> UserAchievement:
        return self._update(self._user_achievements, user_achievement_id, "User achievement", fields)
