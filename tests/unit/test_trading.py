"""Tests for buy, sell and swap."""

from decimal import Decimal

import pytest

from cryptosports.db.models import TransactionType
from cryptosports.errors import BusinessRuleViolation, NotFoundError, ValidationError
from cryptosports.portfolio.service import compute_portfolio
from cryptosports.trading.service import buy_tokens, sell_tokens, swap_amount, swap_tokens

LEBRON = 1
CURRY = 2
MAHOMES = 5


class TestBuy:
    async def test_first_purchase_scenario(self, store, user):
        await store.update_player_price(LEBRON, Decimal("2.50"), Decimal("0"))

        result = await buy_tokens(store, user.id, LEBRON, 3, Decimal("2.50"))

        assert result.holding.amount == 3
        assert result.transaction.type == TransactionType.BUY
        transactions = await store.list_transactions(user.id)
        assert len(transactions) == 1
        portfolio = await compute_portfolio(store, user.id)
        assert portfolio.total_value == Decimal("7.50")

    async def test_top_up_overwrites_purchase_price(self, store, user):
        await buy_tokens(store, user.id, LEBRON, 2, Decimal("2.00"))
        result = await buy_tokens(store, user.id, LEBRON, 1, Decimal("3.00"))
        assert result.holding.amount == 3
        assert result.holding.purchase_price == Decimal("3.00")
        assert len(await store.list_holdings(user.id)) == 1

    async def test_appends_snapshot(self, store, user):
        await buy_tokens(store, user.id, LEBRON, 2, Decimal("2.65"))
        await buy_tokens(store, user.id, CURRY, 1, Decimal("2.98"))
        history = await store.list_portfolio_history(user.id)
        assert [h.total_value for h in history] == [Decimal("5.30"), Decimal("8.28")]

    async def test_supply_untouched(self, store, user):
        before = await store.get_player(LEBRON)
        await buy_tokens(store, user.id, LEBRON, 10, Decimal("2.65"))
        assert (await store.get_player(LEBRON)).available_supply == before.available_supply

    async def test_unknown_player(self, store, user):
        with pytest.raises(NotFoundError, match="Player not found"):
            await buy_tokens(store, user.id, 999, 1, Decimal("1"))

    async def test_unknown_user(self, store):
        with pytest.raises(NotFoundError, match="User not found"):
            await buy_tokens(store, 999, LEBRON, 1, Decimal("1"))
        assert await store.list_holdings(999) == []

    @pytest.mark.parametrize("amount,price", [(0, Decimal("1")), (-2, Decimal("1")), (1, Decimal("0"))])
    async def test_non_positive_input_rejected(self, store, user, amount, price):
        with pytest.raises(ValidationError):
            await buy_tokens(store, user.id, LEBRON, amount, price)
        assert await store.list_transactions(user.id) == []


class TestSell:
    async def test_buy_then_sell_restores_amount(self, store, user):
        await buy_tokens(store, user.id, LEBRON, 4, Decimal("2.65"))
        prior = (await store.get_token_holding(user.id, LEBRON)).amount

        await buy_tokens(store, user.id, LEBRON, 3, Decimal("2.65"))
        result = await sell_tokens(store, user.id, LEBRON, 3, Decimal("2.70"))

        assert result.holding.amount == prior
        kinds = [t.type for t in await store.list_transactions(user.id)]
        assert kinds[:2] == [TransactionType.SELL, TransactionType.BUY]

    async def test_sell_everything_keeps_empty_holding(self, store, user):
        await buy_tokens(store, user.id, LEBRON, 2, Decimal("2.65"))
        result = await sell_tokens(store, user.id, LEBRON, 2, Decimal("2.65"))
        assert result.holding.amount == 0
        assert (await compute_portfolio(store, user.id)).total_value == Decimal("0")

    async def test_not_owned(self, store, user):
        with pytest.raises(NotFoundError, match="You don't own this token"):
            await sell_tokens(store, user.id, LEBRON, 1, Decimal("2.65"))

    async def test_insufficient_amount_leaves_no_trace(self, store, user):
        await buy_tokens(store, user.id, LEBRON, 2, Decimal("2.65"))
        with pytest.raises(BusinessRuleViolation, match="Not enough tokens to sell"):
            await sell_tokens(store, user.id, LEBRON, 3, Decimal("2.65"))
        assert (await store.get_token_holding(user.id, LEBRON)).amount == 2
        assert len(await store.list_transactions(user.id)) == 1
        assert len(await store.list_portfolio_history(user.id)) == 1

    async def test_staked_holding_cannot_be_sold(self, store, user):
        result = await buy_tokens(store, user.id, LEBRON, 5, Decimal("2.65"))
        await store.update_token_holding(result.holding.id, is_staked=True)
        with pytest.raises(BusinessRuleViolation, match="Cannot sell staked tokens"):
            await sell_tokens(store, user.id, LEBRON, 1, Decimal("2.65"))


class TestSwap:
    def test_swap_amount_floors(self):
        assert swap_amount(10, Decimal("2.0"), Decimal("4.0")) == 5
        assert swap_amount(3, Decimal("2.65"), Decimal("2.98")) == 2
        assert swap_amount(1, Decimal("1.0"), Decimal("4.0")) == 0

    async def test_half_price_swap(self, store, user):
        await store.update_player_price(LEBRON, Decimal("2.0"), Decimal("0"))
        await store.update_player_price(CURRY, Decimal("4.0"), Decimal("0"))
        await buy_tokens(store, user.id, LEBRON, 12, Decimal("2.0"))

        result = await swap_tokens(store, user.id, LEBRON, CURRY, 10)

        assert result.from_holding.amount == 2
        assert result.holding.amount == 5
        assert result.holding.purchase_price == Decimal("4.0")
        assert result.transaction.type == TransactionType.SWAP
        assert result.transaction.player_id == CURRY
        assert result.transaction.from_player_id == LEBRON
        assert result.transaction.amount == 5
        assert result.transaction.price == Decimal("4.0")

    async def test_existing_destination_keeps_purchase_price(self, store, user):
        await buy_tokens(store, user.id, LEBRON, 10, Decimal("2.65"))
        await buy_tokens(store, user.id, MAHOMES, 1, Decimal("1.00"))

        result = await swap_tokens(store, user.id, LEBRON, MAHOMES, 2)

        assert result.holding.amount == 1 + swap_amount(2, Decimal("2.65"), Decimal("2.55"))
        assert result.holding.purchase_price == Decimal("1.00")

    async def test_too_small_rejected(self, store, user):
        await store.update_player_price(LEBRON, Decimal("1.0"), Decimal("0"))
        await store.update_player_price(CURRY, Decimal("4.0"), Decimal("0"))
        await buy_tokens(store, user.id, LEBRON, 3, Decimal("1.0"))

        with pytest.raises(BusinessRuleViolation, match="Swap amount too small"):
            await swap_tokens(store, user.id, LEBRON, CURRY, 3)

        assert (await store.get_token_holding(user.id, LEBRON)).amount == 3
        assert await store.get_token_holding(user.id, CURRY) is None

    async def test_same_player_rejected(self, store, user):
        await buy_tokens(store, user.id, LEBRON, 3, Decimal("2.65"))
        with pytest.raises(ValidationError):
            await swap_tokens(store, user.id, LEBRON, LEBRON, 1)

    async def test_unknown_destination(self, store, user):
        await buy_tokens(store, user.id, LEBRON, 3, Decimal("2.65"))
        with pytest.raises(NotFoundError):
            await swap_tokens(store, user.id, LEBRON, 999, 1)
        assert (await store.get_token_holding(user.id, LEBRON)).amount == 3

    async def test_staked_source_rejected(self, store, user):
        result = await buy_tokens(store, user.id, LEBRON, 3, Decimal("2.65"))
        await store.update_token_holding(result.holding.id, is_staked=True)
        with pytest.raises(BusinessRuleViolation, match="Cannot swap staked tokens"):
            await swap_tokens(store, user.id, LEBRON, CURRY, 1)
