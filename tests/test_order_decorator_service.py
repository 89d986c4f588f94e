from decimal import Decimal

import pytest
from pydantic import ValidationError

from conftest import TOKEN_A, TOKEN_B, TOKEN_C, buy, make_order, sell

from core.domain.entities.decorated_order_entity import OrderSide
from core.domain.entities.token_entity import PairEntity, TokenEntity
from core.domain.errors import MalformedOrderError
from core.services.order_decorator_service import OrderDecoratorService


def test_decorate_buy_gives_quote_token(decorator, pair):
    order = decorator.decorate(buy("F1", base=200, quote=100, timestamp=1000), pair)

    assert order.base_amount == Decimal(200)
    assert order.quote_amount == Decimal(100)
    assert order.price == 0.5
    assert order.side is OrderSide.BUY


def test_decorate_sell_gives_base_token(decorator, pair):
    raw = make_order("F2", give=TOKEN_A, amount_give=60, get=TOKEN_B, amount_get=36, timestamp=2000)

    order = decorator.decorate(raw, pair)

    assert order.base_amount == Decimal(36)
    assert order.quote_amount == Decimal(60)
    assert order.price == 1.66667
    assert order.side is OrderSide.SELL


def test_decorate_keeps_raw_fields_and_leaves_input_untouched(decorator, pair):
    raw = buy(7, base=3, quote=1, timestamp=1234)

    order = decorator.decorate(raw, pair)

    assert order.id == raw.id
    assert order.amount_give == raw.amount_give
    assert order.timestamp == 1234
    assert not hasattr(raw, "price")


def test_decorated_orders_are_frozen(decorator, pair):
    order = decorator.decorate(buy(1, base=2, quote=1), pair)

    with pytest.raises(ValidationError):
        order.price = 42.0


@pytest.mark.parametrize(
    "base,quote",
    [(3, 1), (7, 22), (36, 60), (1, 1), (9999, 3), (123456, 7)],
)
def test_price_matches_amount_ratio_within_rounding(decorator, pair, base, quote):
    for raw in (buy(1, base=base, quote=quote), sell(2, base=base, quote=quote)):
        order = decorator.decorate(raw, pair)
        ratio = order.quote_amount / order.base_amount
        assert abs(Decimal(str(order.price)) - ratio) <= Decimal("0.000005")


@pytest.mark.parametrize(
    "base,quote",
    [(200, 100), (8, 1), (16, 3), (1, 7), (1, 22), (1, 60)],
)
def test_price_times_base_reproduces_quote(decorator, pair, base, quote):
    for raw in (buy(1, base=base, quote=quote), sell(2, base=base, quote=quote)):
        order = decorator.decorate(raw, pair)
        assert abs(Decimal(str(order.price)) * order.base_amount - order.quote_amount) <= Decimal("0.00001")


def test_price_rounds_half_up(decorator, pair):
    # 0.000015 is exactly representable as a decimal ratio: 3 / 200000
    order = decorator.decorate(buy(1, base=200000, quote=3), pair)

    assert order.price == 0.00002


def test_rescale_uses_token_decimals():
    base = TokenEntity(address=TOKEN_A, symbol="A", decimals=18)
    quote = TokenEntity(address=TOKEN_B, symbol="USDC", decimals=6)
    pair = PairEntity(base=base, quote=quote)
    decorator = OrderDecoratorService()
    raw = make_order(1, give=TOKEN_A, amount_give=0, get=TOKEN_B, amount_get=0)
    raw = raw.model_copy(update={"amount_give": 2 * 10**18, "amount_get": 5 * 10**6})

    order = decorator.decorate(raw, pair)

    assert order.base_amount == Decimal(5)
    assert order.quote_amount == Decimal(2)
    assert order.price == 0.4


def test_zero_base_amount_is_malformed(decorator, pair):
    with pytest.raises(MalformedOrderError) as exc_info:
        decorator.decorate(buy("z", base=0, quote=5), pair)

    assert exc_info.value.order_id == "z"
    assert "zero base amount" in exc_info.value.reason


def test_leg_outside_pair_is_malformed(decorator, pair):
    raw = make_order("x", give=TOKEN_C, amount_give=1, get=TOKEN_A, amount_get=1)

    with pytest.raises(MalformedOrderError):
        decorator.decorate(raw, pair)


def test_decorate_requires_ready_pair(decorator, incomplete_pair):
    with pytest.raises(ValueError):
        decorator.decorate(buy(1, base=1, quote=1), incomplete_pair)


def test_decorate_many_skips_malformed_and_reports_sample(decorator, pair):
    orders = [
        buy(1, base=2, quote=1),
        buy(2, base=0, quote=1),
        sell(3, base=0, quote=1),
        buy(4, base=0, quote=1),
        sell(5, base=4, quote=1),
    ]

    decorated, skipped = decorator.decorate_many(orders, pair)

    assert [o.id for o in decorated] == ["1", "5"]
    assert skipped.count == 3
    assert [s.id for s in skipped.sample] == ["2", "3"]


def test_format_timestamp_is_deterministic_utc():
    # 1970-01-01 00:16:40 UTC, a Thursday
    assert OrderDecoratorService.format_timestamp(1000) == "12:16:40am 4 Jan 1"
    # 2021-03-14 15:09:26 UTC, a Sunday
    assert OrderDecoratorService.format_timestamp(1615734566) == "3:09:26pm 0 Mar 14"


def test_wide_amounts_are_rescaled_without_rounding(decorator, pair):
    wide = 2**200 + 1
    raw = buy(1, base=1, quote=1).model_copy(update={"amount_give": wide, "amount_get": wide})

    order = decorator.decorate(raw, pair)

    sign, digits, exponent = order.base_amount.as_tuple()
    assert int("".join(map(str, digits))) == wide
    assert exponent == -18
    assert order.price == 1.0


def test_extreme_price_ratio_is_decorated(decorator, pair):
    # 1e6 quote for 1 wei of base: a price with 25 integer digits
    raw = buy(1, base=1, quote=1).model_copy(update={"amount_give": 1, "amount_get": 10**24})

    order = decorator.decorate(raw, pair)

    assert order.base_amount == Decimal("1E-18")
    assert order.price == 1e24


def test_extreme_price_ratio_does_not_break_decorate_many(decorator, pair):
    extreme = buy(2, base=1, quote=1).model_copy(update={"amount_give": 1, "amount_get": 10**60})

    decorated, skipped = decorator.decorate_many([buy(1, base=10, quote=5), extreme], pair)

    assert [o.id for o in decorated] == ["1", "2"]
    assert skipped.count == 0
