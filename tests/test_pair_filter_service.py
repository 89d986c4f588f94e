from conftest import TOKEN_A, TOKEN_B, TOKEN_C, buy, make_order, sell

from core.services.pair_filter_service import PairFilterService


def test_filter_keeps_orders_on_both_pair_tokens(pair):
    orders = [
        buy(1, base=1, quote=1),
        sell(2, base=1, quote=1),
        make_order(3, give=TOKEN_C, amount_give=1, get=TOKEN_A, amount_get=1),
        make_order(4, give=TOKEN_B, amount_give=1, get=TOKEN_C, amount_get=1),
    ]

    assert [o.id for o in PairFilterService.filter(orders, pair)] == ["1", "2"]


def test_filter_rejects_same_address_legs(pair):
    orders = [make_order(1, give=TOKEN_A, amount_give=1, get=TOKEN_A, amount_get=1)]

    assert PairFilterService.filter(orders, pair) == []


def test_filter_is_case_insensitive_on_addresses(pair):
    order = make_order(1, give=TOKEN_B.upper().replace("0X", "0x"), amount_give=1, get=TOKEN_A, amount_get=1)

    assert PairFilterService.matches(order, pair)
