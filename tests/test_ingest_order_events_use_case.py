import pytest
from pydantic import ValidationError

from conftest import ALICE, BOB, TOKEN_A, TOKEN_B, WEI

from core.domain.entities.raw_order_entity import OrderEventKind
from core.usecases.ingest_order_events_use_case import IngestOrderEventsUseCase


@pytest.fixture
def ingest(event_repo, token_repo):
    return IngestOrderEventsUseCase(order_event_repo=event_repo, token_repo=token_repo)


def _ledger_order(order_id=1, **overrides):
    doc = {
        "id": order_id,
        "user": ALICE,
        "tokenGet": TOKEN_A,
        "amountGet": str(100 * WEI),
        "tokenGive": TOKEN_B,
        "amountGive": str(200 * WEI),
        "timestamp": "1000",
    }
    doc.update(overrides)
    return doc


def test_records_ledger_shaped_created_event(ingest, event_repo):
    order = ingest.record(OrderEventKind.CREATED, _ledger_order())

    assert order.id == "1"
    assert order.maker == ALICE
    assert order.amount_get == 100 * WEI
    assert event_repo.snapshot().created == (order,)


def test_ledger_fill_maps_creator_to_maker_and_user_to_taker(ingest):
    ingest.record(OrderEventKind.CREATED, _ledger_order())
    fill = _ledger_order(user=BOB, creator=ALICE, timestamp=2000)

    order = ingest.record(OrderEventKind.FILLED, fill)

    assert order.maker == ALICE
    assert order.taker == BOB
    assert order.timestamp == 2000


def test_short_fill_event_is_completed_from_created(ingest):
    ingest.record(OrderEventKind.CREATED, _ledger_order(7))

    order = ingest.record(OrderEventKind.FILLED, {"id": 7, "taker": BOB, "timestamp": 5000})

    assert order.maker == ALICE
    assert order.taker == BOB
    assert order.timestamp == 5000
    assert order.token_give == TOKEN_B


def test_short_cancel_for_unknown_order_is_rejected(ingest):
    with pytest.raises(ValueError):
        ingest.record(OrderEventKind.CANCELLED, {"id": 99})


def test_duplicate_event_returns_none(ingest):
    assert ingest.record(OrderEventKind.CREATED, _ledger_order()) is not None
    assert ingest.record(OrderEventKind.CREATED, _ledger_order()) is None


def test_invalid_amount_is_a_validation_error(ingest):
    with pytest.raises(ValidationError):
        ingest.record(OrderEventKind.CREATED, _ledger_order(amountGet="-5"))


def test_record_many_counts_added(ingest):
    added = ingest.record_many(OrderEventKind.CREATED, [_ledger_order(1), _ledger_order(2), _ledger_order(1)])

    assert added == 2


def test_upsert_token_normalizes_address(ingest):
    token = ingest.upsert_token({"address": "0x" + "E" * 40, "symbol": "USDC", "decimals": 6})

    assert token.address == "0x" + "e" * 40
    assert token in ingest.list_tokens()
