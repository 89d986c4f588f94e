from __future__ import annotations

from typing import Tuple

from core.domain.entities.base_entity import ValueEntity
from core.domain.entities.decorated_order_entity import (
    AccountOrderEntity,
    ChangeSign,
    OrderBookEntryEntity,
    SkippedOrdersEntity,
    TradeEntity,
)


class OrderBookEntity(ValueEntity):
    """
    Open orders of a pair split into bids (buys) and asks (sells).

    Bids are sorted by price descending (best bid first). Asks follow the
    configured direction.
    """

    bids: Tuple[OrderBookEntryEntity, ...] = ()
    asks: Tuple[OrderBookEntryEntity, ...] = ()
    skipped: SkippedOrdersEntity = SkippedOrdersEntity()


class TradeTapeEntity(ValueEntity):
    """Filled orders of a pair, newest first, colored chronologically."""

    trades: Tuple[TradeEntity, ...] = ()
    skipped: SkippedOrdersEntity = SkippedOrdersEntity()


class OHLCPointEntity(ValueEntity):
    """
    One candlestick bucket.

    bucket_start is the unix timestamp (seconds) where the period starts.
    """

    bucket_start: int
    open: float
    high: float
    low: float
    close: float


class PriceChartEntity(ValueEntity):
    last_price: float = 0.0
    last_price_change: ChangeSign = ChangeSign.PLUS
    series: Tuple[OHLCPointEntity, ...] = ()
    skipped: SkippedOrdersEntity = SkippedOrdersEntity()


class AccountOrdersEntity(ValueEntity):
    """Open or filled orders of the selected account, newest first."""

    orders: Tuple[AccountOrderEntity, ...] = ()
    skipped: SkippedOrdersEntity = SkippedOrdersEntity()
