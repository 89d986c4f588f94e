from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from core.domain.entities.decorated_order_entity import ChangeSign, DecoratedOrderEntity
from core.domain.entities.market_view_entities import OHLCPointEntity, PriceChartEntity
from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity
from core.services.order_decorator_service import OrderDecoratorService
from core.services.pair_filter_service import PairFilterService

INTERVAL_SECONDS: Dict[str, int] = {
    "1m": 60,
    "15m": 15 * 60,
    "1h": 60 * 60,
    "4h": 4 * 60 * 60,
    "1d": 24 * 60 * 60,
}


class PriceChartService:
    """
    Builds OHLC candlestick series from filled orders of a pair.

    Behavior:
      - Trades are bucketed by floor(timestamp / interval) * interval (UTC),
        so "1d" buckets start at UTC midnight.
      - open/close are the chronologically first/last trade prices of the bucket,
        high/low the max/min price.
      - last_price is the most recent trade price; last_price_change is "+" when
        it is >= the previous trade price. With fewer than two trades the chart
        reports last_price=0 and "+".
    """

    def __init__(self, *, decorator: OrderDecoratorService, interval: str = "1d"):
        interval = str(interval).strip().lower()
        if interval not in INTERVAL_SECONDS:
            raise ValueError(f"Unsupported candle interval {interval!r}; use one of {sorted(INTERVAL_SECONDS)}")
        self._decorator = decorator
        self._interval = interval
        self._interval_s = INTERVAL_SECONDS[interval]

    @property
    def interval(self) -> str:
        return self._interval

    def bucket_start(self, ts: int) -> int:
        return (int(ts) // self._interval_s) * self._interval_s

    def build_series(self, chronological: List[DecoratedOrderEntity]) -> List[OHLCPointEntity]:
        buckets: Dict[int, List[DecoratedOrderEntity]] = {}
        for order in chronological:
            buckets.setdefault(self.bucket_start(order.timestamp), []).append(order)

        series = []
        for start in sorted(buckets):
            prices = [o.price for o in buckets[start]]
            series.append(
                OHLCPointEntity(
                    bucket_start=start,
                    open=prices[0],
                    high=max(prices),
                    low=min(prices),
                    close=prices[-1],
                )
            )
        return series

    def build(self, filled_orders: Iterable[RawOrderEntity], pair: PairEntity) -> Optional[PriceChartEntity]:
        """
        Returns:
            The price chart, or None while the pair is not ready.
        """
        if not pair.is_ready:
            return None

        orders = PairFilterService.filter(filled_orders, pair)
        orders = sorted(orders, key=lambda o: o.timestamp)
        decorated, skipped = self._decorator.decorate_many(orders, pair)

        last_price = 0.0
        last_change = ChangeSign.PLUS
        if len(decorated) >= 2:
            last_price = decorated[-1].price
            if last_price < decorated[-2].price:
                last_change = ChangeSign.MINUS

        return PriceChartEntity(
            last_price=last_price,
            last_price_change=last_change,
            series=tuple(self.build_series(decorated)),
            skipped=skipped,
        )
