from __future__ import annotations

from typing import Iterable, List, Optional

from core.domain.entities.decorated_order_entity import DecoratedOrderEntity, PriceDirection, TradeEntity
from core.domain.entities.market_view_entities import TradeTapeEntity
from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity
from core.services.order_decorator_service import OrderDecoratorService
from core.services.pair_filter_service import PairFilterService


class TradeTapeService:
    """
    Builds the trade tape (filled orders) of a pair.

    Coloring is done in chronological order: the first trade is UP, every next
    trade is UP if its price >= the previous trade's price, else DOWN. The tape
    is then returned newest first; colors are not recomputed by that sort.
    """

    def __init__(self, *, decorator: OrderDecoratorService):
        self._decorator = decorator

    @staticmethod
    def colorize(chronological: List[DecoratedOrderEntity]) -> List[TradeEntity]:
        trades: List[TradeEntity] = []
        previous: Optional[DecoratedOrderEntity] = None
        for order in chronological:
            if previous is None or order.price >= previous.price:
                direction = PriceDirection.UP
            else:
                direction = PriceDirection.DOWN
            trades.append(order.extend(TradeEntity, direction=direction))
            previous = order
        return trades

    def build(self, filled_orders: Iterable[RawOrderEntity], pair: PairEntity) -> Optional[TradeTapeEntity]:
        """
        Returns:
            The trade tape newest first, or None while the pair is not ready.
        """
        if not pair.is_ready:
            return None

        orders = PairFilterService.filter(filled_orders, pair)
        orders = sorted(orders, key=lambda o: o.timestamp)
        decorated, skipped = self._decorator.decorate_many(orders, pair)

        trades = self.colorize(decorated)
        trades.sort(key=lambda o: o.timestamp, reverse=True)

        return TradeTapeEntity(trades=tuple(trades), skipped=skipped)
