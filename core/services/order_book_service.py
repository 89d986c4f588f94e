from __future__ import annotations

from typing import Iterable, Optional

from core.domain.entities.decorated_order_entity import OrderBookEntryEntity, OrderSide
from core.domain.entities.market_view_entities import OrderBookEntity
from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity
from core.services.order_decorator_service import OrderDecoratorService
from core.services.pair_filter_service import PairFilterService

SORT_ORDERS = ("asc", "desc")


class OrderBookService:
    """
    Builds the order book of a pair from open orders.

    Steps: pair filter -> decorate -> group by side -> sort by price.
    Bids are always price descending. Asks default to price descending too;
    pass ask_sort_order="asc" for the lowest-ask-first convention.
    """

    def __init__(self, *, decorator: OrderDecoratorService, ask_sort_order: str = "desc"):
        ask_sort_order = str(ask_sort_order).strip().lower()
        if ask_sort_order not in SORT_ORDERS:
            raise ValueError(f"ask_sort_order must be one of {SORT_ORDERS}, got {ask_sort_order!r}")
        self._decorator = decorator
        self._asks_descending = ask_sort_order == "desc"

    def build(self, open_orders: Iterable[RawOrderEntity], pair: PairEntity) -> Optional[OrderBookEntity]:
        """
        Returns:
            The order book, or None while the pair is not ready.
        """
        if not pair.is_ready:
            return None

        orders = PairFilterService.filter(open_orders, pair)
        decorated, skipped = self._decorator.decorate_many(orders, pair)

        bids = []
        asks = []
        for order in decorated:
            entry = order.extend(OrderBookEntryEntity, fill_action=order.side.opposite)
            if entry.side is OrderSide.BUY:
                bids.append(entry)
            else:
                asks.append(entry)

        bids.sort(key=lambda o: o.price, reverse=True)
        asks.sort(key=lambda o: o.price, reverse=self._asks_descending)

        return OrderBookEntity(bids=tuple(bids), asks=tuple(asks), skipped=skipped)
