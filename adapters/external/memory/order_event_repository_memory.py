from __future__ import annotations

import logging
from typing import Dict, List, Optional

from core.domain.entities.market_state_entity import MarketRecordsSnapshot
from core.domain.entities.raw_order_entity import OrderEventKind, RawOrderEntity
from core.repositories.order_event_repository import OrderEventRepository


class OrderEventRepositoryMemory(OrderEventRepository):
    """
    In-memory repository for ledger order events.

    Each log keeps insertion order and an id index. Appending bumps that log's
    generation, which invalidates derived views. Snapshots are reused until a
    generation changes.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self._logs: Dict[OrderEventKind, List[RawOrderEntity]] = {kind: [] for kind in OrderEventKind}
        self._by_id: Dict[OrderEventKind, Dict[str, RawOrderEntity]] = {kind: {} for kind in OrderEventKind}
        self._generations: Dict[OrderEventKind, int] = {kind: 0 for kind in OrderEventKind}
        self._snapshot: MarketRecordsSnapshot | None = None

    def append(self, kind: OrderEventKind, order: RawOrderEntity) -> bool:
        kind = OrderEventKind(kind)
        if order.id in self._by_id[kind]:
            self._logger.debug("Ignoring duplicate %s event id=%s", kind.value, order.id)
            return False

        if kind is not OrderEventKind.CREATED and order.id not in self._by_id[OrderEventKind.CREATED]:
            # out-of-order ingestion: nothing to close yet
            self._logger.warning("%s event for unknown order id=%s", kind.value.capitalize(), order.id)

        self._logs[kind].append(order)
        self._by_id[kind][order.id] = order
        self._generations[kind] += 1
        self._snapshot = None
        return True

    def get(self, kind: OrderEventKind, order_id: str) -> Optional[RawOrderEntity]:
        return self._by_id[OrderEventKind(kind)].get(str(order_id).strip())

    def snapshot(self) -> MarketRecordsSnapshot:
        if self._snapshot is None:
            self._snapshot = MarketRecordsSnapshot(
                created=tuple(self._logs[OrderEventKind.CREATED]),
                filled=tuple(self._logs[OrderEventKind.FILLED]),
                cancelled=tuple(self._logs[OrderEventKind.CANCELLED]),
                created_generation=self._generations[OrderEventKind.CREATED],
                filled_generation=self._generations[OrderEventKind.FILLED],
                cancelled_generation=self._generations[OrderEventKind.CANCELLED],
            )
        return self._snapshot

    def count_all(self) -> int:
        return sum(len(log) for log in self._logs.values())
