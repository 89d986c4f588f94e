from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from core.domain.entities.market_state_entity import MarketRecordsSnapshot
from core.domain.entities.raw_order_entity import OrderEventKind, RawOrderEntity


class OrderEventRepository(ABC):
    """
    Append-only store of the three ledger event logs (Created, Filled, Cancelled).

    Owned by the ingestion side; market views only read snapshots.
    """

    @abstractmethod
    def append(self, kind: OrderEventKind, order: RawOrderEntity) -> bool:
        """
        Append a record to one log.

        Returns:
            True if the record was added, False if its id was already in that log.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, kind: OrderEventKind, order_id: str) -> Optional[RawOrderEntity]:
        """
        Retrieve a record of one log by its id.
        """
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> MarketRecordsSnapshot:
        """
        Return an immutable snapshot of all three logs with their generations.
        """
        raise NotImplementedError

    @abstractmethod
    def count_all(self) -> int:
        """
        Count records across all logs.
        """
        raise NotImplementedError
