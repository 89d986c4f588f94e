from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity


@dataclass(frozen=True)
class MarketRecordsSnapshot:
    """
    Consistent view of the three ledger event logs.

    Collections are tuples captured together with the generation counter of
    each log; a generation increments every time its log is appended to.
    """

    created: Tuple[RawOrderEntity, ...] = ()
    filled: Tuple[RawOrderEntity, ...] = ()
    cancelled: Tuple[RawOrderEntity, ...] = ()

    created_generation: int = 0
    filled_generation: int = 0
    cancelled_generation: int = 0

    @property
    def generations(self) -> Tuple[int, int, int]:
        return (self.created_generation, self.filled_generation, self.cancelled_generation)


@dataclass(frozen=True)
class MarketStateEntity:
    """
    Everything a market view is derived from: the record snapshot plus the
    selected pair and (optional) account identity.
    """

    records: MarketRecordsSnapshot
    pair: PairEntity
    account: Optional[str] = None

    def __post_init__(self) -> None:
        if self.account is not None:
            account = self.account.strip().lower() or None
            object.__setattr__(self, "account", account)
