from __future__ import annotations

from typing import Iterable, List, TypeVar

from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity

O = TypeVar("O", bound=RawOrderEntity)


class PairFilterService:
    """
    Restricts order collections to the selected market.

    Rules:
    - token_get must be one of the pair's addresses.
    - token_give must be one of the pair's addresses.
    - both legs on the same address are rejected (not a trade of the pair).
    """

    @staticmethod
    def matches(order: RawOrderEntity, pair: PairEntity) -> bool:
        addresses = pair.addresses
        return (
            order.token_get in addresses
            and order.token_give in addresses
            and order.token_get != order.token_give
        )

    @classmethod
    def filter(cls, orders: Iterable[O], pair: PairEntity) -> List[O]:
        return [o for o in orders if cls.matches(o, pair)]
