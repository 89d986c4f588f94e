from __future__ import annotations

from typing import Iterable, List, Sequence

from core.domain.entities.raw_order_entity import RawOrderEntity


class OpenOrderService:
    """
    Resolves open orders: Created minus (Filled union Cancelled), by id.

    Ids are compared as canonical strings. Filled/Cancelled ids that were never
    created are simply ignored. Output keeps the Created order.
    """

    @staticmethod
    def closed_ids(filled: Iterable[RawOrderEntity], cancelled: Iterable[RawOrderEntity]) -> set[str]:
        ids = {str(o.id) for o in filled}
        ids.update(str(o.id) for o in cancelled)
        return ids

    @classmethod
    def resolve(
        cls,
        created: Sequence[RawOrderEntity],
        filled: Iterable[RawOrderEntity],
        cancelled: Iterable[RawOrderEntity],
    ) -> List[RawOrderEntity]:
        closed = cls.closed_ids(filled, cancelled)
        return [o for o in created if str(o.id) not in closed]
