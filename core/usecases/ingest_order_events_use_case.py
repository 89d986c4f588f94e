from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from core.domain.entities.raw_order_entity import OrderEventKind, RawOrderEntity
from core.domain.entities.token_entity import TokenEntity
from core.repositories.order_event_repository import OrderEventRepository
from core.repositories.token_repository import TokenRepository

_ORDER_FIELDS = ("token_get", "tokenGet", "token_give", "tokenGive")


class IngestOrderEventsUseCase:
    """
    Use case for feeding ledger events and token descriptors into the service.

    Filled and Cancelled events may be full order records or short events that
    only carry the id (plus taker and fill timestamp for fills); short events are
    completed from the matching Created record.
    """

    def __init__(
        self,
        *,
        order_event_repo: OrderEventRepository,
        token_repo: TokenRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        self._events = order_event_repo
        self._tokens = token_repo
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    def upsert_token(self, dto: dict) -> TokenEntity:
        """
        Create or update a token descriptor.
        """
        token = TokenEntity(**dto)
        self._tokens.upsert(token)
        return self._tokens.get_by_address(token.address) or token

    def list_tokens(self) -> List[TokenEntity]:
        return self._tokens.list_all()

    def record(self, kind: OrderEventKind, payload: Dict[str, Any]) -> Optional[RawOrderEntity]:
        """
        Validate and append one event to its log.

        Returns:
            The stored order, or None when the id was already recorded in that log.

        Raises:
            ValueError: when a short event references an order that was never created.
        """
        kind = OrderEventKind(kind)
        payload = dict(payload)

        if kind is not OrderEventKind.CREATED and not any(f in payload for f in _ORDER_FIELDS):
            payload = self._complete_from_created(kind, payload)

        order = RawOrderEntity.model_validate(payload)
        added = self._events.append(kind, order)
        if not added:
            return None

        self._logger.debug("Recorded %s order id=%s", kind.value, order.id)
        return order

    def record_many(self, kind: OrderEventKind, payloads: Iterable[Dict[str, Any]]) -> int:
        """
        Append a batch of events; returns how many were added.
        """
        added = 0
        for payload in payloads:
            if self.record(kind, payload) is not None:
                added += 1
        return added

    def _complete_from_created(self, kind: OrderEventKind, payload: Dict[str, Any]) -> Dict[str, Any]:
        order_id = str(payload.get("id", "")).strip()
        created = self._events.get(OrderEventKind.CREATED, order_id)
        if created is None:
            raise ValueError(f"{kind.value} event references unknown order id={order_id!r}")

        data = created.model_dump()
        if kind is OrderEventKind.FILLED:
            taker = payload.get("taker") or payload.get("user")
            if taker:
                data["taker"] = taker
            if payload.get("timestamp") is not None:
                data["timestamp"] = payload["timestamp"]
        return data
