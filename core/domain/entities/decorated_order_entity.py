from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Tuple, Type, TypeVar

from core.domain.entities.base_entity import ValueEntity
from core.domain.entities.raw_order_entity import RawOrderEntity

D = TypeVar("D", bound="DecoratedOrderEntity")


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"

    @property
    def opposite(self) -> "OrderSide":
        return OrderSide.SELL if self is OrderSide.BUY else OrderSide.BUY


class PriceDirection(str, Enum):
    """Trade tape coloring relative to the previous trade."""

    UP = "up"
    DOWN = "down"


class ChangeSign(str, Enum):
    PLUS = "+"
    MINUS = "-"

    @classmethod
    def for_side(cls, side: OrderSide) -> "ChangeSign":
        return cls.PLUS if side is OrderSide.BUY else cls.MINUS


class DecoratedOrderEntity(RawOrderEntity):
    """
    Raw order enriched with display attributes for the selected pair.

    - base_amount / quote_amount: raw amounts rescaled by token decimals.
    - price: quote_amount / base_amount rounded to the configured precision.
    - side: BUY iff the order gives the pair's quote token.
    """

    base_amount: Decimal
    quote_amount: Decimal
    price: float
    formatted_time: str
    side: OrderSide

    def extend(self, entity_cls: Type[D], **extra: Any) -> D:
        """
        Build a richer view entity from this one (e.g. a trade with its direction).

        Args:
            entity_cls: Target subclass.
            **extra: Values for the subclass fields (may override existing ones).
        """
        data = self.model_dump()
        data.update(extra)
        return entity_cls.model_validate(data)


class OrderBookEntryEntity(DecoratedOrderEntity):
    """Open order as shown in the book; fill_action is what a taker would do."""

    fill_action: OrderSide


class TradeEntity(DecoratedOrderEntity):
    """Filled order on the trade tape."""

    direction: PriceDirection


class AccountOrderEntity(DecoratedOrderEntity):
    """
    Order seen from the selected account.

    For filled orders side is perspective-aware (inverted when the account
    was the taker) and sign is "+" for buys, "-" for sells.
    """

    sign: Optional[ChangeSign] = None


class SkippedOrderEntity(ValueEntity):
    id: str
    reason: str


class SkippedOrdersEntity(ValueEntity):
    """
    Diagnostics for records left out of a view because they were malformed.

    sample is bounded; count is the full number of skipped records.
    """

    count: int = 0
    sample: Tuple[SkippedOrderEntity, ...] = ()
