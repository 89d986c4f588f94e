from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, List, Tuple

from core.domain.entities.decorated_order_entity import (
    DecoratedOrderEntity,
    OrderSide,
    SkippedOrderEntity,
    SkippedOrdersEntity,
)
from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity, TokenEntity
from core.domain.errors import MalformedOrderError

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class OrderDecoratorService:
    """
    Enriches raw ledger orders with display attributes for a pair.

    Rules:
    - If the order gives the quote token: base_amount = amount_give, quote_amount = amount_get
      and the order is a BUY. Otherwise base_amount = amount_get, quote_amount = amount_give
      and the order is a SELL.
    - Each raw amount is rescaled by 10**decimals of the token it is denominated in.
    - price = quote_amount / base_amount rounded half-up to `price_precision` places.
    """

    def __init__(
        self,
        *,
        default_decimals: int = 18,
        price_precision: int = 5,
        skipped_sample_size: int = 5,
        logger: logging.Logger | None = None,
    ):
        self._default_decimals = int(default_decimals)
        self._precision = int(price_precision)
        self._quantum = Decimal(1).scaleb(-self._precision)
        self._sample_size = max(0, int(skipped_sample_size))
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @staticmethod
    def format_timestamp(ts: int) -> str:
        """
        Render a unix timestamp (UTC) as "h:mm:ssam <weekday> <Mon> <day>".

        weekday is 0 (Sunday) to 6 (Saturday). Month names are fixed English
        abbreviations so the output does not depend on the process locale.
        """
        dt = datetime.fromtimestamp(int(ts), tz=timezone.utc)
        hour12 = dt.hour % 12 or 12
        meridiem = "am" if dt.hour < 12 else "pm"
        weekday = dt.isoweekday() % 7
        return f"{hour12}:{dt.minute:02d}:{dt.second:02d}{meridiem} {weekday} {_MONTHS[dt.month - 1]} {dt.day}"

    def rescale(self, amount: int, token: TokenEntity | None) -> Decimal:
        decimals = token.decimals if token is not None else self._default_decimals
        # string construction is exact; arithmetic would round to the context precision
        return Decimal(f"{int(amount)}E-{decimals}")

    def price_of(self, base_amount: Decimal, quote_amount: Decimal) -> Decimal:
        """
        quote_amount / base_amount rounded half-up to the configured precision.

        Works in a local context wide enough for the integer digits of the ratio,
        so extreme uint256 ratios are not rejected by the default 28-digit context.
        """
        integer_digits = max(0, quote_amount.adjusted() - base_amount.adjusted() + 2)
        with localcontext() as ctx:
            ctx.prec = max(28, integer_digits + self._precision + 2)
            return (quote_amount / base_amount).quantize(self._quantum, rounding=ROUND_HALF_UP)

    def side_of(self, order: RawOrderEntity, pair: PairEntity) -> OrderSide:
        return OrderSide.BUY if order.token_give == pair.quote.address else OrderSide.SELL

    def decorate(self, order: RawOrderEntity, pair: PairEntity) -> DecoratedOrderEntity:
        """
        Decorate a single order.

        Raises:
            ValueError: if the pair is not ready.
            MalformedOrderError: if a leg is outside the pair or the base amount is zero.
        """
        if not pair.is_ready:
            raise ValueError("pair is not ready")

        tokens = {pair.base.address: pair.base, pair.quote.address: pair.quote}
        if (
            order.token_get not in tokens
            or order.token_give not in tokens
            or order.token_get == order.token_give
        ):
            raise MalformedOrderError(order.id, "token legs do not match the pair")

        give = self.rescale(order.amount_give, tokens[order.token_give])
        get = self.rescale(order.amount_get, tokens[order.token_get])

        side = self.side_of(order, pair)
        if side is OrderSide.BUY:
            base_amount, quote_amount = give, get
        else:
            base_amount, quote_amount = get, give

        if base_amount == 0:
            raise MalformedOrderError(order.id, "zero base amount")

        price = self.price_of(base_amount, quote_amount)

        data = order.model_dump()
        data.update(
            base_amount=base_amount,
            quote_amount=quote_amount,
            price=float(price),
            formatted_time=self.format_timestamp(order.timestamp),
            side=side,
        )
        return DecoratedOrderEntity.model_validate(data)

    def decorate_many(
        self,
        orders: Iterable[RawOrderEntity],
        pair: PairEntity,
    ) -> Tuple[List[DecoratedOrderEntity], SkippedOrdersEntity]:
        """
        Decorate a collection, skipping malformed records instead of aborting.

        Returns:
            (decorated orders in input order, skipped-record diagnostics)
        """
        decorated: List[DecoratedOrderEntity] = []
        skipped: List[SkippedOrderEntity] = []
        count = 0

        for order in orders:
            try:
                decorated.append(self.decorate(order, pair))
            except MalformedOrderError as exc:
                count += 1
                self._logger.warning("Skipping malformed order id=%s pair=%s: %s", exc.order_id, pair.symbol, exc.reason)
                if len(skipped) < self._sample_size:
                    skipped.append(SkippedOrderEntity(id=exc.order_id, reason=exc.reason))

        return decorated, SkippedOrdersEntity(count=count, sample=tuple(skipped))
