from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class OrderOutDTO(BaseModel):
    """
    Decorated order returned by API.

    Raw integer amounts and rescaled decimal amounts are sent as strings to
    avoid precision loss in JSON clients.
    """

    id: str
    maker: str
    taker: Optional[str] = None

    token_get: str
    amount_get: str
    token_give: str
    amount_give: str
    timestamp: int

    base_amount: str
    quote_amount: str
    price: float
    formatted_time: str
    side: str

    @field_validator("amount_get", "amount_give", "base_amount", "quote_amount", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> str:
        return str(v)


class OrderBookEntryOutDTO(OrderOutDTO):
    fill_action: str


class TradeOutDTO(OrderOutDTO):
    direction: str


class AccountOrderOutDTO(OrderOutDTO):
    sign: Optional[str] = None


class SkippedOrderOutDTO(BaseModel):
    id: str
    reason: str


class SkippedOrdersOutDTO(BaseModel):
    count: int = 0
    sample: List[SkippedOrderOutDTO] = Field(default_factory=list)


class OrderBookOutDTO(BaseModel):
    """
    DTO returned by API for the order book of a pair.
    """

    bids: List[OrderBookEntryOutDTO]
    asks: List[OrderBookEntryOutDTO]
    skipped: SkippedOrdersOutDTO


class TradeTapeOutDTO(BaseModel):
    trades: List[TradeOutDTO]
    skipped: SkippedOrdersOutDTO


class OHLCPointOutDTO(BaseModel):
    bucket_start: int
    open: float
    high: float
    low: float
    close: float


class PriceChartOutDTO(BaseModel):
    """
    DTO returned by API for the candlestick chart of a pair.
    """

    last_price: float
    last_price_change: str
    series: List[OHLCPointOutDTO]
    skipped: SkippedOrdersOutDTO


class AccountOrdersOutDTO(BaseModel):
    orders: List[AccountOrderOutDTO]
    skipped: SkippedOrdersOutDTO


class NotReadyOutDTO(BaseModel):
    status: str = "not_ready"
