from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse

from core.usecases.market_views_use_case import MarketViewsUseCase

from .deps import get_market_views_use_case
from .dtos.market_view_dtos import (
    AccountOrdersOutDTO,
    NotReadyOutDTO,
    OrderBookOutDTO,
    PriceChartOutDTO,
    TradeTapeOutDTO,
)

router = APIRouter(prefix="/markets", tags=["markets"])

_NOT_READY = {202: {"model": NotReadyOutDTO, "description": "Pair tokens not loaded yet"}}


def _not_ready() -> JSONResponse:
    """
    A pair with an unknown token is "waiting for data", not an error.
    """
    return JSONResponse(status_code=202, content=NotReadyOutDTO().model_dump())


@router.get("/order-book", response_model=OrderBookOutDTO, responses=_NOT_READY)
async def get_order_book(
    base: Optional[str] = Query(None, description="Base token address"),
    quote: Optional[str] = Query(None, description="Quote token address"),
    uc: MarketViewsUseCase = Depends(get_market_views_use_case),
) -> Union[OrderBookOutDTO, JSONResponse]:
    """
    Open orders of the pair split into bids and asks, sorted by price.
    """
    book = uc.get_open_order_book(uc.resolve_pair(base, quote))
    if book is None:
        return _not_ready()
    return OrderBookOutDTO.model_validate(book.model_dump(mode="json"))


@router.get("/trades", response_model=TradeTapeOutDTO, responses=_NOT_READY)
async def get_trades(
    base: Optional[str] = Query(None, description="Base token address"),
    quote: Optional[str] = Query(None, description="Quote token address"),
    uc: MarketViewsUseCase = Depends(get_market_views_use_case),
) -> Union[TradeTapeOutDTO, JSONResponse]:
    """
    Trade tape of the pair, newest first, with up/down price direction.
    """
    tape = uc.get_trade_tape(uc.resolve_pair(base, quote))
    if tape is None:
        return _not_ready()
    return TradeTapeOutDTO.model_validate(tape.model_dump(mode="json"))


@router.get("/price-chart", response_model=PriceChartOutDTO, responses=_NOT_READY)
async def get_price_chart(
    base: Optional[str] = Query(None, description="Base token address"),
    quote: Optional[str] = Query(None, description="Quote token address"),
    uc: MarketViewsUseCase = Depends(get_market_views_use_case),
) -> Union[PriceChartOutDTO, JSONResponse]:
    """
    OHLC candles of the pair plus last price and its change sign.
    """
    chart = uc.get_price_chart(uc.resolve_pair(base, quote))
    if chart is None:
        return _not_ready()
    return PriceChartOutDTO.model_validate(chart.model_dump(mode="json"))


@router.get("/accounts/{account}/open-orders", response_model=AccountOrdersOutDTO, responses=_NOT_READY)
async def get_my_open_orders(
    account: str = Path(..., description="Account address"),
    base: Optional[str] = Query(None, description="Base token address"),
    quote: Optional[str] = Query(None, description="Quote token address"),
    uc: MarketViewsUseCase = Depends(get_market_views_use_case),
) -> Union[AccountOrdersOutDTO, JSONResponse]:
    """
    Open orders made by the account on the pair, newest first.
    """
    view = uc.get_my_open_orders(uc.resolve_pair(base, quote), account)
    if view is None:
        return _not_ready()
    return AccountOrdersOutDTO.model_validate(view.model_dump(mode="json"))


@router.get("/accounts/{account}/filled-orders", response_model=AccountOrdersOutDTO, responses=_NOT_READY)
async def get_my_filled_orders(
    account: str = Path(..., description="Account address"),
    base: Optional[str] = Query(None, description="Base token address"),
    quote: Optional[str] = Query(None, description="Quote token address"),
    uc: MarketViewsUseCase = Depends(get_market_views_use_case),
) -> Union[AccountOrdersOutDTO, JSONResponse]:
    """
    Filled orders where the account was maker or taker, from its perspective.
    """
    view = uc.get_my_filled_orders(uc.resolve_pair(base, quote), account)
    if view is None:
        return _not_ready()
    return AccountOrdersOutDTO.model_validate(view.model_dump(mode="json"))
