from __future__ import annotations

from fastapi import HTTPException, Request

from core.usecases.ingest_order_events_use_case import IngestOrderEventsUseCase
from core.usecases.market_views_use_case import MarketViewsUseCase


def get_market_views_use_case(request: Request) -> MarketViewsUseCase:
    """
    Return the MarketViewsUseCase wired by the supervisor at startup.
    """
    uc = getattr(request.app.state, "market_views", None)
    if uc is None:
        raise HTTPException(status_code=503, detail="market views not initialized")
    return uc


def get_ingest_use_case(request: Request) -> IngestOrderEventsUseCase:
    """
    Return the IngestOrderEventsUseCase wired by the supervisor at startup.
    """
    uc = getattr(request.app.state, "ingest", None)
    if uc is None:
        raise HTTPException(status_code=503, detail="ingestion not initialized")
    return uc
