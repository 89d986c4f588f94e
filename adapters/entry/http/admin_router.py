from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import ValidationError

from core.domain.entities.raw_order_entity import OrderEventKind
from core.usecases.ingest_order_events_use_case import IngestOrderEventsUseCase

from .deps import get_ingest_use_case
from .dtos.order_event_dtos import OrderEventInDTO, OrderEventOutDTO, RawOrderOutDTO
from .dtos.token_dtos import TokenOutDTO, TokenUpsertDTO

router = APIRouter(prefix="/admin", tags=["admin"])


@router.put("/tokens", response_model=TokenOutDTO)
async def upsert_token(
    dto: TokenUpsertDTO,
    uc: IngestOrderEventsUseCase = Depends(get_ingest_use_case),
) -> TokenOutDTO:
    """
    Create or update a token descriptor.

    Pairs are resolved from these descriptors; a market stays "not ready"
    until both of its tokens are registered.
    """
    stored = uc.upsert_token(dto.model_dump())
    return TokenOutDTO.model_validate(stored.model_dump())


@router.get("/tokens", response_model=List[TokenOutDTO])
async def list_tokens(uc: IngestOrderEventsUseCase = Depends(get_ingest_use_case)) -> List[TokenOutDTO]:
    """
    List registered token descriptors.
    """
    return [TokenOutDTO.model_validate(t.model_dump()) for t in uc.list_tokens()]


@router.post("/events/{kind}", response_model=OrderEventOutDTO)
async def record_order_event(
    dto: OrderEventInDTO,
    kind: OrderEventKind = Path(..., description="created | filled | cancelled"),
    uc: IngestOrderEventsUseCase = Depends(get_ingest_use_case),
) -> OrderEventOutDTO:
    """
    Append a ledger event to its log.

    Duplicate ids are ignored (recorded=false). Short Filled/Cancelled events
    referencing an unknown order are rejected with 404.
    """
    try:
        order = uc.record(kind, dto.model_dump(exclude_none=True))
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    if order is None:
        return OrderEventOutDTO(kind=kind.value, recorded=False)
    return OrderEventOutDTO(
        kind=kind.value,
        recorded=True,
        order=RawOrderOutDTO.model_validate(order.model_dump()),
    )
