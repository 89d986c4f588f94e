from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderEventInDTO(BaseModel):
    """
    DTO for recording a ledger order event.

    Created events must carry the full order. Filled/Cancelled events may be full
    records or only reference the id (fills add taker and timestamp).
    Ledger camelCase keys (tokenGet, amountGive, ...) are accepted, and so are the
    ledger identity keys "user" / "creator", which are passed through untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    maker: Optional[str] = Field(default=None, description="Order creator (ledger 'user' / 'creator')")
    taker: Optional[str] = Field(default=None, description="Filler of the order, fills only")

    token_get: Optional[str] = Field(default=None, alias="tokenGet")
    amount_get: Optional[str] = Field(default=None, alias="amountGet", description="Raw integer amount")
    token_give: Optional[str] = Field(default=None, alias="tokenGive")
    amount_give: Optional[str] = Field(default=None, alias="amountGive", description="Raw integer amount")

    timestamp: Optional[int] = None

    @field_validator("id", "amount_get", "amount_give", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> Any:
        if v is None:
            return None
        v = str(v).strip()
        if not v:
            raise ValueError("field must not be empty")
        return v


class RawOrderOutDTO(BaseModel):
    id: str
    maker: str
    taker: Optional[str] = None
    token_get: str
    amount_get: str
    token_give: str
    amount_give: str
    timestamp: int

    @field_validator("amount_get", "amount_give", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> str:
        return str(v)


class OrderEventOutDTO(BaseModel):
    """
    Result of recording an event; recorded is False for duplicate ids.
    """

    kind: str
    recorded: bool
    order: Optional[RawOrderOutDTO] = None
