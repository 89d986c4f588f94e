from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from core.domain.entities.base_entity import ValueEntity


class OrderEventKind(str, Enum):
    """Ledger collection an order record was observed in."""

    CREATED = "created"
    FILLED = "filled"
    CANCELLED = "cancelled"


class RawOrderEntity(ValueEntity):
    """
    Order record as emitted by the exchange ledger.

    The same shape is used for the three event logs (Created, Filled, Cancelled);
    an order's lifecycle is reconstructed by correlating ids across them.

    Notes:
    - id is kept as a canonical string so wide integer ids never lose precision.
    - amounts are raw integers scaled by 10**decimals of their token.
    - taker is only known once the order is filled.
    - Ledger payloads name the maker "creator" on fills and "user" elsewhere,
      and the taker "user" on fills; both layouts are accepted.
    """

    id: str
    maker: str
    taker: Optional[str] = None

    token_get: str = Field(alias="tokenGet")
    amount_get: int = Field(alias="amountGet")
    token_give: str = Field(alias="tokenGive")
    amount_give: int = Field(alias="amountGive")

    timestamp: int

    @model_validator(mode="before")
    @classmethod
    def _map_ledger_identities(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "maker" in data:
            return data
        data = dict(data)
        if "creator" in data:
            data["maker"] = data.pop("creator")
            data.setdefault("taker", data.pop("user", None))
        elif "user" in data:
            data["maker"] = data.pop("user")
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _canonical_id(cls, v: Any) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("id is required")
        return v

    @field_validator("maker", "token_get", "token_give")
    @classmethod
    def _normalize_address(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if not v:
            raise ValueError("field is required")
        return v

    @field_validator("taker")
    @classmethod
    def _normalize_taker(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    @field_validator("amount_get", "amount_give", "timestamp", mode="before")
    @classmethod
    def _non_negative_int(cls, v: Any) -> int:
        # ledger integers may arrive as decimal strings
        v = int(str(v).strip())
        if v < 0:
            raise ValueError("must be >= 0")
        return v
