from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class TokenUpsertDTO(BaseModel):
    """
    DTO for registering a token descriptor used to resolve pairs.
    """

    address: str = Field(..., description="Token contract address")
    symbol: str = Field(..., description='e.g. "DAPP" or "mETH"')
    decimals: int = Field(default=18, ge=0, le=77)

    @field_validator("address", "symbol")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class TokenOutDTO(BaseModel):
    address: str
    symbol: str
    decimals: int
