from __future__ import annotations

from typing import FrozenSet, Optional

from pydantic import field_validator

from core.domain.entities.base_entity import ValueEntity


class TokenEntity(ValueEntity):
    """
    Token descriptor for one leg of a trading pair.

    Addresses are stored lower-cased so that comparisons against ledger
    records do not depend on checksum casing.
    """

    address: str
    symbol: str
    decimals: int = 18

    @field_validator("address")
    @classmethod
    def _normalize_address(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if not v:
            raise ValueError("address is required")
        return v

    @field_validator("decimals")
    @classmethod
    def _check_decimals(cls, v: int) -> int:
        if int(v) < 0:
            raise ValueError("decimals must be >= 0")
        return int(v)


class PairEntity(ValueEntity):
    """
    Selected trading pair (base, quote).

    Ordering matters: an order giving the quote token is a Buy of the base token.
    Either leg may be missing while token metadata is still loading; such a pair
    is "not ready" and every view derived from it returns None.
    """

    base: Optional[TokenEntity] = None
    quote: Optional[TokenEntity] = None

    @property
    def is_ready(self) -> bool:
        return self.base is not None and self.quote is not None

    @property
    def addresses(self) -> FrozenSet[str]:
        return frozenset(t.address for t in (self.base, self.quote) if t is not None)

    @property
    def key(self) -> str:
        """
        Cache identity for the pair: "{base_address}:{decimals}/{quote_address}:{decimals}".
        """
        base = f"{self.base.address}:{self.base.decimals}" if self.base else ""
        quote = f"{self.quote.address}:{self.quote.decimals}" if self.quote else ""
        return f"{base}/{quote}"

    @property
    def symbol(self) -> str:
        base = self.base.symbol if self.base else "?"
        quote = self.quote.symbol if self.quote else "?"
        return f"{base}/{quote}"
