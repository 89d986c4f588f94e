# core/domain/entities/base_entity.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ValueEntity(BaseModel):
    """
    Base entity for immutable market values.

    - Instances are frozen: derived views are rebuilt, never mutated.
    - Fields can be populated by name or by their ledger (camelCase) alias.
    - Unknown fields are ignored so ledger payloads can carry extra attributes.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        use_enum_values=False,
    )
