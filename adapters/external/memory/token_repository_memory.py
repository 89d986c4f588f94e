from __future__ import annotations

from typing import Dict, List, Optional

from core.domain.entities.token_entity import TokenEntity
from core.repositories.token_repository import TokenRepository


class TokenRepositoryMemory(TokenRepository):
    """In-memory token registry keyed by lower-cased address."""

    def __init__(self) -> None:
        self._tokens: Dict[str, TokenEntity] = {}

    def upsert(self, token: TokenEntity) -> None:
        self._tokens[token.address] = token

    def get_by_address(self, address: str) -> Optional[TokenEntity]:
        if not address:
            return None
        return self._tokens.get(address.strip().lower())

    def list_all(self) -> List[TokenEntity]:
        return list(self._tokens.values())
