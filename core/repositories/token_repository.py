from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.entities.token_entity import TokenEntity


class TokenRepository(ABC):
    """Registry of token descriptors known to the service."""

    @abstractmethod
    def upsert(self, token: TokenEntity) -> None: ...

    @abstractmethod
    def get_by_address(self, address: str) -> Optional[TokenEntity]: ...

    @abstractmethod
    def list_all(self) -> List[TokenEntity]: ...
