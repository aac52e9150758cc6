"""Protocolo de domínio para persistência de sessão USSD."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mapazzz_ussd.domain.models import UssdSession


class SessionStoreProtocol(ABC):
    """Contrato mínimo síncrono para armazenamento de UssdSession."""

    @abstractmethod
    def save(self, session: UssdSession, ttl_seconds: int = 300) -> None: ...

    @abstractmethod
    def load(self, session_id: str) -> UssdSession | None: ...

    @abstractmethod
    def delete(self, session_id: str) -> bool: ...

    @abstractmethod
    def exists(self, session_id: str) -> bool: ...
