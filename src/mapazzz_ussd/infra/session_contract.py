"""Contrato de persistência de sessão (SessionStore).

Separado para manter SRP e permitir reuso entre implementações.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from mapazzz_ussd.domain.protocols.session_store import SessionStoreProtocol

if TYPE_CHECKING:
    from mapazzz_ussd.domain.models import UssdSession

DEFAULT_SESSION_TTL_SECONDS = 300


class SessionStoreError(Exception):
    """Erro ao persistir ou recuperar sessão."""

    pass


class SessionStore(SessionStoreProtocol):
    """Contrato abstrato para armazenamento de UssdSession.

    Responsabilidades:
    - Persistir sessão com TTL
    - Recuperar sessão por session_id
    - Garantir isolamento entre sessões (chaves diferentes nunca interferem)
    - Última escrita vence para a mesma chave
    """

    @abstractmethod
    def save(self, session: UssdSession, ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS) -> None:
        """Persiste a sessão com TTL.

        Raises:
            SessionStoreError: Em caso de falha de persistência
        """
        ...

    @abstractmethod
    def load(self, session_id: str) -> UssdSession | None:
        """Carrega sessão por ID; None se ausente ou expirada."""
        ...

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Remove sessão; True se existia."""
        ...

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        """Verifica se sessão existe e não expirou."""
        ...
