"""Re-exports dos Protocolos de domínio para uso por Application."""

from __future__ import annotations

from mapazzz_ussd.domain.protocols.session_store import SessionStoreProtocol

__all__ = [
    "SessionStoreProtocol",
]
