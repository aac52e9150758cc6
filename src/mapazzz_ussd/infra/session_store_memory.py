"""Implementação de SessionStore em memória (processo único)."""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from mapazzz_ussd.infra.session_contract import DEFAULT_SESSION_TTL_SECONDS, SessionStore
from mapazzz_ussd.observability.logging import get_logger, mask_session_id

if TYPE_CHECKING:
    from mapazzz_ussd.domain.models import UssdSession

logger: logging.Logger = get_logger(__name__)

SWEEP_INTERVAL_SECONDS = 30.0


class InMemorySessionStore(SessionStore):
    """Armazenamento em memória, seguro entre threads.

    Não sobrevive a restarts nem é partilhado entre instâncias. Diálogos
    abandonados nunca voltam a ser lidos, por isso `save` varre as entradas
    expiradas (no máximo uma vez por `sweep_interval_seconds`).
    """

    def __init__(self, sweep_interval_seconds: float = SWEEP_INTERVAL_SECONDS) -> None:
        self._sessions: dict[str, tuple[UssdSession, float]] = {}
        self._lock = threading.Lock()
        self._sweep_interval = sweep_interval_seconds
        self._last_sweep = 0.0

    def save(self, session: UssdSession, ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS) -> None:
        now = datetime.now(tz=UTC).timestamp()
        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._evict_expired(now)
            self._sessions[session.session_id] = (session, now + ttl_seconds)
        logger.debug(
            "Session saved (in-memory)",
            extra={"session_id": mask_session_id(session.session_id), "ttl_seconds": ttl_seconds},
        )

    def _evict_expired(self, now: float) -> None:
        # Chamado com o lock adquirido
        expired = [key for key, (_, expire_at) in self._sessions.items() if now > expire_at]
        for key in expired:
            del self._sessions[key]
        self._last_sweep = now
        if expired:
            logger.debug("Expired sessions evicted (in-memory)", extra={"evicted": len(expired)})

    def load(self, session_id: str) -> UssdSession | None:
        now = datetime.now(tz=UTC).timestamp()
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                logger.debug(
                    "Session not found (in-memory)",
                    extra={"session_id": mask_session_id(session_id)},
                )
                return None

            session, expire_at = entry
            if now > expire_at:
                del self._sessions[session_id]
                logger.debug(
                    "Session expired (in-memory)",
                    extra={"session_id": mask_session_id(session_id)},
                )
                return None

        logger.debug("Session loaded (in-memory)", extra={"session_id": mask_session_id(session_id)})
        return session

    def delete(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.debug(
                "Session deleted (in-memory)",
                extra={"session_id": mask_session_id(session_id)},
            )
            return True
        return False

    def exists(self, session_id: str) -> bool:
        return self.load(session_id) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
