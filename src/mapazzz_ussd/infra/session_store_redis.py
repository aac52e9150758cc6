"""Implementação de SessionStore usando Redis (várias instâncias)."""

from __future__ import annotations

import logging
from typing import Any

from mapazzz_ussd.domain.models import UssdSession
from mapazzz_ussd.infra.session_contract import (
    DEFAULT_SESSION_TTL_SECONDS,
    SessionStore,
    SessionStoreError,
)
from mapazzz_ussd.observability.logging import get_logger, mask_session_id

logger: logging.Logger = get_logger(__name__)

KEY_PREFIX = "ussd_session:"


class RedisSessionStore(SessionStore):
    """Armazenamento em Redis; cada sessão é uma chave JSON com TTL."""

    def __init__(self, redis_client: Any, key_prefix: str = KEY_PREFIX) -> None:
        self._redis = redis_client
        self._prefix = key_prefix

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    def save(self, session: UssdSession, ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS) -> None:
        payload = session.model_dump_json()

        try:
            self._redis.setex(self._key(session.session_id), ttl_seconds, payload)
            logger.debug(
                "Session saved (Redis)",
                extra={
                    "session_id": mask_session_id(session.session_id),
                    "ttl_seconds": ttl_seconds,
                },
            )
        except Exception as e:
            logger.error(
                "Failed to save session to Redis",
                extra={"session_id": mask_session_id(session.session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Redis save failed: {e}") from e

    def load(self, session_id: str) -> UssdSession | None:
        try:
            payload = self._redis.get(self._key(session_id))
            if not payload:
                logger.debug(
                    "Session not found (Redis)", extra={"session_id": mask_session_id(session_id)}
                )
                return None

            if isinstance(payload, bytes):
                payload = payload.decode("utf-8")

            session = UssdSession.model_validate_json(payload)
            logger.debug("Session loaded (Redis)", extra={"session_id": mask_session_id(session_id)})
            return session
        except Exception as e:
            logger.error(
                "Failed to load session from Redis",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            return None

    def delete(self, session_id: str) -> bool:
        try:
            deleted = self._redis.delete(self._key(session_id))
            if deleted:
                logger.debug(
                    "Session deleted (Redis)", extra={"session_id": mask_session_id(session_id)}
                )
            return bool(deleted)
        except Exception as e:
            logger.error(
                "Failed to delete session from Redis",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            return False

    def exists(self, session_id: str) -> bool:
        try:
            return bool(self._redis.exists(self._key(session_id)))
        except Exception as e:
            logger.error(
                "Failed to check session existence in Redis",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            return False
