"""Factory de SessionStore por backend configurado."""

from __future__ import annotations

from typing import Any

from mapazzz_ussd.infra.session_contract import SessionStore
from mapazzz_ussd.infra.session_store_memory import InMemorySessionStore
from mapazzz_ussd.infra.session_store_redis import RedisSessionStore


def create_session_store(backend: str = "memory", client: Any = None) -> SessionStore:
    """Cria o store de sessão.

    Args:
        backend: "memory" ou "redis"
        client: cliente Redis já conectado (obrigatório para "redis")

    Raises:
        ValueError: backend desconhecido ou cliente em falta
    """
    backend = backend.lower()
    if backend == "memory":
        return InMemorySessionStore()
    if backend == "redis":
        if client is None:
            raise ValueError("backend redis requer um cliente Redis")
        return RedisSessionStore(client)
    raise ValueError(f"Backend de sessão desconhecido: {backend}")
