"""Camada de infraestrutura: persistência de sessão e dados do mapa.

- Session: InMemorySessionStore, RedisSessionStore, create_session_store
- Map data: StaticMapDataSource, HttpMapDataSource, create_map_data_source

Infraestrutura não decide regra de negócio.
"""

from mapazzz_ussd.infra.map_data import (
    HttpMapDataSource,
    MapDataSource,
    StaticMapDataSource,
    create_map_data_source,
)
from mapazzz_ussd.infra.session_contract import SessionStore, SessionStoreError
from mapazzz_ussd.infra.session_store import create_session_store
from mapazzz_ussd.infra.session_store_memory import InMemorySessionStore
from mapazzz_ussd.infra.session_store_redis import RedisSessionStore

__all__ = [
    "HttpMapDataSource",
    "MapDataSource",
    "StaticMapDataSource",
    "create_map_data_source",
    "SessionStore",
    "SessionStoreError",
    "create_session_store",
    "InMemorySessionStore",
    "RedisSessionStore",
]
