"""Testes da fábrica da aplicação."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from mapazzz_ussd.api import app as app_module
from mapazzz_ussd.api.app import create_app
from mapazzz_ussd.config.settings import Settings
from mapazzz_ussd.infra.map_data import HttpMapDataSource, StaticMapDataSource
from mapazzz_ussd.infra.session_store_memory import InMemorySessionStore
from mapazzz_ussd.infra.session_store_redis import RedisSessionStore


def test_defaults_wire_memory_store_and_static_map() -> None:
    app = create_app(Settings(_env_file=None))

    assert isinstance(app.state.session_store, InMemorySessionStore)
    assert isinstance(app.state.map_data, StaticMapDataSource)
    assert app.state.dialog_engine.session_store is app.state.session_store
    assert app.state.analysis_client.available is False
    assert app.state.sms_gateway.available is False


def test_invalid_configuration_fails_fast() -> None:
    with pytest.raises(ValueError, match="REDIS_URL"):
        create_app(Settings(_env_file=None, session_store_backend="redis"))


def test_redis_backend_uses_client_from_url(monkeypatch: pytest.MonkeyPatch) -> None:
    from_url = MagicMock(return_value=MagicMock())
    monkeypatch.setattr(app_module.redis, "from_url", from_url)

    app = create_app(
        Settings(
            _env_file=None,
            session_store_backend="redis",
            redis_url="redis://localhost:6379/0",
        )
    )

    from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
    assert isinstance(app.state.session_store, RedisSessionStore)


def test_map_api_url_enables_http_source() -> None:
    app = create_app(Settings(_env_file=None, mapazzz_api_base_url="https://api.mapazzz.test"))

    assert isinstance(app.state.map_data, HttpMapDataSource)


def test_missing_credentials_are_logged(caplog, monkeypatch: pytest.MonkeyPatch) -> None:
    # configure_logging substitui os handlers do logger raiz (incluindo o do caplog)
    monkeypatch.setattr(app_module, "configure_logging", MagicMock())

    with caplog.at_level("WARNING"):
        create_app(Settings(_env_file=None))

    messages = [record.getMessage() for record in caplog.records]
    assert any("OPENAI_API_KEY" in message for message in messages)
    assert any("TWILIO" in message for message in messages)


def test_injected_empty_store_is_used() -> None:
    store = InMemorySessionStore()

    app = create_app(Settings(_env_file=None), session_store=store)

    assert len(store) == 0
    assert app.state.session_store is store
    assert app.state.dialog_engine.session_store is store


def test_injected_collaborators_are_kept() -> None:
    analysis = MagicMock()
    sms = MagicMock()
    map_data = StaticMapDataSource(zones=[], reports=[])

    app = create_app(
        Settings(_env_file=None), analysis_client=analysis, sms_gateway=sms, map_data=map_data
    )

    assert app.state.analysis_client is analysis
    assert app.state.sms_gateway is sms
    assert app.state.map_data is map_data
