"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

import redis
from fastapi import FastAPI

from mapazzz_ussd.adapters.sms.twilio_gateway import TwilioSmsGateway
from mapazzz_ussd.ai.analysis_client import TextAnalysisClient
from mapazzz_ussd.api.routes import router
from mapazzz_ussd.application.dialog_engine import UssdDialogEngine
from mapazzz_ussd.config.settings import Settings, get_settings
from mapazzz_ussd.infra.map_data import MapDataSource, create_map_data_source
from mapazzz_ussd.infra.session_contract import SessionStore
from mapazzz_ussd.infra.session_store import create_session_store
from mapazzz_ussd.observability.logging import configure_logging, get_logger
from mapazzz_ussd.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


def _create_session_store(settings: Settings) -> SessionStore:
    """Cria o store de sessão conforme SESSION_STORE_BACKEND."""
    backend = settings.session_store_backend.lower()
    if backend == "redis":
        client = redis.from_url(settings.redis_url, decode_responses=True)
        return create_session_store("redis", client=client)
    return create_session_store("memory")


def _log_startup_warnings(settings: Settings) -> None:
    """Avisa quais integrações ficam desativadas por falta de credenciais."""
    for warning in settings.missing_integrations():
        logger.warning(warning, extra={"environment": settings.environment})


def create_app(
    settings: Settings | None = None,
    *,
    session_store: SessionStore | None = None,
    analysis_client: TextAnalysisClient | None = None,
    sms_gateway: TwilioSmsGateway | None = None,
    map_data: MapDataSource | None = None,
) -> FastAPI:
    """Cria a aplicação FastAPI.

    Os colaboradores podem ser injetados (testes); por omissão são
    construídos a partir de Settings.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name, settings.log_format)

    validation_errors: list[str] = []
    validation_errors.extend(settings.validate_session_store_config())
    validation_errors.extend(settings.validate_timeouts())
    validation_errors.extend(settings.validate_logging_config())

    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    _log_startup_warnings(settings)

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.add_middleware(CorrelationIdMiddleware)
    app.include_router(router)

    app.state.settings = settings
    if session_store is None:
        session_store = _create_session_store(settings)
    if analysis_client is None:
        analysis_client = TextAnalysisClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout_seconds=settings.openai_timeout_seconds,
        )
    if sms_gateway is None:
        sms_gateway = TwilioSmsGateway(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_phone_number,
            timeout_seconds=settings.twilio_timeout_seconds,
        )
    if map_data is None:
        map_data = create_map_data_source(
            settings.mapazzz_api_base_url, settings.mapazzz_api_timeout_seconds
        )

    app.state.session_store = session_store
    app.state.analysis_client = analysis_client
    app.state.sms_gateway = sms_gateway
    app.state.map_data = map_data
    app.state.dialog_engine = UssdDialogEngine(
        session_store=app.state.session_store,
        analysis_client=app.state.analysis_client,
        sms_gateway=app.state.sms_gateway,
        map_data=app.state.map_data,
        session_ttl_seconds=settings.session_ttl_seconds,
    )

    logger.info(
        "USSD app created",
        extra={
            "environment": settings.environment,
            "session_store_backend": settings.session_store_backend.lower(),
        },
    )
    return app


app = create_app()
