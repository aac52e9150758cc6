"""Configurações da aplicação via variáveis de ambiente.

Credenciais ausentes nunca impedem o arranque: os adaptadores de IA e SMS
passam a responder com textos de indisponibilidade.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_SESSION_STORE_BACKENDS = frozenset({"memory", "redis"})
VALID_LOG_FORMATS = frozenset({"json", "text"})


class Settings(BaseSettings):
    """Configurações lidas do ambiente (ou de um arquivo .env local)."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    # Aplicação
    service_name: str = "mapazzz_ussd"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"  # json | text
    host: str = "0.0.0.0"
    port: int = 3000

    # Serviço de análise de texto (API compatível com OpenAI)
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str | None = None  # Endpoint alternativo compatível
    openai_timeout_seconds: float = 10.0

    # Twilio (SMS)
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_phone_number: str | None = None  # Remetente dos SMS
    twilio_timeout_seconds: float = 10.0

    # Sessão USSD
    session_store_backend: str = "memory"  # memory | redis
    redis_url: str | None = None
    session_ttl_seconds: int = 300  # Diálogos USSD expiram em poucos minutos

    # API do mapaZZZ (zonas e reportagens); sem URL usa o catálogo simulado
    mapazzz_api_base_url: str | None = None
    mapazzz_api_timeout_seconds: float = 5.0

    @property
    def ai_configured(self) -> bool:
        """True se há chave para o serviço de análise de texto."""
        return bool(self.openai_api_key)

    @property
    def sms_configured(self) -> bool:
        """True se as três credenciais Twilio estão presentes."""
        return bool(
            self.twilio_account_sid and self.twilio_auth_token and self.twilio_phone_number
        )

    def validate_session_store_config(self) -> list[str]:
        """Valida backend de session store.

        Retorna lista de erros (vazia = tudo OK).
        """
        errors: list[str] = []
        backend = self.session_store_backend.lower()

        if backend not in VALID_SESSION_STORE_BACKENDS:
            errors.append(
                f"SESSION_STORE_BACKEND '{backend}' inválido. "
                f"Valores válidos: {sorted(VALID_SESSION_STORE_BACKENDS)}"
            )
        if backend == "redis" and not self.redis_url:
            errors.append("SESSION_STORE_BACKEND=redis requer REDIS_URL configurado")
        if self.session_ttl_seconds <= 0:
            errors.append("SESSION_TTL_SECONDS deve ser maior que zero")

        return errors

    def validate_timeouts(self) -> list[str]:
        """Valida timeouts das chamadas externas."""
        errors: list[str] = []
        if self.openai_timeout_seconds <= 0:
            errors.append("OPENAI_TIMEOUT_SECONDS deve ser maior que zero")
        if self.twilio_timeout_seconds <= 0:
            errors.append("TWILIO_TIMEOUT_SECONDS deve ser maior que zero")
        if self.mapazzz_api_timeout_seconds <= 0:
            errors.append("MAPAZZZ_API_TIMEOUT_SECONDS deve ser maior que zero")
        return errors

    def validate_logging_config(self) -> list[str]:
        """Valida formato de log."""
        if self.log_format.lower() not in VALID_LOG_FORMATS:
            return [f"LOG_FORMAT inválido: use {' | '.join(sorted(VALID_LOG_FORMATS))}"]
        return []

    def missing_integrations(self) -> list[str]:
        """Lista avisos de integrações desativadas por falta de credenciais."""
        warnings: list[str] = []
        if not self.ai_configured:
            warnings.append(
                "OPENAI_API_KEY não definida: análise de sintomas e soluções de zona "
                "não irão funcionar"
            )
        if not self.sms_configured:
            warnings.append(
                "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN ou TWILIO_PHONE_NUMBER em falta: "
                "envio de SMS desativado"
            )
        return warnings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings."""
    return Settings()
