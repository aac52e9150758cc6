from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from mapazzz_ussd.adapters.sms.twilio_gateway import SmsResult, SmsStatus
from mapazzz_ussd.ai.contracts import AnalysisResult, AnalysisStatus
from mapazzz_ussd.api.app import create_app
from mapazzz_ussd.application.dialog_engine import UssdDialogEngine
from mapazzz_ussd.config.settings import get_settings
from mapazzz_ussd.infra.map_data import StaticMapDataSource
from mapazzz_ussd.infra.session_store_memory import InMemorySessionStore

_INTEGRATION_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_PHONE_NUMBER",
    "SESSION_STORE_BACKEND",
    "REDIS_URL",
    "MAPAZZZ_API_BASE_URL",
    "LOG_FORMAT",
)

PHONE = "+244923000000"


class FakeAnalysisClient:
    """Serviço de análise com respostas fixas por operação."""

    def __init__(
        self,
        symptoms: AnalysisResult | None = None,
        zone_solution: AnalysisResult | None = None,
    ) -> None:
        self.symptoms = symptoms or AnalysisResult(
            status=AnalysisStatus.OK, message="30% (Sintomas vagos.)"
        )
        self.zone_solution = zone_solution or AnalysisResult(
            status=AnalysisStatus.OK, message="Reporte à administração local."
        )
        self.calls: list[tuple[str, str | None]] = []
        self.available = True

    async def analyze_symptoms(self, description):
        self.calls.append(("symptoms", description))
        return self.symptoms

    async def suggest_zone_solution(self, description):
        self.calls.append(("zone_solution", description))
        return self.zone_solution


class FakeSmsGateway:
    """Gateway SMS que apenas regista os envios."""

    def __init__(self, result: SmsResult | None = None) -> None:
        self.result = result
        self.sent: list[tuple[str | None, str | None]] = []
        self.available = True

    async def send_sms(self, to, body):
        self.sent.append((to, body))
        if self.result is not None:
            return self.result
        return SmsResult(SmsStatus.SENT, f"SMS enviado para {to}!", sid="SM123")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Isola os testes de credenciais reais do ambiente."""
    for name in _INTEGRATION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def fake_analysis() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture()
def fake_sms() -> FakeSmsGateway:
    return FakeSmsGateway()


@pytest.fixture()
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def engine(session_store, fake_analysis, fake_sms) -> UssdDialogEngine:
    return UssdDialogEngine(
        session_store=session_store,
        analysis_client=fake_analysis,
        sms_gateway=fake_sms,
        map_data=StaticMapDataSource(),
    )


@pytest.fixture()
def fake_client(session_store, fake_analysis, fake_sms):
    """App com adaptadores falsos injetados."""
    app = create_app(
        session_store=session_store,
        analysis_client=fake_analysis,
        sms_gateway=fake_sms,
        map_data=StaticMapDataSource(),
    )
    with TestClient(app) as test_client:
        yield test_client
