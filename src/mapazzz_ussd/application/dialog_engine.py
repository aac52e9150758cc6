"""Engine do diálogo USSD.

Um passo por request:
1. Carrega (ou cria) a sessão do session_id
2. Extrai o último token digitado
3. Resolve a transição na tabela (domain.transitions)
4. Executa a ação (adaptadores de análise e SMS quando necessário)
5. Guarda a sessão (CON) ou remove-a (END)

O store é síncrono (dict com lock ou cliente Redis); as chamadas correm numa
worker thread para não bloquear o event loop.

O engine não lança exceção por entrada inválida nem por falha de
adaptador: tudo vira uma resposta USSD. Uma exceção inesperada numa ação
encerra o diálogo (END com menus.SERVICE_FAILURE) e remove a sessão.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import partial

import anyio

from mapazzz_ussd.adapters.sms.twilio_gateway import TwilioSmsGateway
from mapazzz_ussd.ai.analysis_client import TextAnalysisClient
from mapazzz_ussd.application.outbound_plans import (
    OutboundPlan,
    plan_health_tip,
    plan_reports,
    plan_symptom_analysis,
    plan_zone_solution,
    plan_zones,
)
from mapazzz_ussd.domain import menus
from mapazzz_ussd.domain.flows import UssdFlow, parse_flow
from mapazzz_ussd.domain.models import UssdReply, UssdRequest, UssdSession
from mapazzz_ussd.domain.transitions import (
    MAIN_MENU,
    DialogAction,
    Transition,
    extract_last_input,
    resolve_transition,
)
from mapazzz_ussd.infra.map_data import MapDataSource
from mapazzz_ussd.infra.session_contract import (
    DEFAULT_SESSION_TTL_SECONDS,
    SessionStore,
    SessionStoreError,
)
from mapazzz_ussd.observability.logging import get_logger, mask_session_id

logger: logging.Logger = get_logger(__name__)

ActionHandler = Callable[[Transition, str, UssdRequest], Awaitable[str]]


class UssdDialogEngine:
    """Máquina de estados dos menus USSD sobre um SessionStore injetado."""

    def __init__(
        self,
        session_store: SessionStore,
        analysis_client: TextAnalysisClient,
        sms_gateway: TwilioSmsGateway,
        map_data: MapDataSource,
        session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
    ) -> None:
        self._store = session_store
        self._analysis = analysis_client
        self._sms = sms_gateway
        self._map_data = map_data
        self._ttl = session_ttl_seconds
        self._handlers: dict[DialogAction, ActionHandler] = {
            DialogAction.SHOW_MAIN_MENU: self._show_main_menu,
            DialogAction.PROMPT: self._fixed_text,
            DialogAction.CLOSE: self._fixed_text,
            DialogAction.LIST_ZONES: self._list_zones,
            DialogAction.LIST_REPORTS: self._list_reports,
            DialogAction.ANALYZE_SYMPTOMS: self._analyze_symptoms,
            DialogAction.SUGGEST_ZONE_SOLUTION: self._suggest_zone_solution,
            DialogAction.SEND_HEALTH_TIP: self._send_health_tip,
        }

    @property
    def session_store(self) -> SessionStore:
        return self._store

    async def handle(self, request: UssdRequest) -> UssdReply:
        """Processa um passo do diálogo e devolve a resposta CON/END."""
        session = await self._load_or_create(request.session_id)
        token = extract_last_input(request.text)
        flow = parse_flow(session.flow)

        logger.info(
            "ussd_step",
            extra={
                "session_id": mask_session_id(session.session_id),
                "flow": session.flow,
                "input_length": len(token),
            },
        )

        if flow is None:
            logger.warning(
                "Unexpected session flow, resetting to menu",
                extra={"session_id": mask_session_id(session.session_id), "flow": session.flow},
            )
            transition = MAIN_MENU
        else:
            transition = resolve_transition(flow, token)

        if flow == UssdFlow.MENU:
            session.data = {}

        handler = self._handlers[transition.action]
        try:
            message = await handler(transition, token, request)
        except Exception:
            logger.exception(
                "ussd_action_failed",
                extra={
                    "session_id": mask_session_id(session.session_id),
                    "action": transition.action.value,
                },
            )
            await anyio.to_thread.run_sync(self._store.delete, session.session_id)
            return UssdReply.end(menus.SERVICE_FAILURE)

        await self._commit(session, transition)
        if transition.is_terminal:
            return UssdReply.end(message)
        return UssdReply.con(message)

    async def _load_or_create(self, session_id: str) -> UssdSession:
        session = await anyio.to_thread.run_sync(self._store.load, session_id)
        if session is None or not session.flow:
            session = UssdSession(session_id=session_id)
            logger.debug("Session created", extra={"session_id": mask_session_id(session_id)})
        return session

    async def _commit(self, session: UssdSession, transition: Transition) -> None:
        if transition.is_terminal:
            await anyio.to_thread.run_sync(self._store.delete, session.session_id)
            logger.info(
                "ussd_dialog_closed",
                extra={
                    "session_id": mask_session_id(session.session_id),
                    "action": transition.action.value,
                },
            )
            return

        if transition.action == DialogAction.SHOW_MAIN_MENU:
            session.reset_to_menu()
        else:
            session.move_to(transition.next_flow)

        try:
            await anyio.to_thread.run_sync(
                partial(self._store.save, session, ttl_seconds=self._ttl)
            )
        except SessionStoreError:
            # A resposta já foi decidida; o próximo passo recomeça no menu.
            logger.error(
                "Failed to persist USSD session",
                extra={"session_id": mask_session_id(session.session_id), "flow": session.flow},
            )

    async def _deliver(self, plan: OutboundPlan, phone_number: str | None) -> str:
        sms = await self._sms.send_sms(phone_number, plan.sms_body)
        return plan.compose(sms.message)

    # === handlers de ação ===

    async def _show_main_menu(self, transition: Transition, token: str, request: UssdRequest) -> str:
        return menus.MAIN_MENU

    async def _fixed_text(self, transition: Transition, token: str, request: UssdRequest) -> str:
        return transition.argument or ""

    async def _list_zones(self, transition: Transition, token: str, request: UssdRequest) -> str:
        zones = await self._map_data.list_zones()
        plan = plan_zones(zones, transition.argument)
        return await self._deliver(plan, request.phone_number)

    async def _list_reports(self, transition: Transition, token: str, request: UssdRequest) -> str:
        reports = await self._map_data.list_reports()
        plan = plan_reports(reports, transition.argument)
        return await self._deliver(plan, request.phone_number)

    async def _analyze_symptoms(
        self, transition: Transition, token: str, request: UssdRequest
    ) -> str:
        result = await self._analysis.analyze_symptoms(token)
        if result.is_failure:
            return result.message
        return await self._deliver(plan_symptom_analysis(result.message), request.phone_number)

    async def _suggest_zone_solution(
        self, transition: Transition, token: str, request: UssdRequest
    ) -> str:
        result = await self._analysis.suggest_zone_solution(token)
        if result.is_failure:
            return result.message
        return await self._deliver(plan_zone_solution(result.message), request.phone_number)

    async def _send_health_tip(
        self, transition: Transition, token: str, request: UssdRequest
    ) -> str:
        plan = plan_health_tip(transition.argument or "")
        return await self._deliver(plan, request.phone_number)
