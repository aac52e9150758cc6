"""Envio de SMS via Twilio.

O texto devolvido é concatenado diretamente na resposta USSD final, por isso
send_sms nunca lança exceção: todo desfecho vira um SmsResult com mensagem
em português pronta para exibição.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import anyio
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from mapazzz_ussd.observability.logging import get_logger, log_fallback
from mapazzz_ussd.observability.timing import timed

logger: logging.Logger = get_logger(__name__)

# "+" opcional, 2 a 15 dígitos, primeiro dígito 1-9
E164_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")

SMS_UNAVAILABLE_MESSAGE = "Serviço SMS indisponível. Verifique as credenciais Twilio."
SMS_MISSING_FIELDS_MESSAGE = "Número do destinatário ou mensagem em falta."

# Códigos de erro Twilio com mensagem dedicada
TWILIO_INVALID_TO_NUMBER = 21211
TWILIO_REGION_NOT_PERMITTED = 21408
TWILIO_RECIPIENT_BLOCKED = frozenset({21610, 21612, 21614})


class SmsStatus(StrEnum):
    """Desfecho do envio."""

    SENT = "SENT"
    UNAVAILABLE = "UNAVAILABLE"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_NUMBER = "INVALID_NUMBER"
    RECIPIENT_BLOCKED = "RECIPIENT_BLOCKED"
    REGION_NOT_PERMITTED = "REGION_NOT_PERMITTED"
    FAILED = "FAILED"
    TIMEOUT = "TIMEOUT"


@dataclass(frozen=True, slots=True)
class SmsResult:
    """Resultado etiquetado; `message` é o texto exibido ao usuário."""

    status: SmsStatus
    message: str
    sid: str | None = None

    @property
    def delivered(self) -> bool:
        return self.status == SmsStatus.SENT


def is_valid_phone_number(to: str | None) -> bool:
    """Valida o destino contra o padrão E.164 simplificado."""
    return bool(to) and E164_PATTERN.fullmatch(to) is not None


def mask_phone(to: str | None) -> str:
    """Mantém só os últimos dígitos do número para logs."""
    if not to:
        return "-"
    return "***" + to[-3:]


def map_twilio_error(to: str, error: TwilioRestException) -> SmsResult:
    """Converte códigos de erro Twilio em mensagens para o usuário."""
    code = error.code
    if code == TWILIO_INVALID_TO_NUMBER:
        return SmsResult(
            SmsStatus.INVALID_NUMBER,
            f"Falha ao enviar SMS: Número de destino ({to}) inválido.",
        )
    if code in TWILIO_RECIPIENT_BLOCKED:
        return SmsResult(
            SmsStatus.RECIPIENT_BLOCKED,
            f"Falha ao enviar SMS: O número {to} não pode receber mensagens deste remetente.",
        )
    if code == TWILIO_REGION_NOT_PERMITTED:
        return SmsResult(
            SmsStatus.REGION_NOT_PERMITTED,
            f"Falha ao enviar SMS: Não há permissão para enviar SMS para a região do número {to}.",
        )
    return _generic_failure(to, error.msg)


def _generic_failure(to: str, detail: str | None) -> SmsResult:
    return SmsResult(
        SmsStatus.FAILED,
        f"Falha ao enviar SMS para {to}. ({detail or 'Erro desconhecido'})",
    )


class TwilioSmsGateway:
    """Adaptador de envio de SMS.

    Sem as três credenciais (ou se o cliente falhar a inicializar) fica
    indisponível e responde com SMS_UNAVAILABLE_MESSAGE.
    """

    def __init__(
        self,
        account_sid: str | None = None,
        auth_token: str | None = None,
        from_number: str | None = None,
        timeout_seconds: float = 10.0,
        client: Any = None,
    ) -> None:
        self._from_number = from_number
        self._timeout = timeout_seconds
        if client is not None:
            self._client = client
        else:
            self._client = self._create_client(account_sid, auth_token, from_number)

    def _create_client(
        self, account_sid: str | None, auth_token: str | None, from_number: str | None
    ) -> Client | None:
        if not (account_sid and auth_token and from_number):
            logger.warning("Twilio credentials missing; SMS delivery disabled")
            return None
        try:
            client = Client(
                account_sid,
                auth_token,
                http_client=TwilioHttpClient(timeout=self._timeout),
            )
        except TwilioException as e:
            logger.error(
                "Failed to initialize Twilio client",
                extra={"error_type": type(e).__name__},
            )
            return None
        logger.info("Twilio client initialized")
        return client

    @property
    def available(self) -> bool:
        return self._client is not None

    async def send_sms(self, to: str | None, body: str | None) -> SmsResult:
        """Envia `body` para `to`; nunca lança exceção."""
        if self._client is None:
            log_fallback(logger, "sms_gateway", reason="unavailable")
            return SmsResult(SmsStatus.UNAVAILABLE, SMS_UNAVAILABLE_MESSAGE)

        if not to or not body:
            return SmsResult(SmsStatus.INVALID_INPUT, SMS_MISSING_FIELDS_MESSAGE)

        if not is_valid_phone_number(to):
            return SmsResult(
                SmsStatus.INVALID_INPUT,
                f"Número de destino ({to}) inválido. "
                "Use formato internacional (ex: +244XXXXXXXXX).",
            )

        try:
            with timed("sms_gateway"), anyio.fail_after(self._timeout):
                message = await anyio.to_thread.run_sync(
                    self._create_message, to, body, abandon_on_cancel=True
                )
        except TwilioRestException as e:
            logger.warning(
                "sms_send_failed",
                extra={"to": mask_phone(to), "code": e.code, "status": e.status},
            )
            return map_twilio_error(to, e)
        except TimeoutError:
            # A thread do SDK é abandonada, não cancelada: o SMS ainda pode sair
            logger.warning("sms_send_timeout", extra={"to": mask_phone(to)})
            return SmsResult(
                SmsStatus.TIMEOUT,
                f"Envio de SMS para {to} sem confirmação (tempo esgotado); "
                "a mensagem pode ainda chegar.",
            )
        except Exception as e:
            logger.error(
                "sms_send_error",
                extra={"to": mask_phone(to), "error": str(e), "error_type": type(e).__name__},
            )
            return _generic_failure(to, str(e))

        sid = getattr(message, "sid", None)
        logger.info("sms_sent", extra={"to": mask_phone(to), "sid": sid})
        return SmsResult(SmsStatus.SENT, f"SMS enviado para {to}!", sid=sid)

    def _create_message(self, to: str, body: str) -> Any:
        return self._client.messages.create(body=body, from_=self._from_number, to=to)
