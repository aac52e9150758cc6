"""Testes do gateway SMS Twilio com cliente falso."""

from __future__ import annotations

import time
from unittest.mock import MagicMock

import pytest
from twilio.base.exceptions import TwilioRestException

from mapazzz_ussd.adapters.sms.twilio_gateway import (
    SMS_MISSING_FIELDS_MESSAGE,
    SMS_UNAVAILABLE_MESSAGE,
    SmsStatus,
    TwilioSmsGateway,
    is_valid_phone_number,
    mask_phone,
)

FROM_NUMBER = "+15005550006"
TO = "+244923000000"


def _gateway(client: MagicMock | None = None, timeout_seconds: float = 5.0) -> TwilioSmsGateway:
    if client is None:
        client = MagicMock()
        client.messages.create.return_value = MagicMock(sid="SM0001")
    return TwilioSmsGateway(from_number=FROM_NUMBER, timeout_seconds=timeout_seconds, client=client)


def _rest_error(code: int | None, msg: str = "erro remoto") -> TwilioRestException:
    return TwilioRestException(400, "https://api.twilio.com/Messages.json", msg=msg, code=code)


class TestPhoneValidation:
    @pytest.mark.parametrize("to", ["abc", "", "0123", "+", "+1", "+0244923", "+1234567890123456"])
    def test_rejects_non_e164(self, to) -> None:
        assert is_valid_phone_number(to) is False

    @pytest.mark.parametrize("to", ["+244923000000", "244923000000", "+15005550006", "12345"])
    def test_accepts_e164_like(self, to) -> None:
        assert is_valid_phone_number(to) is True

    def test_none_is_invalid(self) -> None:
        assert is_valid_phone_number(None) is False

    def test_mask_phone(self) -> None:
        assert mask_phone(TO) == "***000"
        assert mask_phone(None) == "-"


class TestSendSms:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        client = MagicMock()
        client.messages.create.return_value = MagicMock(sid="SM0001")
        gateway = _gateway(client)

        result = await gateway.send_sms(TO, "olá")

        assert result.status == SmsStatus.SENT
        assert result.delivered
        assert result.message == "SMS enviado para +244923000000!"
        assert result.sid == "SM0001"
        client.messages.create.assert_called_once_with(body="olá", from_=FROM_NUMBER, to=TO)

    @pytest.mark.asyncio
    async def test_unavailable_without_credentials(self) -> None:
        gateway = TwilioSmsGateway()

        result = await gateway.send_sms(TO, "olá")

        assert gateway.available is False
        assert result.status == SmsStatus.UNAVAILABLE
        assert result.message == SMS_UNAVAILABLE_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("to", "body"), [(None, "olá"), ("", "olá"), (TO, ""), (TO, None)])
    async def test_missing_fields(self, to, body) -> None:
        result = await _gateway().send_sms(to, body)

        assert result.status == SmsStatus.INVALID_INPUT
        assert result.message == SMS_MISSING_FIELDS_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("to", ["abc", "0123", "+", "+1"])
    async def test_invalid_format_never_calls_twilio(self, to) -> None:
        client = MagicMock()
        gateway = _gateway(client)

        result = await gateway.send_sms(to, "olá")

        assert result.status == SmsStatus.INVALID_INPUT
        assert result.message == (
            f"Número de destino ({to}) inválido. Use formato internacional (ex: +244XXXXXXXXX)."
        )
        client.messages.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_to_number_code(self) -> None:
        client = MagicMock()
        client.messages.create.side_effect = _rest_error(21211)

        result = await _gateway(client).send_sms(TO, "olá")

        assert result.status == SmsStatus.INVALID_NUMBER
        assert result.message == "Falha ao enviar SMS: Número de destino (+244923000000) inválido."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", [21610, 21612, 21614])
    async def test_blocked_recipient_codes(self, code) -> None:
        client = MagicMock()
        client.messages.create.side_effect = _rest_error(code)

        result = await _gateway(client).send_sms(TO, "olá")

        assert result.status == SmsStatus.RECIPIENT_BLOCKED
        assert result.message == (
            "Falha ao enviar SMS: O número +244923000000 não pode receber mensagens deste remetente."
        )

    @pytest.mark.asyncio
    async def test_region_not_permitted(self) -> None:
        client = MagicMock()
        client.messages.create.side_effect = _rest_error(21408)

        result = await _gateway(client).send_sms(TO, "olá")

        assert result.status == SmsStatus.REGION_NOT_PERMITTED
        assert "região do número +244923000000" in result.message

    @pytest.mark.asyncio
    async def test_other_rest_error(self) -> None:
        client = MagicMock()
        client.messages.create.side_effect = _rest_error(20003, msg="Authenticate")

        result = await _gateway(client).send_sms(TO, "olá")

        assert result.status == SmsStatus.FAILED
        assert result.message == "Falha ao enviar SMS para +244923000000. (Authenticate)"

    @pytest.mark.asyncio
    async def test_rest_error_without_message(self) -> None:
        client = MagicMock()
        client.messages.create.side_effect = _rest_error(None, msg="")

        result = await _gateway(client).send_sms(TO, "olá")

        assert result.message == "Falha ao enviar SMS para +244923000000. (Erro desconhecido)"

    @pytest.mark.asyncio
    async def test_unexpected_error(self) -> None:
        client = MagicMock()
        client.messages.create.side_effect = ConnectionError("rede caiu")

        result = await _gateway(client).send_sms(TO, "olá")

        assert result.status == SmsStatus.FAILED
        assert result.message == "Falha ao enviar SMS para +244923000000. (rede caiu)"

    @pytest.mark.asyncio
    async def test_timeout_reports_unknown_delivery(self) -> None:
        client = MagicMock()
        client.messages.create.side_effect = lambda **_: time.sleep(0.3)

        result = await _gateway(client, timeout_seconds=0.05).send_sms(TO, "olá")

        assert result.status == SmsStatus.TIMEOUT
        assert not result.delivered
        assert result.message == (
            "Envio de SMS para +244923000000 sem confirmação (tempo esgotado); "
            "a mensagem pode ainda chegar."
        )
        assert "Falha" not in result.message
