"""Modelos de domínio do servidor USSD."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mapazzz_ussd.domain.flows import UssdFlow


class ReplyType(StrEnum):
    """Prefixo da resposta exigido pelo gateway USSD."""

    CON = "CON"
    """O diálogo continua; o telefone pede nova entrada."""

    END = "END"
    """O diálogo termina."""


class UssdSession(BaseModel):
    """Estado de uma sessão USSD.

    `flow` é guardado como texto para que valores desconhecidos lidos de um
    store externo possam ser detectados e recuperados pelo engine.
    """

    session_id: str
    flow: str = UssdFlow.INITIAL.value
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    def move_to(self, flow: UssdFlow) -> None:
        """Atualiza o flow e o carimbo de atualização."""
        self.flow = flow.value
        self.updated_at = datetime.now(tz=UTC)

    def reset_to_menu(self) -> None:
        """Volta ao menu principal limpando os dados de rascunho."""
        self.data = {}
        self.move_to(UssdFlow.MENU)


class UssdRequest(BaseModel):
    """Passo do diálogo recebido do gateway USSD."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    session_id: str = Field(default="", alias="sessionId")
    service_code: str | None = Field(default=None, alias="serviceCode")
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    text: str | None = None


class UssdReply(BaseModel):
    """Resposta devolvida ao gateway (prefixo + corpo)."""

    reply_type: ReplyType
    message: str

    @property
    def is_terminal(self) -> bool:
        return self.reply_type == ReplyType.END

    def render(self) -> str:
        """Texto final enviado como text/plain."""
        return f"{self.reply_type.value} {self.message}"

    @classmethod
    def con(cls, message: str) -> UssdReply:
        return cls(reply_type=ReplyType.CON, message=message)

    @classmethod
    def end(cls, message: str) -> UssdReply:
        return cls(reply_type=ReplyType.END, message=message)


class Zone(BaseModel):
    """Zona de risco (nível numérico 1=Baixo, 2=Médio, 3=Alto)."""

    model_config = ConfigDict(populate_by_name=True)

    location: str | None = None
    risk_level: int | str | None = Field(default=None, alias="riskLevel")


class Report(BaseModel):
    """Reportagem de um problema num município."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    risk_level: str | int | None = Field(default=None, alias="riskLevel")
    municipality: str | None = None
