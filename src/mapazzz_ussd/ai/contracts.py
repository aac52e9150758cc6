"""Contratos Pydantic dos resultados de análise de texto."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class AnalysisStatus(StrEnum):
    """Desfecho de uma chamada ao serviço de análise."""

    OK = "OK"
    """Texto gerado pelo serviço."""

    NO_CONTENT = "NO_CONTENT"
    """Serviço respondeu vazio; mensagem de substituição entregue ao usuário."""

    UNAVAILABLE = "UNAVAILABLE"
    """Sem credenciais ou cliente não inicializado."""

    EMPTY_INPUT = "EMPTY_INPUT"
    """Descrição em branco; nada foi enviado ao serviço."""

    ERROR = "ERROR"
    """Erro remoto ou timeout."""


FAILURE_STATUSES = frozenset(
    {AnalysisStatus.UNAVAILABLE, AnalysisStatus.EMPTY_INPUT, AnalysisStatus.ERROR}
)


class AnalysisResult(BaseModel):
    """Resultado etiquetado: o engine decide pelo status, nunca pelo texto."""

    status: AnalysisStatus
    message: str = Field(..., min_length=1)

    @property
    def is_failure(self) -> bool:
        """True quando a resposta deve encerrar o diálogo sem SMS."""
        return self.status in FAILURE_STATUSES
