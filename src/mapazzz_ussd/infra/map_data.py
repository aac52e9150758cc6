"""Fontes de dados de zonas de risco e reportagens do mapaZZZ.

Sem MAPAZZZ_API_BASE_URL usa-se o catálogo simulado. Com URL, os dados vêm
da API via httpx; qualquer falha cai no catálogo simulado.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from mapazzz_ussd.domain.models import Report, Zone
from mapazzz_ussd.observability.logging import get_logger, log_fallback
from mapazzz_ussd.observability.timing import timed

logger: logging.Logger = get_logger(__name__)

SAMPLE_ZONES: tuple[Zone, ...] = (
    Zone(location="Clínica CSE", risk_level=3),
    Zone(location="ISPTC Talatona", risk_level=2),
    Zone(location="Mercado Kifica", risk_level=1),
)

SAMPLE_REPORTS: tuple[Report, ...] = (
    Report(
        title="Falta de Água",
        description="Bairro sem abastecimento há uma semana.",
        risk_level="Alto",
        municipality="Belas",
    ),
    Report(
        title="Lixo na Via",
        description="Contentores cheios e lixo acumulado junto ao mercado.",
        risk_level="Médio",
        municipality="Zango",
    ),
    Report(
        title="Poste Caído",
        description="Poste de iluminação caído sobre a estrada principal.",
        risk_level="Alto",
        municipality="Viana",
    ),
)


class MapDataSource(ABC):
    """Contrato de leitura de zonas e reportagens."""

    @abstractmethod
    async def list_zones(self) -> list[Zone]: ...

    @abstractmethod
    async def list_reports(self) -> list[Report]: ...


class StaticMapDataSource(MapDataSource):
    """Catálogo simulado em memória."""

    def __init__(
        self,
        zones: tuple[Zone, ...] | list[Zone] = SAMPLE_ZONES,
        reports: tuple[Report, ...] | list[Report] = SAMPLE_REPORTS,
    ) -> None:
        self._zones = list(zones)
        self._reports = list(reports)

    async def list_zones(self) -> list[Zone]:
        return list(self._zones)

    async def list_reports(self) -> list[Report]:
        return list(self._reports)


class HttpMapDataSource(MapDataSource):
    """Lê `GET {base}/zones` e `GET {base}/reports` (listas JSON)."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        fallback: MapDataSource | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._fallback = fallback or StaticMapDataSource()
        self._client = client

    async def _get_list(self, path: str) -> list[dict[str, Any]]:
        url = f"{self._base_url}/{path}"
        with timed(f"map_api_{path}"):
            if self._client is not None:
                response = await self._client.get(url, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url)
        response.raise_for_status()
        body = response.json()
        if isinstance(body, dict):
            # A API pode embrulhar a lista em {"data": [...]}
            body = body.get("data", [])
        if not isinstance(body, list):
            raise ValueError(f"Resposta inesperada de {path}: {type(body).__name__}")
        return body

    async def list_zones(self) -> list[Zone]:
        try:
            items = await self._get_list("zones")
            return [Zone.model_validate(item) for item in items]
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.warning(
                "map_api_zones_failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            log_fallback(logger, "map_api_zones", reason=type(e).__name__)
            return await self._fallback.list_zones()

    async def list_reports(self) -> list[Report]:
        try:
            items = await self._get_list("reports")
            return [Report.model_validate(item) for item in items]
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.warning(
                "map_api_reports_failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            log_fallback(logger, "map_api_reports", reason=type(e).__name__)
            return await self._fallback.list_reports()


def create_map_data_source(
    base_url: str | None, timeout_seconds: float = 5.0
) -> MapDataSource:
    """Escolhe a fonte de dados conforme a configuração."""
    if base_url:
        return HttpMapDataSource(base_url, timeout_seconds=timeout_seconds)
    return StaticMapDataSource()
