"""Formatação de listas (zonas, reportagens) para o ecrã USSD.

Funções puras: recebem os dados já carregados e devolvem texto limitado.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mapazzz_ussd.domain.models import Report, Zone
from mapazzz_ussd.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

MAX_ZONES_TO_SHOW = 5
MAX_REPORTS_TO_SHOW = 1
MAX_DESCRIPTION_LENGTH = 70
TRUNCATED_DESCRIPTION_LENGTH = 67

# Filtro digitado (minúsculas) -> nível numérico da API
RISK_LEVEL_TO_NUMERIC: dict[str, int] = {
    "alto": 3,
    "médio": 2,
    "baixo": 1,
}

NUMERIC_TO_RISK_LABEL: dict[int, str] = {
    3: "Alto",
    2: "Médio",
    1: "Baixo",
}

UNFILTERED_MUNICIPALITIES = frozenset({"outro", "todos"})


def risk_label(risk_level: int | str | None) -> str:
    """Rótulo exibido para um nível de risco numérico."""
    if isinstance(risk_level, int) and risk_level in NUMERIC_TO_RISK_LABEL:
        return NUMERIC_TO_RISK_LABEL[risk_level]
    if risk_level is None or risk_level == "":
        return "N/D"
    return str(risk_level)


def _no_zones_message(risk_level_filter: str | None) -> str:
    filter_text = f"{risk_level_filter.lower()} " if risk_level_filter else ""
    return f"Nenhuma zona de risco {filter_text}encontrada."


def filter_zones(zones: Sequence[Zone], risk_level_filter: str | None) -> list[Zone]:
    """Filtra por nível; None devolve todas, filtro desconhecido nenhuma."""
    if not risk_level_filter:
        return list(zones)

    numeric = RISK_LEVEL_TO_NUMERIC.get(risk_level_filter.lower())
    if numeric is None:
        logger.warning(
            "Unrecognized risk level filter", extra={"risk_level_filter": risk_level_filter}
        )
        return []
    return [zone for zone in zones if zone.risk_level == numeric]


def format_zones(zones: Sequence[Zone] | None, risk_level_filter: str | None) -> str:
    """Lista até 5 zonas, numeradas a partir de 1, com rodapé do restante."""
    if not zones:
        return _no_zones_message(risk_level_filter)

    filtered = filter_zones(zones, risk_level_filter)
    if not filtered:
        return _no_zones_message(risk_level_filter)

    if risk_level_filter:
        lines = [f"Zonas de Risco {risk_level_filter}:"]
    else:
        lines = ["Zonas de Risco (Todas):"]

    shown = filtered[:MAX_ZONES_TO_SHOW]
    for index, zone in enumerate(shown, start=1):
        lines.append(f"{index}. {zone.location or 'Local Desconhecido'} ({risk_label(zone.risk_level)})")

    remaining = len(filtered) - len(shown)
    if remaining > 0:
        lines.append(f"Mais {remaining} zonas disponíveis.")
    return "\n".join(lines).strip()


def _is_unfiltered(municipality_filter: str | None) -> bool:
    return not municipality_filter or municipality_filter.lower() in UNFILTERED_MUNICIPALITIES


def filter_reports(reports: Sequence[Report], municipality_filter: str | None) -> list[Report]:
    """Correspondência exata sem distinção de maiúsculas; outro/todos não filtram."""
    if _is_unfiltered(municipality_filter):
        return list(reports)
    wanted = municipality_filter.lower()
    return [
        report
        for report in reports
        if report.municipality and report.municipality.lower() == wanted
    ]


def truncate_description(description: str | None) -> str:
    desc = description or "Sem descrição."
    if len(desc) > MAX_DESCRIPTION_LENGTH:
        return desc[:TRUNCATED_DESCRIPTION_LENGTH] + "..."
    return desc


def format_reports(reports: Sequence[Report] | None, municipality_filter: str | None) -> str:
    """Mostra só a primeira reportagem encontrada, com rodapé do restante."""
    if not reports:
        target = f"para {municipality_filter} " if municipality_filter else ""
        return f"Nenhuma reportagem {target}encontrada."

    filtered = filter_reports(reports, municipality_filter)
    if not filtered and not _is_unfiltered(municipality_filter):
        return f"Nenhuma reportagem para {municipality_filter} encontrada."

    heading = (
        municipality_filter
        if municipality_filter and municipality_filter.lower() != "todos"
        else "Geral"
    )
    lines = [f"Reportagens {heading}:"]

    shown = filtered[:MAX_REPORTS_TO_SHOW]
    for report in shown:
        risk = report.risk_level if report.risk_level not in (None, "") else "N/D"
        lines.append(
            f"{report.title or 'N/A'}: {truncate_description(report.description)} (Risco: {risk})"
        )

    remaining = len(filtered) - len(shown)
    if remaining > 0:
        lines.append(f"Mais {remaining} reportagens.")
    return "\n".join(lines).strip()
