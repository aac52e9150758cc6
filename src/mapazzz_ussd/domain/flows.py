"""Estados (flows) do diálogo USSD.

Cada sessão guarda apenas o flow corrente; o histórico de dígitos enviado
pelo gateway é descartado a cada passo.
"""

from __future__ import annotations

from enum import StrEnum


class UssdFlow(StrEnum):
    """Nós da árvore de menus USSD."""

    INITIAL = "initial"
    """Sessão recém-criada, ainda sem menu exibido."""

    MENU = "menu"
    """Menu principal exibido, aguardando opção 1-6."""

    ZONES_RISK_LEVEL_SELECTION = "zones_risk_level_selection"
    MUNICIPALITY_SELECTION = "reports_municipality_selection"
    SYMPTOMS_INPUT = "symptoms_input"
    ZONE_PROBLEM_INPUT = "zone_problem_input"
    HEALTH_TIPS_MENU = "health_tips_menu"


ROOT_FLOWS = frozenset({UssdFlow.INITIAL, UssdFlow.MENU})
"""Flows em que uma entrada vazia é legítima (mostrar o menu)."""

FREE_TEXT_FLOWS = frozenset({UssdFlow.SYMPTOMS_INPUT, UssdFlow.ZONE_PROBLEM_INPUT})
"""Flows que aceitam texto livre em vez de uma opção numérica."""


def parse_flow(value: str | None) -> UssdFlow | None:
    """Converte o flow persistido; None se o valor não for reconhecido."""
    if not value:
        return None
    try:
        return UssdFlow(value)
    except ValueError:
        return None
