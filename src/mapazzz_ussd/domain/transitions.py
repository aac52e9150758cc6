"""Tabela de transições do diálogo USSD.

TRANSITIONS[(flow, classe_de_entrada)] = Transition. Entradas sem linha na
tabela caem em DEFAULT_TRANSITIONS[flow]. Resolução pura, sem side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from mapazzz_ussd.domain import menus
from mapazzz_ussd.domain.flows import FREE_TEXT_FLOWS, ROOT_FLOWS, UssdFlow

EMPTY_INPUT = ""
"""Classe de entrada: nada digitado (ou só espaços num flow de texto livre)."""

TEXT_INPUT = "<text>"
"""Classe de entrada: texto livre não vazio."""


class DialogAction(StrEnum):
    """O que o engine faz ao aplicar uma transição."""

    SHOW_MAIN_MENU = "show_main_menu"
    PROMPT = "prompt"
    CLOSE = "close"
    LIST_ZONES = "list_zones"
    LIST_REPORTS = "list_reports"
    ANALYZE_SYMPTOMS = "analyze_symptoms"
    SUGGEST_ZONE_SOLUTION = "suggest_zone_solution"
    SEND_HEALTH_TIP = "send_health_tip"


@dataclass(frozen=True, slots=True)
class Transition:
    """Ação a executar e flow seguinte.

    next_flow None significa resposta END: a sessão é removida.
    `argument` carrega o texto fixo, o filtro ou a chave da dica.
    """

    action: DialogAction
    next_flow: UssdFlow | None = None
    argument: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.next_flow is None


MAIN_MENU = Transition(DialogAction.SHOW_MAIN_MENU, UssdFlow.MENU)


def _prompt(text: str, flow: UssdFlow) -> Transition:
    return Transition(DialogAction.PROMPT, flow, text)


def _close(text: str) -> Transition:
    return Transition(DialogAction.CLOSE, None, text)


def _zones(risk_level: str | None) -> Transition:
    return Transition(DialogAction.LIST_ZONES, None, risk_level)


def _reports(municipality: str) -> Transition:
    return Transition(DialogAction.LIST_REPORTS, None, municipality)


def _tip(key: str) -> Transition:
    return Transition(DialogAction.SEND_HEALTH_TIP, None, key)


TRANSITIONS: dict[tuple[UssdFlow, str], Transition] = {
    # === menu principal ===
    (UssdFlow.MENU, EMPTY_INPUT): MAIN_MENU,
    (UssdFlow.MENU, "1"): _prompt(menus.RISK_LEVEL_PROMPT, UssdFlow.ZONES_RISK_LEVEL_SELECTION),
    (UssdFlow.MENU, "2"): _prompt(menus.MUNICIPALITY_PROMPT, UssdFlow.MUNICIPALITY_SELECTION),
    (UssdFlow.MENU, "3"): _prompt(menus.SYMPTOMS_PROMPT, UssdFlow.SYMPTOMS_INPUT),
    (UssdFlow.MENU, "4"): _prompt(menus.ZONE_PROBLEM_PROMPT, UssdFlow.ZONE_PROBLEM_INPUT),
    (UssdFlow.MENU, "5"): _prompt(menus.HEALTH_TIPS_MENU, UssdFlow.HEALTH_TIPS_MENU),
    (UssdFlow.MENU, "6"): _close(menus.EMERGENCY_CONTACTS),
    # === zonas de risco ===
    (UssdFlow.ZONES_RISK_LEVEL_SELECTION, "1"): _zones("Alto"),
    (UssdFlow.ZONES_RISK_LEVEL_SELECTION, "2"): _zones("Médio"),
    (UssdFlow.ZONES_RISK_LEVEL_SELECTION, "3"): _zones("Baixo"),
    (UssdFlow.ZONES_RISK_LEVEL_SELECTION, "4"): _zones(None),
    (UssdFlow.ZONES_RISK_LEVEL_SELECTION, "5"): MAIN_MENU,
    # === reportagens ===
    (UssdFlow.MUNICIPALITY_SELECTION, "1"): _reports("Belas"),
    (UssdFlow.MUNICIPALITY_SELECTION, "2"): _reports("Zango"),
    (UssdFlow.MUNICIPALITY_SELECTION, "3"): _reports("Viana"),
    (UssdFlow.MUNICIPALITY_SELECTION, "4"): _reports("Outro"),
    (UssdFlow.MUNICIPALITY_SELECTION, "5"): _reports("Todos"),
    (UssdFlow.MUNICIPALITY_SELECTION, "6"): MAIN_MENU,
    # === texto livre ===
    (UssdFlow.SYMPTOMS_INPUT, TEXT_INPUT): Transition(DialogAction.ANALYZE_SYMPTOMS),
    (UssdFlow.SYMPTOMS_INPUT, EMPTY_INPUT): _close(menus.MISSING_SYMPTOMS),
    (UssdFlow.ZONE_PROBLEM_INPUT, TEXT_INPUT): Transition(DialogAction.SUGGEST_ZONE_SOLUTION),
    (UssdFlow.ZONE_PROBLEM_INPUT, EMPTY_INPUT): _close(menus.MISSING_ZONE_PROBLEM),
    # === dicas de saúde ===
    (UssdFlow.HEALTH_TIPS_MENU, "1"): _tip("malaria"),
    (UssdFlow.HEALTH_TIPS_MENU, "2"): _tip("sanitation"),
    (UssdFlow.HEALTH_TIPS_MENU, "3"): _tip("first_aid"),
    (UssdFlow.HEALTH_TIPS_MENU, "4"): MAIN_MENU,
}

# Transição para entradas fora da tabela, por flow
DEFAULT_TRANSITIONS: dict[UssdFlow, Transition] = {
    UssdFlow.INITIAL: MAIN_MENU,
    UssdFlow.MENU: _close(menus.INVALID_SELECTION),
    UssdFlow.ZONES_RISK_LEVEL_SELECTION: _close(menus.INVALID_ZONES_SELECTION),
    UssdFlow.MUNICIPALITY_SELECTION: _close(menus.INVALID_REPORTS_SELECTION),
    UssdFlow.SYMPTOMS_INPUT: _close(menus.MISSING_SYMPTOMS),
    UssdFlow.ZONE_PROBLEM_INPUT: _close(menus.MISSING_ZONE_PROBLEM),
    UssdFlow.HEALTH_TIPS_MENU: _close(menus.INVALID_SELECTION),
}


def extract_last_input(text: str | None) -> str:
    """Último token digitado: o que vem depois do último '*'."""
    if not text:
        return ""
    return text.rsplit("*", 1)[-1]


def classify_input(flow: UssdFlow, token: str) -> str:
    """Converte o token na chave usada pela tabela de transições."""
    if flow in FREE_TEXT_FLOWS:
        return TEXT_INPUT if token.strip() else EMPTY_INPUT
    return token


def resolve_transition(flow: UssdFlow, token: str) -> Transition:
    """Resolve a transição para (flow, token).

    Regras globais, aplicadas antes da tabela:
    - token vazio fora de initial/menu volta ao menu principal;
    - initial mostra sempre o menu principal.
    """
    if token == "" and flow not in ROOT_FLOWS:
        return MAIN_MENU
    if flow == UssdFlow.INITIAL:
        return MAIN_MENU

    key = classify_input(flow, token)
    return TRANSITIONS.get((flow, key), DEFAULT_TRANSITIONS[flow])
