"""Planos de saída: o que mostrar no USSD e o que enviar por SMS.

Construção pura; o envio do SMS fica com o engine, que junta a confirmação
do gateway ao texto final com `OutboundPlan.compose`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mapazzz_ussd.application.formatting import format_reports, format_zones
from mapazzz_ussd.domain import menus
from mapazzz_ussd.domain.models import Report, Zone


@dataclass(frozen=True, slots=True)
class OutboundPlan:
    """Texto USSD, corpo do SMS e separador entre texto e confirmação."""

    ussd_text: str
    sms_body: str
    separator: str = " "

    def compose(self, sms_confirmation: str) -> str:
        return f"{self.ussd_text}{self.separator}{sms_confirmation}"


def plan_zones(zones: Sequence[Zone], risk_level_filter: str | None) -> OutboundPlan:
    listing = format_zones(zones, risk_level_filter)
    return OutboundPlan(
        ussd_text=listing,
        sms_body=f"{menus.SMS_ZONES_HEADER}\n{listing}",
        separator="\n",
    )


def plan_reports(reports: Sequence[Report], municipality_filter: str | None) -> OutboundPlan:
    listing = format_reports(reports, municipality_filter)
    return OutboundPlan(
        ussd_text=listing,
        sms_body=f"{menus.SMS_REPORTS_HEADER}\n{listing}",
        separator="\n",
    )


def plan_symptom_analysis(analysis: str) -> OutboundPlan:
    return OutboundPlan(
        ussd_text=f"Análise: {analysis}",
        sms_body=f"{menus.SMS_SYMPTOMS_PREFIX} {analysis}",
    )


def plan_zone_solution(suggestion: str) -> OutboundPlan:
    return OutboundPlan(
        ussd_text=f"Sugestão: {suggestion}",
        sms_body=f"{menus.SMS_ZONE_SOLUTION_PREFIX} {suggestion}",
    )


def plan_health_tip(tip_key: str) -> OutboundPlan:
    """Raises KeyError para chaves fora de menus.HEALTH_TIPS."""
    tip = menus.HEALTH_TIPS[tip_key]
    return OutboundPlan(
        ussd_text=tip,
        sms_body=f"{menus.SMS_HEALTH_TIP_PREFIX} {tip}",
    )
