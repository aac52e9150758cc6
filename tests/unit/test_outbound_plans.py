"""Testes dos planos de saída (sem gateway SMS)."""

from __future__ import annotations

import pytest

from mapazzz_ussd.application.outbound_plans import (
    plan_health_tip,
    plan_reports,
    plan_symptom_analysis,
    plan_zone_solution,
    plan_zones,
)
from mapazzz_ussd.domain import menus
from mapazzz_ussd.infra.map_data import SAMPLE_REPORTS, SAMPLE_ZONES


def test_plan_zones_copies_listing_to_sms() -> None:
    plan = plan_zones(SAMPLE_ZONES, "Alto")

    assert plan.ussd_text == "Zonas de Risco Alto:\n1. Clínica CSE (Alto)"
    assert plan.sms_body == "Zonas Risco (MapaZZZ):\nZonas de Risco Alto:\n1. Clínica CSE (Alto)"
    assert plan.compose("SMS enviado para +244923000000!") == (
        "Zonas de Risco Alto:\n1. Clínica CSE (Alto)\nSMS enviado para +244923000000!"
    )


def test_plan_reports_uses_reports_header() -> None:
    plan = plan_reports(SAMPLE_REPORTS, "Viana")

    assert plan.ussd_text.startswith("Reportagens Viana:\nPoste Caído")
    assert plan.sms_body.startswith("Reportagens (MapaZZZ):\nReportagens Viana:")
    assert plan.separator == "\n"


def test_plan_symptom_analysis() -> None:
    plan = plan_symptom_analysis("30% (Sintomas vagos.)")

    assert plan.ussd_text == "Análise: 30% (Sintomas vagos.)"
    assert plan.sms_body == (
        "Resultado da sua análise de sintomas (USSD MapaZZZ): 30% (Sintomas vagos.)"
    )
    assert plan.compose("SMS enviado!") == "Análise: 30% (Sintomas vagos.) SMS enviado!"


def test_plan_zone_solution() -> None:
    plan = plan_zone_solution("Contacte a administração.")

    assert plan.ussd_text == "Sugestão: Contacte a administração."
    assert plan.sms_body.startswith(menus.SMS_ZONE_SOLUTION_PREFIX)


def test_plan_health_tip() -> None:
    plan = plan_health_tip("malaria")

    assert plan.ussd_text == menus.HEALTH_TIPS["malaria"]
    assert plan.sms_body == f"Dica de Saúde (USSD MapaZZZ): {menus.HEALTH_TIPS['malaria']}"


def test_plan_health_tip_unknown_key() -> None:
    with pytest.raises(KeyError):
        plan_health_tip("nutrição")
