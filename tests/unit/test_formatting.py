"""Testes da formatação de zonas e reportagens."""

from __future__ import annotations

from mapazzz_ussd.application.formatting import (
    filter_zones,
    format_reports,
    format_zones,
    risk_label,
    truncate_description,
)
from mapazzz_ussd.domain.models import Report, Zone


def _zones(count: int, risk_level: int = 3) -> list[Zone]:
    return [Zone(location=f"Zona {i}", risk_level=risk_level) for i in range(1, count + 1)]


class TestFormatZones:
    def test_empty_list_without_filter(self) -> None:
        assert format_zones([], None) == "Nenhuma zona de risco encontrada."

    def test_empty_list_with_filter(self) -> None:
        assert format_zones(None, "Alto") == "Nenhuma zona de risco alto encontrada."

    def test_filter_without_matches(self) -> None:
        zones = [Zone(location="Mercado Kifica", risk_level=1)]
        assert format_zones(zones, "Alto") == "Nenhuma zona de risco alto encontrada."

    def test_filtered_listing(self) -> None:
        zones = [
            Zone(location="Clínica CSE", risk_level=3),
            Zone(location="ISPTC Talatona", risk_level=2),
        ]
        assert format_zones(zones, "Alto") == "Zonas de Risco Alto:\n1. Clínica CSE (Alto)"

    def test_unfiltered_listing_header(self) -> None:
        zones = [Zone(location="ISPTC Talatona", risk_level=2)]
        assert format_zones(zones, None) == "Zonas de Risco (Todas):\n1. ISPTC Talatona (Médio)"

    def test_at_most_five_zones_with_footer(self) -> None:
        text = format_zones(_zones(8), None)
        lines = text.splitlines()
        assert len(lines) == 7
        assert lines[5] == "5. Zona 5 (Alto)"
        assert lines[-1] == "Mais 3 zonas disponíveis."

    def test_exactly_five_has_no_footer(self) -> None:
        text = format_zones(_zones(5), None)
        assert "Mais" not in text

    def test_unknown_location_placeholder(self) -> None:
        text = format_zones([Zone(risk_level=2)], "Médio")
        assert "1. Local Desconhecido (Médio)" in text

    def test_unrecognized_filter_yields_nothing(self) -> None:
        assert filter_zones(_zones(2), "Crítico") == []


class TestRiskLabel:
    def test_numeric_levels(self) -> None:
        assert risk_label(3) == "Alto"
        assert risk_label(2) == "Médio"
        assert risk_label(1) == "Baixo"

    def test_missing_and_textual_levels(self) -> None:
        assert risk_label(None) == "N/D"
        assert risk_label("Alto") == "Alto"
        assert risk_label(9) == "9"


class TestFormatReports:
    def _reports(self) -> list[Report]:
        return [
            Report(title="Falta de Água", description="Sem água.", risk_level="Alto", municipality="Belas"),
            Report(title="Lixo", description="Lixo acumulado.", risk_level="Médio", municipality="Zango"),
            Report(title="Buraco", description="Buraco na via.", risk_level="Baixo", municipality="belas"),
        ]

    def test_empty_list(self) -> None:
        assert format_reports([], None) == "Nenhuma reportagem encontrada."
        assert format_reports([], "Viana") == "Nenhuma reportagem para Viana encontrada."

    def test_no_match_for_municipality(self) -> None:
        assert format_reports(self._reports(), "Viana") == "Nenhuma reportagem para Viana encontrada."

    def test_case_insensitive_match_shows_first_only(self) -> None:
        text = format_reports(self._reports(), "Belas")
        assert text == (
            "Reportagens Belas:\n"
            "Falta de Água: Sem água. (Risco: Alto)\n"
            "Mais 1 reportagens."
        )

    def test_todos_is_general(self) -> None:
        text = format_reports(self._reports(), "Todos")
        assert text.startswith("Reportagens Geral:\nFalta de Água")
        assert text.endswith("Mais 2 reportagens.")

    def test_outro_lists_everything_under_own_heading(self) -> None:
        text = format_reports(self._reports(), "Outro")
        assert text.startswith("Reportagens Outro:")
        assert text.endswith("Mais 2 reportagens.")

    def test_missing_fields_placeholders(self) -> None:
        text = format_reports([Report()], None)
        assert text == "Reportagens Geral:\nN/A: Sem descrição. (Risco: N/D)"


class TestTruncateDescription:
    def test_short_description_kept(self) -> None:
        assert truncate_description("a" * 70) == "a" * 70

    def test_long_description_cut(self) -> None:
        result = truncate_description("b" * 71)
        assert result == "b" * 67 + "..."
        assert len(result) == 70
