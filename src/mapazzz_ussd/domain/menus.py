"""Textos fixos dos menus e mensagens do diálogo USSD (pt-AO)."""

from __future__ import annotations

MAIN_MENU = (
    "Bem-vindo ao USSD Service do mapaZZZ\n"
    "1. Zonas de risco\n"
    "2. Reportagens\n"
    "3. Epaludismo (Malária)\n"
    "4. Soluções de Zonas\n"
    "5. Dicas de Saúde\n"
    "6. Contactos de Emergência"
)

RISK_LEVEL_PROMPT = (
    "Escolha o nível de risco:\n1. Alto\n2. Médio\n3. Baixo\n4. Todas\n5. Menu Principal"
)

MUNICIPALITY_PROMPT = (
    "Município para reportagens:\n"
    "1. Belas\n"
    "2. Zango\n"
    "3. Viana\n"
    "4. Outro (Geral)\n"
    "5. Todos (Geral)\n"
    "6. Menu Principal"
)

SYMPTOMS_PROMPT = "Descreva os seus sintomas (ex: febre, dor de cabeça):"

ZONE_PROBLEM_PROMPT = "Descreva o problema na sua zona:"

HEALTH_TIPS_MENU = (
    "Dicas de Saúde:\n"
    "1. Prevenção da Malária\n"
    "2. Saneamento Básico\n"
    "3. Primeiros Socorros (Básico)\n"
    "4. Menu Principal"
)

EMERGENCY_CONTACTS = (
    "Contactos Úteis:\n"
    "Policia: 113\n"
    "Bombeiros: 115\n"
    "Ambulância (INEMA): 112\n"
    "Proteção Civil: 117\n"
    "Violência Doméstica: 146"
)

INVALID_SELECTION = "Seleção inválida."
INVALID_ZONES_SELECTION = "Seleção inválida para Zonas."
INVALID_REPORTS_SELECTION = "Seleção inválida para Reportagens."

MISSING_SYMPTOMS = "Por favor, forneça uma descrição dos sintomas. Tente novamente."
MISSING_ZONE_PROBLEM = "Por favor, forneça uma descrição do problema. Tente novamente."

SERVICE_FAILURE = "Serviço temporariamente indisponível. Tente mais tarde."

HEALTH_TIPS: dict[str, str] = {
    "malaria": (
        "Malária: Use mosquiteiro, elimine água parada, procure médico aos primeiros sintomas."
    ),
    "sanitation": (
        "Saneamento: Mantenha quintal limpo, lixo no lugar certo, lave as mãos. Saúde!"
    ),
    "first_aid": (
        "1os Socorros: Queimadura leve? Água fria. Cortes? Limpe e cubra. Grave? Ajuda médica!"
    ),
}

# Cabeçalhos e prefixos dos SMS enviados como cópia do resultado
SMS_ZONES_HEADER = "Zonas Risco (MapaZZZ):"
SMS_REPORTS_HEADER = "Reportagens (MapaZZZ):"
SMS_SYMPTOMS_PREFIX = "Resultado da sua análise de sintomas (USSD MapaZZZ):"
SMS_ZONE_SOLUTION_PREFIX = "Sugestão para o problema na sua zona (USSD MapaZZZ):"
SMS_HEALTH_TIP_PREFIX = "Dica de Saúde (USSD MapaZZZ):"
