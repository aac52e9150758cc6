"""Prompts e parâmetros de geração do serviço de análise de texto."""

from __future__ import annotations

from dataclasses import dataclass

SYMPTOMS_PROMPT_TEMPLATE = (
    'Analise os sintomas para malária: "{description}". '
    "FORNEÇA OBRIGATORIAMENTE uma probabilidade em percentagem (0% a 100%) de ser malária. "
    'A resposta DEVE iniciar com a percentagem (ex: "30%"). '
    "Após a percentagem, adicione uma explicação MUITO BREVE "
    "(máximo 45 caracteres para a explicação, em português). "
    "Não mencione outras doenças. Se a certeza for baixa, use uma percentagem baixa. "
    'Exemplo 1: "10% (Sintomas vagos.)" Exemplo 2: "85% (Sintomas clássicos.)"'
)

ZONE_SOLUTION_PROMPT_TEMPLATE = (
    'Para o seguinte problema de zona em Angola: "{description}", '
    "forneça uma solução prática e muito concisa em português (máximo 150 caracteres). "
    "Exemplo: 'Lixo acumulado' -> 'Reporte à administração local para limpeza.'"
)

AI_UNAVAILABLE_MESSAGE = "Serviço de IA indisponível. Verifique a configuração da API_KEY."


@dataclass(frozen=True, slots=True)
class AnalysisTask:
    """Prompt, parâmetros de geração e textos de fallback de uma operação."""

    component: str
    template: str
    temperature: float
    max_output_tokens: int
    empty_input_message: str
    no_content_message: str
    error_message: str

    def build_prompt(self, description: str) -> str:
        return self.template.format(description=description)


SYMPTOMS_TASK = AnalysisTask(
    component="symptom_analysis",
    template=SYMPTOMS_PROMPT_TEMPLATE,
    temperature=0.7,
    max_output_tokens=60,
    empty_input_message="Nenhum sintoma fornecido para análise.",
    no_content_message="Não foi possível obter uma análise dos sintomas.",
    error_message="Erro ao analisar sintomas. Tente mais tarde.",
)

ZONE_SOLUTION_TASK = AnalysisTask(
    component="zone_solution",
    template=ZONE_SOLUTION_PROMPT_TEMPLATE,
    temperature=0.5,
    max_output_tokens=80,
    empty_input_message="Nenhuma descrição do problema fornecida.",
    no_content_message="Não foi possível obter uma sugestão.",
    error_message="Erro ao obter sugestão. Tente mais tarde.",
)
