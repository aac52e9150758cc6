"""Cliente do serviço de análise de texto (API compatível com OpenAI).

Duas operações: probabilidade de malária a partir de sintomas e sugestão de
solução para um problema de zona. Ambas nunca lançam exceção: devolvem um
AnalysisResult com status e texto pronto para o usuário.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from openai import APIError, APITimeoutError, AsyncOpenAI, OpenAIError

from mapazzz_ussd.ai.contracts import AnalysisResult, AnalysisStatus
from mapazzz_ussd.ai.prompts import (
    AI_UNAVAILABLE_MESSAGE,
    SYMPTOMS_TASK,
    ZONE_SOLUTION_TASK,
    AnalysisTask,
)
from mapazzz_ussd.observability.logging import get_logger, log_fallback
from mapazzz_ussd.observability.timing import timed

logger: logging.Logger = get_logger(__name__)


class TextAnalysisClient:
    """Adaptador do serviço de análise com timeout e fallback determinístico.

    Sem api_key (ou se o cliente falhar a inicializar) fica permanentemente
    indisponível e responde com AI_UNAVAILABLE_MESSAGE.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        timeout_seconds: float = 10.0,
        client: Any = None,
    ) -> None:
        self._model = model
        self._timeout = timeout_seconds
        self._client = client if client is not None else self._create_client(api_key, base_url)

    @staticmethod
    def _create_client(api_key: str | None, base_url: str | None) -> AsyncOpenAI | None:
        if not api_key:
            logger.warning("OPENAI_API_KEY not set; text analysis disabled")
            return None
        try:
            client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        except OpenAIError as e:
            logger.error(
                "Failed to initialize text analysis client",
                extra={"error_type": type(e).__name__},
            )
            return None
        logger.info("Text analysis client initialized")
        return client

    @property
    def available(self) -> bool:
        return self._client is not None

    async def analyze_symptoms(self, description: str | None) -> AnalysisResult:
        """Probabilidade de malária (percentagem + explicação curta)."""
        return await self._run(SYMPTOMS_TASK, description)

    async def suggest_zone_solution(self, description: str | None) -> AnalysisResult:
        """Sugestão prática (até 150 caracteres) para um problema de zona."""
        return await self._run(ZONE_SOLUTION_TASK, description)

    async def _run(self, task: AnalysisTask, description: str | None) -> AnalysisResult:
        if self._client is None:
            log_fallback(logger, task.component, reason="unavailable")
            return AnalysisResult(status=AnalysisStatus.UNAVAILABLE, message=AI_UNAVAILABLE_MESSAGE)

        if not description or not description.strip():
            return AnalysisResult(
                status=AnalysisStatus.EMPTY_INPUT, message=task.empty_input_message
            )

        try:
            with timed(task.component):
                text = await asyncio.wait_for(
                    self._complete(task, description.strip()), timeout=self._timeout
                )
        except (APIError, APITimeoutError, TimeoutError) as e:
            logger.warning(
                f"{task.component}_error",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            log_fallback(logger, task.component, reason=type(e).__name__)
            return AnalysisResult(status=AnalysisStatus.ERROR, message=task.error_message)
        except Exception:
            logger.exception(f"{task.component}_unexpected_error")
            log_fallback(logger, task.component, reason="unexpected_error")
            return AnalysisResult(status=AnalysisStatus.ERROR, message=task.error_message)

        text = (text or "").strip()
        if not text:
            log_fallback(logger, task.component, reason="empty_response")
            return AnalysisResult(status=AnalysisStatus.NO_CONTENT, message=task.no_content_message)

        return AnalysisResult(status=AnalysisStatus.OK, message=text)

    async def _complete(self, task: AnalysisTask, description: str) -> str | None:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": task.build_prompt(description)}],
            temperature=task.temperature,
            max_tokens=task.max_output_tokens,
            timeout=self._timeout,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content
