"""Medição de latência das chamadas aos serviços externos (IA, SMS, API do mapa)."""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Iterator

from mapazzz_ussd.observability.logging import get_logger

logger = get_logger(__name__)

# Um passo USSD tem poucos segundos até o gateway desistir
SLOW_CALL_THRESHOLD_MS = 2000.0


@contextlib.contextmanager
def timed(component: str, slow_ms: float = SLOW_CALL_THRESHOLD_MS) -> Iterator[None]:
    """Regista `component_latency` ao sair do bloco, mesmo com exceção.

    Chamadas acima de `slow_ms` são registadas em WARNING.

        with timed("sms_gateway"):
            await gateway.send_sms(...)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        level = logging.WARNING if elapsed_ms > slow_ms else logging.INFO
        logger.log(
            level,
            "component_latency",
            extra={
                "component": component,
                "elapsed_ms": elapsed_ms,
                "slow": level == logging.WARNING,
            },
        )
