"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e agregadas depois
(BigQuery, Cloud Logging metrics).

Métricas suportadas:
- Latência: tempo de processamento por componente/operação
- Outcome: contador de webhooks por plataforma e resultado
- Dropped: webhooks descartados sem conta de integração ativa
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "webhook_router")
        operation: Nome da operação (ex: "webhook_whatsapp")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_webhook_outcome(
    platform: str,
    status: str,
    *,
    events: int = 0,
    retryable: bool = False,
) -> None:
    """Registra o resultado final de um webhook.

    Args:
        platform: Nome da plataforma na rota (ex: "whatsapp")
        status: processed | no_integration | unsupported_platform | failed
        events: Quantidade de eventos normalizados
        retryable: Se a falha deve ser reentregue pelo provedor
    """
    logger.info(
        "metric_webhook_outcome",
        extra={
            "metric_type": "counter",
            "platform": platform,
            "status": status,
            "events": events,
            "retryable": retryable,
        },
    )


def record_webhook_dropped(platform: str, reason: str) -> None:
    """Registra webhook descartado silenciosamente (ex: sem conta ativa).

    O provedor recebe sucesso; esta métrica é o único sinal operacional.
    """
    logger.info(
        "metric_webhook_dropped",
        extra={
            "metric_type": "counter",
            "platform": platform,
            "reason": reason,
        },
    )
