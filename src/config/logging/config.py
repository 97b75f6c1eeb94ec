"""Configuração centralizada de logging.

Funções para configurar logging estruturado JSON com campos obrigatórios
(correlation_id, tenant_id, service, level, logger, message) e níveis
configuráveis por ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import RequestContextFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "pyloto-ingest"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    tenant_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id do contexto.
        tenant_id_getter: Função que retorna o tenant da requisição atual.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(
        RequestContextFilter(service_name, correlation_id_getter, tenant_id_getter)
    )

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    **context: object,
) -> None:
    """Registra degradação best-effort (sem PII).

    Usado quando uma etapa opcional falha e o fluxo segue com valor
    padrão, por exemplo a resolução de cliente de uma mensagem.

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "customer_resolution").
        reason: Razão do fallback (ex: "PersistenceError").
        **context: Campos extras sem PII (ids internos, plataforma).
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
        **context,
    }
    if reason:
        extra["reason"] = reason

    logger.warning("fallback_applied", extra=extra)
