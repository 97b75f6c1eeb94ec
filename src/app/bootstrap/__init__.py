"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_webhook_use_case

    initialize_app()
    use_case = get_webhook_use_case()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id, get_tenant_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_storage_settings,
    get_webhook_settings,
)

if TYPE_CHECKING:
    from app.bootstrap.dependencies import StoreBundle
    from app.use_cases.webhooks import ProcessWebhookUseCase

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação (logging JSON com correlation_id e tenant_id).

    Deve ser chamada uma vez no início do serviço.
    """
    configure_logging(
        level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        service_name=get_base_settings().service_name,
        correlation_id_getter=get_correlation_id,
        tenant_id_getter=get_tenant_id,
    )


def validate_runtime_settings() -> list[str]:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Returns:
        Lista de erros encontrados (vazia = OK).

    Raises:
        RuntimeError: Se houver erros em ambiente estrito.
    """
    base = get_base_settings()
    errors: list[str] = [f"base: {error}" for error in base.validate()]

    storage = get_storage_settings()
    errors.extend(f"storage: {error}" for error in storage.validate(base))

    if storage.backend == "firestore":
        firestore_errors = get_firestore_settings().validate(base.gcp_project)
        errors.extend(f"firestore: {error}" for error in firestore_errors)

    webhook_errors = get_webhook_settings().validate(is_development=base.is_development)
    errors.extend(f"webhooks: {error}" for error in webhook_errors)

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return errors

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")
    return errors


@lru_cache(maxsize=1)
def get_stores() -> StoreBundle:
    """Obtém o conjunto de stores (singleton)."""
    from app.bootstrap.dependencies import create_stores

    return create_stores()


@lru_cache(maxsize=1)
def get_webhook_use_case() -> ProcessWebhookUseCase:
    """Obtém o roteador de webhooks (singleton)."""
    from app.bootstrap.dependencies import create_webhook_use_case

    return create_webhook_use_case(get_stores())
