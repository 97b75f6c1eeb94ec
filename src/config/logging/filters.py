"""Filters de logging para injeção de contexto.

Campos injetados em todo record:
- correlation_id: ID de rastreamento da requisição
- tenant_id: tenant do webhook em processamento
- service: Nome do serviço
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def _empty() -> str:
    return ""


class RequestContextFilter(logging.Filter):
    """Injeta correlation_id, tenant_id e service em cada record.

    Valores passados explicitamente via ``extra`` são preservados.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        tenant_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or _empty
        self._get_tenant_id = tenant_id_getter or _empty

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._get_correlation_id()
        if not getattr(record, "tenant_id", None):
            record.tenant_id = self._get_tenant_id()
        record.service = self._service_name
        return True
