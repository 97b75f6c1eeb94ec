"""IntegrationLogger — auditoria append-only por tentativa de processamento.

Falhas do store de auditoria nunca mascaram o resultado do webhook:
são engolidas e reportadas no log de processo.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.integration import IntegrationLog, LogOutcome

if TYPE_CHECKING:
    from app.protocols.stores import IntegrationLogStoreProtocol

logger = logging.getLogger(__name__)


class IntegrationLogger:
    """Grava IntegrationLog para cada webhook atribuído a uma conta."""

    def __init__(self, store: IntegrationLogStoreProtocol) -> None:
        self._store = store

    async def log(
        self,
        tenant_id: str,
        integration_account_id: str,
        operation: str,
        outcome: LogOutcome,
        message: str,
        payload: Any = None,
    ) -> bool:
        """Acrescenta um registro de auditoria.

        Returns:
            True se o registro foi gravado; False se o store falhou.
        """
        record = IntegrationLog(
            tenant_id=tenant_id,
            integration_account_id=integration_account_id,
            operation=operation,
            outcome=outcome,
            message=message,
            payload=payload,
        )
        try:
            await self._store.append(record)
        except Exception as exc:
            # Nunca propagar: o resultado do webhook prevalece
            logger.error(
                "integration_log_write_failed",
                extra={
                    "tenant_id": tenant_id,
                    "integration_account_id": integration_account_id,
                    "operation": operation,
                    "outcome": str(outcome),
                    "error_type": type(exc).__name__,
                },
            )
            return False
        return True

    async def success(
        self,
        tenant_id: str,
        integration_account_id: str,
        operation: str,
        message: str,
        payload: Any = None,
    ) -> bool:
        return await self.log(
            tenant_id, integration_account_id, operation, LogOutcome.SUCCESS, message, payload
        )

    async def failure(
        self,
        tenant_id: str,
        integration_account_id: str,
        operation: str,
        message: str,
        payload: Any = None,
    ) -> bool:
        return await self.log(
            tenant_id, integration_account_id, operation, LogOutcome.FAILURE, message, payload
        )
