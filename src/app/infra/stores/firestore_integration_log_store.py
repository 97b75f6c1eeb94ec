"""Firestore IntegrationLog Store — auditoria append-only de webhooks.

Cada tentativa de processamento vira um documento com id automático;
registros nunca são atualizados ou removidos por este serviço.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.protocols.stores import IntegrationLogStoreProtocol

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.integration import IntegrationLog

logger = logging.getLogger(__name__)

INTEGRATION_LOGS_COLLECTION = "integration_logs"


class FirestoreIntegrationLogStore(IntegrationLogStoreProtocol):
    """Store de logs de integração usando Firestore.

    Características:
        - Append-only (sem updates)
        - Sem PII fora do campo ``payload`` (snapshot do provedor)
        - TTL via Firestore TTL policies sobre ``timestamp``

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: integration_logs)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = INTEGRATION_LOGS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def append(self, record: IntegrationLog) -> None:
        """Append assíncrono (Firestore Python SDK não tem async nativo).

        Erros propagam; o IntegrationLogger decide como tratá-los.
        """
        await asyncio.to_thread(self._append_sync, record)

    def _append_sync(self, record: IntegrationLog) -> None:
        _, doc_ref = self._db.collection(self._collection).add(record.to_firestore_dict())
        logger.debug(
            "integration_log_appended",
            extra={
                "doc_id": doc_ref.id,
                "operation": record.operation,
                "outcome": str(record.outcome),
            },
        )
