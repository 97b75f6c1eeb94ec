"""Firestore IntegrationAccount Store — leitura de contas de integração.

As contas são cadastradas pela UI de gestão; este store só consulta as
ativas e atualiza ``last_sync_at``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from google.api_core.exceptions import GoogleAPICallError
from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.integration import IntegrationAccount
from app.protocols.stores import IntegrationAccountStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from datetime import datetime

    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.platform import Platform

logger = logging.getLogger(__name__)

ACCOUNTS_COLLECTION = "integration_accounts"


class FirestoreIntegrationAccountStore(IntegrationAccountStoreProtocol):
    """Store de contas de integração usando Firestore.

    Estrutura no Firestore:
        integration_accounts/{account_id}

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: integration_accounts)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = ACCOUNTS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def find_active_accounts(
        self,
        tenant_id: str,
        platform: Platform,
    ) -> list[IntegrationAccount]:
        return await asyncio.to_thread(self._find_active_sync, tenant_id, platform)

    def _find_active_sync(self, tenant_id: str, platform: Platform) -> list[IntegrationAccount]:
        query = (
            self._db.collection(self._collection)
            .where(filter=FieldFilter("tenant_id", "==", tenant_id))
            .where(filter=FieldFilter("platform", "==", str(platform)))
            .where(filter=FieldFilter("is_active", "==", True))
        )
        try:
            snapshots = list(query.stream())
        except GoogleAPICallError as exc:
            logger.error(
                "account_query_error",
                extra={"platform": str(platform), "error": type(exc).__name__},
            )
            raise FirestoreUnavailableError(f"Erro ao consultar contas: {exc}") from exc

        accounts: list[IntegrationAccount] = []
        for snapshot in snapshots:
            data = snapshot.to_dict() or {}
            data.setdefault("id", snapshot.id)
            accounts.append(IntegrationAccount.from_firestore_dict(data))
        return accounts

    async def touch_last_sync(self, account_id: str, synced_at: datetime) -> None:
        await asyncio.to_thread(self._touch_last_sync_sync, account_id, synced_at)

    def _touch_last_sync_sync(self, account_id: str, synced_at: datetime) -> None:
        try:
            self._db.collection(self._collection).document(account_id).update(
                {"last_sync_at": synced_at}
            )
        except GoogleAPICallError as exc:
            raise FirestoreUnavailableError(f"Erro ao atualizar last_sync_at: {exc}") from exc
