"""Firestore Shipment Store — atualização transacional de remessas.

Estrutura no Firestore:
    shipments/{shipment_id}  (tenant_id, platform, tracking_number indexados)

Remessas são criadas pelo fluxo de despacho; aqui apenas a leitura e a
atualização read-check-write de status em transação.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.shipment import Shipment
from app.protocols.stores import ShipmentStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from google.cloud.firestore import DocumentReference, DocumentSnapshot, Transaction

    from app.domain.platform import Platform
    from app.protocols.stores import ShipmentMutator

logger = logging.getLogger(__name__)

SHIPMENTS_COLLECTION = "shipments"


def _snapshot_to_shipment(snapshot: DocumentSnapshot) -> Shipment:
    data = snapshot.to_dict() or {}
    data.setdefault("id", snapshot.id)
    return Shipment.from_firestore_dict(data)


class FirestoreShipmentStore(ShipmentStoreProtocol):
    """Store de remessas usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: shipments)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = SHIPMENTS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def _find_ref_sync(
        self,
        tenant_id: str,
        platform: str,
        tracking_number: str,
    ) -> DocumentReference | None:
        query = (
            self._db.collection(self._collection)
            .where(filter=FieldFilter("tenant_id", "==", tenant_id))
            .where(filter=FieldFilter("platform", "==", platform))
            .where(filter=FieldFilter("tracking_number", "==", tracking_number))
            .limit(1)
        )
        try:
            snapshots = list(query.stream())
        except GoogleAPICallError as exc:
            raise FirestoreUnavailableError(f"Erro ao consultar remessa: {exc}") from exc
        return snapshots[0].reference if snapshots else None

    async def get(
        self,
        tenant_id: str,
        platform: Platform,
        tracking_number: str,
    ) -> Shipment | None:
        return await asyncio.to_thread(self._get_sync, tenant_id, str(platform), tracking_number)

    def _get_sync(self, tenant_id: str, platform: str, tracking_number: str) -> Shipment | None:
        doc_ref = self._find_ref_sync(tenant_id, platform, tracking_number)
        if doc_ref is None:
            return None
        try:
            snapshot = doc_ref.get()
        except GoogleAPICallError as exc:
            raise FirestoreUnavailableError(f"Erro ao ler remessa: {exc}") from exc
        return _snapshot_to_shipment(snapshot) if snapshot.exists else None

    async def update_atomically(
        self,
        tenant_id: str,
        platform: Platform,
        tracking_number: str,
        mutate: ShipmentMutator,
    ) -> Shipment | None:
        return await asyncio.to_thread(
            self._update_sync,
            tenant_id,
            str(platform),
            tracking_number,
            mutate,
        )

    def _update_sync(
        self,
        tenant_id: str,
        platform: str,
        tracking_number: str,
        mutate: ShipmentMutator,
    ) -> Shipment | None:
        doc_ref = self._find_ref_sync(tenant_id, platform, tracking_number)
        if doc_ref is None:
            return None
        run = firestore.transactional(self._apply_in_transaction)
        try:
            updated = run(self._db.transaction(), doc_ref, mutate)
        except GoogleAPICallError as exc:
            logger.error(
                "shipment_update_error",
                extra={"doc_id": doc_ref.id, "error": type(exc).__name__},
            )
            raise FirestoreUnavailableError(f"Erro ao atualizar remessa: {exc}") from exc
        return updated

    @staticmethod
    def _apply_in_transaction(
        transaction: Transaction,
        doc_ref: DocumentReference,
        mutate: ShipmentMutator,
    ) -> Shipment | None:
        """Corpo da transação; reexecutado pelo SDK em caso de contenção."""
        snapshot = doc_ref.get(transaction=transaction)
        if not snapshot.exists:
            return None
        updated = mutate(_snapshot_to_shipment(snapshot))
        if updated is None:
            return None
        data = updated.to_webhook_update_dict()
        transaction.update(doc_ref, data)
        return updated
