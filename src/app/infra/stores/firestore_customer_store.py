"""Firestore Customer Store — placeholders de contraparte.

O id do documento deriva de (tenant, identidade sintética), então a
criação concorrente do mesmo cliente converge para um único documento.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from google.api_core.exceptions import AlreadyExists, GoogleAPICallError

from app.domain.customer import Customer
from app.infra.stores.firestore_keys import document_id
from app.protocols.stores import CustomerStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from google.cloud.firestore import DocumentReference

logger = logging.getLogger(__name__)

CUSTOMERS_COLLECTION = "customers"


class FirestoreCustomerStore(CustomerStoreProtocol):
    """Store de clientes usando Firestore.

    Estrutura no Firestore:
        customers/{sha256(tenant_id, email)}
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = CUSTOMERS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def _doc_ref(self, tenant_id: str, identity: str) -> DocumentReference:
        return self._db.collection(self._collection).document(document_id(tenant_id, identity))

    async def find_by_platform_identity(
        self,
        tenant_id: str,
        identity: str,
    ) -> Customer | None:
        return await asyncio.to_thread(self._find_sync, tenant_id, identity)

    def _find_sync(self, tenant_id: str, identity: str) -> Customer | None:
        try:
            snapshot = self._doc_ref(tenant_id, identity).get()
        except GoogleAPICallError as exc:
            raise FirestoreUnavailableError(f"Erro ao buscar cliente: {exc}") from exc
        if not snapshot.exists:
            return None
        return Customer.from_firestore_dict(snapshot.to_dict() or {})

    async def create(
        self,
        tenant_id: str,
        *,
        identity: str,
        name: str,
        phone: str | None = None,
    ) -> Customer:
        return await asyncio.to_thread(self._create_sync, tenant_id, identity, name, phone)

    def _create_sync(
        self,
        tenant_id: str,
        identity: str,
        name: str,
        phone: str | None,
    ) -> Customer:
        doc_ref = self._doc_ref(tenant_id, identity)
        customer = Customer(
            id=doc_ref.id,
            tenant_id=tenant_id,
            name=name,
            email=identity,
            phone=phone,
        )
        try:
            doc_ref.create(customer.to_firestore_dict())
        except AlreadyExists:
            logger.debug("customer_create_race", extra={"customer_id": doc_ref.id})
            existing = self._find_sync(tenant_id, identity)
            if existing is None:
                raise FirestoreUnavailableError("Cliente sumiu após conflito de criação") from None
            return existing
        except GoogleAPICallError as exc:
            raise FirestoreUnavailableError(f"Erro ao criar cliente: {exc}") from exc

        logger.info("customer_placeholder_created", extra={"customer_id": customer.id})
        return customer
