"""Firestore Message Store — persistência idempotente de mensagens.

Estrutura no Firestore:
    messages/{sha256(tenant_id, platform, provider_message_id)}

Inserção via ``create()`` (falha com AlreadyExists se o documento existe),
refinamento de status dentro de transação.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from google.api_core.exceptions import AlreadyExists, GoogleAPICallError
from google.cloud import firestore

from app.domain.message import DeliveryStatus, Message
from app.infra.stores.firestore_keys import document_id
from app.protocols.stores import MessageStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from google.cloud.firestore import DocumentReference, Transaction

    from app.domain.platform import Platform
    from app.protocols.stores import StatusMutator

logger = logging.getLogger(__name__)

MESSAGES_COLLECTION = "messages"


class FirestoreMessageStore(MessageStoreProtocol):
    """Store de mensagens usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: messages)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = MESSAGES_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def _doc_ref(self, tenant_id: str, platform: str, provider_message_id: str) -> DocumentReference:
        doc_id = document_id(tenant_id, platform, provider_message_id)
        return self._db.collection(self._collection).document(doc_id)

    async def get(
        self,
        tenant_id: str,
        platform: Platform,
        provider_message_id: str,
    ) -> Message | None:
        return await asyncio.to_thread(self._get_sync, tenant_id, str(platform), provider_message_id)

    def _get_sync(self, tenant_id: str, platform: str, provider_message_id: str) -> Message | None:
        try:
            snapshot = self._doc_ref(tenant_id, platform, provider_message_id).get()
        except GoogleAPICallError as exc:
            raise FirestoreUnavailableError(f"Erro ao buscar mensagem: {exc}") from exc
        if not snapshot.exists:
            return None
        return Message.from_firestore_dict(snapshot.to_dict() or {})

    async def create_if_absent(self, message: Message) -> bool:
        return await asyncio.to_thread(self._create_sync, message)

    def _create_sync(self, message: Message) -> bool:
        doc_ref = self._doc_ref(*message.natural_key)
        try:
            doc_ref.create(message.to_firestore_dict())
        except AlreadyExists:
            return False
        except GoogleAPICallError as exc:
            logger.error(
                "message_create_error",
                extra={"doc_id": doc_ref.id, "error": type(exc).__name__},
            )
            raise FirestoreUnavailableError(f"Erro ao persistir mensagem: {exc}") from exc
        return True

    async def update_status(
        self,
        tenant_id: str,
        platform: Platform,
        provider_message_id: str,
        mutate: StatusMutator,
    ) -> DeliveryStatus | None:
        return await asyncio.to_thread(
            self._update_status_sync,
            tenant_id,
            str(platform),
            provider_message_id,
            mutate,
        )

    def _update_status_sync(
        self,
        tenant_id: str,
        platform: str,
        provider_message_id: str,
        mutate: StatusMutator,
    ) -> DeliveryStatus | None:
        doc_ref = self._doc_ref(tenant_id, platform, provider_message_id)
        run = firestore.transactional(self._apply_status_in_transaction)
        try:
            return run(self._db.transaction(), doc_ref, mutate)
        except GoogleAPICallError as exc:
            raise FirestoreUnavailableError(f"Erro ao atualizar status: {exc}") from exc

    @staticmethod
    def _apply_status_in_transaction(
        transaction: Transaction,
        doc_ref: DocumentReference,
        mutate: StatusMutator,
    ) -> DeliveryStatus | None:
        """Corpo da transação; reexecutado pelo SDK em caso de contenção."""
        snapshot = doc_ref.get(transaction=transaction)
        if not snapshot.exists:
            return None
        data: dict[str, Any] = snapshot.to_dict() or {}
        current = DeliveryStatus(data.get("status", DeliveryStatus.DELIVERED))
        new_status = mutate(current)
        if new_status is None:
            return None
        transaction.update(
            doc_ref,
            {"status": str(new_status), "updated_at": datetime.now(UTC)},
        )
        return new_status
