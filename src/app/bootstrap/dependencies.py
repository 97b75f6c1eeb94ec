"""Factories de stores e do use case de webhooks.

Centraliza a criação das implementações concretas conforme
STORAGE_BACKEND (memory para dev/test, firestore para staging/production).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.normalizers import build_normalizer_registry
from app.infra.stores import (
    MemoryCustomerStore,
    MemoryIntegrationAccountStore,
    MemoryIntegrationLogStore,
    MemoryMessageStore,
    MemoryShipmentStore,
)
from app.services import CanonicalPersistence, IntegrationLogger, TenantResolver
from app.use_cases.webhooks import ProcessWebhookUseCase
from config.settings import get_base_settings, get_storage_settings

if TYPE_CHECKING:
    from app.protocols.stores import (
        CustomerStoreProtocol,
        IntegrationAccountStoreProtocol,
        IntegrationLogStoreProtocol,
        MessageStoreProtocol,
        ShipmentStoreProtocol,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoreBundle:
    """Conjunto de stores consumidos pelo roteador de webhooks."""

    accounts: IntegrationAccountStoreProtocol
    customers: CustomerStoreProtocol
    messages: MessageStoreProtocol
    shipments: ShipmentStoreProtocol
    integration_logs: IntegrationLogStoreProtocol


def create_memory_stores() -> StoreBundle:
    """Stores em memória (dev/test)."""
    return StoreBundle(
        accounts=MemoryIntegrationAccountStore(),
        customers=MemoryCustomerStore(),
        messages=MemoryMessageStore(),
        shipments=MemoryShipmentStore(),
        integration_logs=MemoryIntegrationLogStore(),
    )


def create_firestore_stores() -> StoreBundle:
    """Stores Firestore com collections vindas de FirestoreSettings."""
    # Import local: SDK do Firestore só é carregado com backend firestore
    from app.bootstrap.clients import create_firestore_client
    from app.infra.stores.firestore_account_store import FirestoreIntegrationAccountStore
    from app.infra.stores.firestore_customer_store import FirestoreCustomerStore
    from app.infra.stores.firestore_integration_log_store import FirestoreIntegrationLogStore
    from app.infra.stores.firestore_message_store import FirestoreMessageStore
    from app.infra.stores.firestore_shipment_store import FirestoreShipmentStore
    from config.settings import get_firestore_settings

    settings = get_firestore_settings()
    client = create_firestore_client()
    return StoreBundle(
        accounts=FirestoreIntegrationAccountStore(client, settings.collection_accounts),
        customers=FirestoreCustomerStore(client, settings.collection_customers),
        messages=FirestoreMessageStore(client, settings.collection_messages),
        shipments=FirestoreShipmentStore(client, settings.collection_shipments),
        integration_logs=FirestoreIntegrationLogStore(
            client, settings.collection_integration_logs
        ),
    )


def create_stores(backend: str | None = None) -> StoreBundle:
    """Cria stores baseado na configuração.

    Raises:
        ValueError: Se o backend for inválido
    """
    selected = (backend or get_storage_settings().backend).lower()

    if selected == "firestore":
        stores = create_firestore_stores()
    elif selected == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        stores = create_memory_stores()
    else:
        msg = f"STORAGE_BACKEND inválido: {selected}"
        raise ValueError(msg)

    logger.info("stores_created", extra={"backend": selected})
    return stores


def create_webhook_use_case(stores: StoreBundle) -> ProcessWebhookUseCase:
    """Conecta normalizers, resolver, persistência e logger ao roteador."""
    return ProcessWebhookUseCase(
        normalizers=build_normalizer_registry(),
        tenant_resolver=TenantResolver(stores.accounts),
        persistence=CanonicalPersistence(
            customer_store=stores.customers,
            message_store=stores.messages,
            shipment_store=stores.shipments,
        ),
        integration_logger=IntegrationLogger(stores.integration_logs),
        account_store=stores.accounts,
    )
