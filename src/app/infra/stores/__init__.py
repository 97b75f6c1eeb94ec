"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - memory_stores: Stores em memória para desenvolvimento/testes
    - firestore_account_store: Contas de integração (Firestore)
    - firestore_customer_store: Placeholders de cliente (Firestore)
    - firestore_message_store: Mensagens idempotentes (Firestore)
    - firestore_shipment_store: Remessas com update transacional (Firestore)
    - firestore_integration_log_store: Auditoria append-only (Firestore)
"""

from __future__ import annotations

from app.infra.stores.memory_stores import (
    MemoryCustomerStore,
    MemoryIntegrationAccountStore,
    MemoryIntegrationLogStore,
    MemoryMessageStore,
    MemoryShipmentStore,
)

__all__ = [
    # Memory (dev/test)
    "MemoryCustomerStore",
    "MemoryIntegrationAccountStore",
    "MemoryIntegrationLogStore",
    "MemoryMessageStore",
    "MemoryShipmentStore",
]
