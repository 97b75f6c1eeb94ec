"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
Cada store serializa as operações de leitura-verificação-escrita com um
``asyncio.Lock``, reproduzindo a atomicidade das transações do Firestore.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.customer import Customer
from app.protocols.stores import (
    CustomerStoreProtocol,
    IntegrationAccountStoreProtocol,
    IntegrationLogStoreProtocol,
    MessageStoreProtocol,
    ShipmentStoreProtocol,
)

if TYPE_CHECKING:
    from app.domain.integration import IntegrationAccount, IntegrationLog
    from app.domain.message import DeliveryStatus, Message
    from app.domain.platform import Platform
    from app.domain.shipment import Shipment
    from app.protocols.stores import ShipmentMutator, StatusMutator


class MemoryIntegrationAccountStore(IntegrationAccountStoreProtocol):
    """Contas de integração em memória — apenas para dev/test."""

    def __init__(self, accounts: list[IntegrationAccount] | None = None) -> None:
        self._accounts: dict[str, IntegrationAccount] = {}
        for account in accounts or []:
            self.add(account)

    def add(self, account: IntegrationAccount) -> None:
        """Registra conta (substitui a existente com o mesmo id)."""
        self._accounts[account.id] = account

    def get(self, account_id: str) -> IntegrationAccount | None:
        return self._accounts.get(account_id)

    async def find_active_accounts(
        self,
        tenant_id: str,
        platform: Platform,
    ) -> list[IntegrationAccount]:
        return [
            account
            for account in self._accounts.values()
            if account.tenant_id == tenant_id
            and account.platform == platform
            and account.is_active
        ]

    async def touch_last_sync(self, account_id: str, synced_at: datetime) -> None:
        account = self._accounts.get(account_id)
        if account is not None:
            self._accounts[account_id] = account.model_copy(update={"last_sync_at": synced_at})


class MemoryCustomerStore(CustomerStoreProtocol):
    """Clientes em memória, indexados por (tenant, identidade sintética)."""

    def __init__(self) -> None:
        self._customers: dict[tuple[str, str], Customer] = {}
        self._lock = asyncio.Lock()

    async def find_by_platform_identity(
        self,
        tenant_id: str,
        identity: str,
    ) -> Customer | None:
        return self._customers.get((tenant_id, identity))

    async def create(
        self,
        tenant_id: str,
        *,
        identity: str,
        name: str,
        phone: str | None = None,
    ) -> Customer:
        async with self._lock:
            existing = self._customers.get((tenant_id, identity))
            if existing is not None:
                return existing
            customer = Customer(
                id=uuid.uuid4().hex,
                tenant_id=tenant_id,
                name=name,
                email=identity,
                phone=phone,
            )
            self._customers[(tenant_id, identity)] = customer
            return customer

    def get_customers(self) -> list[Customer]:
        """Retorna todos os clientes (apenas para testes)."""
        return list(self._customers.values())


class MemoryMessageStore(MessageStoreProtocol):
    """Mensagens em memória, únicas por chave natural."""

    def __init__(self) -> None:
        self._messages: dict[tuple[str, str, str], Message] = {}
        self._lock = asyncio.Lock()

    async def get(
        self,
        tenant_id: str,
        platform: Platform,
        provider_message_id: str,
    ) -> Message | None:
        return self._messages.get((tenant_id, str(platform), provider_message_id))

    async def create_if_absent(self, message: Message) -> bool:
        async with self._lock:
            if message.natural_key in self._messages:
                return False
            self._messages[message.natural_key] = message
            return True

    async def update_status(
        self,
        tenant_id: str,
        platform: Platform,
        provider_message_id: str,
        mutate: StatusMutator,
    ) -> DeliveryStatus | None:
        key = (tenant_id, str(platform), provider_message_id)
        async with self._lock:
            message = self._messages.get(key)
            if message is None:
                return None
            new_status = mutate(message.status)
            if new_status is None:
                return None
            self._messages[key] = message.model_copy(
                update={"status": new_status, "updated_at": datetime.now(UTC)},
            )
            return new_status

    def get_messages(self) -> list[Message]:
        """Retorna todas as mensagens (apenas para testes)."""
        return list(self._messages.values())


class MemoryShipmentStore(ShipmentStoreProtocol):
    """Remessas em memória; criadas via ``seed`` (despacho fica fora do core)."""

    def __init__(self) -> None:
        self._shipments: dict[tuple[str, str, str], Shipment] = {}
        self._lock = asyncio.Lock()
        self.write_count = 0

    def seed(self, shipment: Shipment) -> None:
        key = (shipment.tenant_id, str(shipment.platform), shipment.tracking_number)
        self._shipments[key] = shipment

    async def get(
        self,
        tenant_id: str,
        platform: Platform,
        tracking_number: str,
    ) -> Shipment | None:
        return self._shipments.get((tenant_id, str(platform), tracking_number))

    async def update_atomically(
        self,
        tenant_id: str,
        platform: Platform,
        tracking_number: str,
        mutate: ShipmentMutator,
    ) -> Shipment | None:
        key = (tenant_id, str(platform), tracking_number)
        async with self._lock:
            current = self._shipments.get(key)
            if current is None:
                return None
            updated = mutate(current)
            if updated is None:
                return None
            self._shipments[key] = updated
            self.write_count += 1
            return updated


class MemoryIntegrationLogStore(IntegrationLogStoreProtocol):
    """Store de auditoria de integrações em memória — apenas para dev/test."""

    def __init__(self, max_records: int = 10000) -> None:
        self._records: list[IntegrationLog] = []
        self._max_records = max_records

    async def append(self, record: IntegrationLog) -> None:
        self._records.append(record)
        # Limita tamanho para evitar memory leak em dev
        if len(self._records) > self._max_records:
            self._records = self._records[-self._max_records :]

    def get_records(self) -> list[IntegrationLog]:
        """Retorna todos os registros (apenas para testes)."""
        return list(self._records)
