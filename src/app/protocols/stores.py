"""Protocolos de domínio para os stores de persistência.

Interfaces leves (ABCs) dependidas pela camada de aplicação. As chaves
naturais (id do provedor, tracking number) são garantidas pelo store:
duas gravações concorrentes da mesma chave resultam em um único registro.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from app.domain.customer import Customer
    from app.domain.integration import IntegrationAccount, IntegrationLog
    from app.domain.message import DeliveryStatus, Message
    from app.domain.platform import Platform
    from app.domain.shipment import Shipment

    ShipmentMutator = Callable[[Shipment], Shipment | None]
    StatusMutator = Callable[[DeliveryStatus], DeliveryStatus | None]


class IntegrationAccountStoreProtocol(ABC):
    """Leitura de contas de integração (gerenciadas fora do core)."""

    @abstractmethod
    async def find_active_accounts(
        self,
        tenant_id: str,
        platform: Platform,
    ) -> list[IntegrationAccount]:
        """Retorna todas as contas ativas de (tenant, plataforma)."""

    @abstractmethod
    async def touch_last_sync(self, account_id: str, synced_at: datetime) -> None:
        """Atualiza ``last_sync_at`` da conta."""


class CustomerStoreProtocol(ABC):
    """Resolução e criação de contrapartes."""

    @abstractmethod
    async def find_by_platform_identity(
        self,
        tenant_id: str,
        identity: str,
    ) -> Customer | None:
        """Busca cliente pelo identificador sintético dentro do tenant."""

    @abstractmethod
    async def create(
        self,
        tenant_id: str,
        *,
        identity: str,
        name: str,
        phone: str | None = None,
    ) -> Customer:
        """Cria placeholder; se a identidade já existir, retorna o existente."""


class MessageStoreProtocol(ABC):
    """Persistência idempotente de mensagens."""

    @abstractmethod
    async def get(
        self,
        tenant_id: str,
        platform: Platform,
        provider_message_id: str,
    ) -> Message | None:
        """Busca mensagem pela chave natural."""

    @abstractmethod
    async def create_if_absent(self, message: Message) -> bool:
        """Insere atomicamente.

        Returns:
            True se inseriu; False se a chave natural já existia.
        """

    @abstractmethod
    async def update_status(
        self,
        tenant_id: str,
        platform: Platform,
        provider_message_id: str,
        mutate: StatusMutator,
    ) -> DeliveryStatus | None:
        """Aplica ``mutate`` ao status atual de forma atômica.

        ``mutate`` recebe o status armazenado e retorna o novo status ou
        None para manter. Retorna o status gravado, ou None se nada mudou
        ou a mensagem não existe.
        """


class ShipmentStoreProtocol(ABC):
    """Persistência de remessas (somente atualização)."""

    @abstractmethod
    async def get(
        self,
        tenant_id: str,
        platform: Platform,
        tracking_number: str,
    ) -> Shipment | None:
        """Busca remessa pela chave natural."""

    @abstractmethod
    async def update_atomically(
        self,
        tenant_id: str,
        platform: Platform,
        tracking_number: str,
        mutate: ShipmentMutator,
    ) -> Shipment | None:
        """Lê, aplica ``mutate`` e grava dentro de uma transação.

        ``mutate`` retorna a nova versão ou None para não gravar.
        Retorna a versão gravada, ou None quando nada foi gravado.
        """


class IntegrationLogStoreProtocol(ABC):
    """Store append-only de auditoria de integrações."""

    @abstractmethod
    async def append(self, record: IntegrationLog) -> None:
        """Acrescenta um registro; nunca atualiza ou remove."""
