"""Camada de persistência canônica — upserts idempotentes por tenant.

Mensagens: chave (tenant, plataforma, id do provedor); uma entrega
repetida é no-op. Remessas: chave (tenant, transportadora, tracking
number); status só avança (ver ``is_progress_or_equal``).

Erros de store não tratados aqui (PersistenceError) propagam para o
roteador, que registra a falha no IntegrationLog.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from app.domain.customer import placeholder_name, synthetic_identity
from app.domain.message import DeliveryStatus, Message, is_delivery_progress
from app.domain.platform import Platform
from app.domain.shipment_status import is_progress_or_equal, map_courier_status
from config.logging import log_fallback

if TYPE_CHECKING:
    from app.domain.integration import IntegrationAccount
    from app.domain.shipment import Shipment
    from app.domain.shipment_status import ShipmentStatus
    from app.protocols.events import MessageEvent, MessageStatusEvent, ShipmentEvent
    from app.protocols.stores import (
        CustomerStoreProtocol,
        MessageStoreProtocol,
        ShipmentStoreProtocol,
    )

logger = logging.getLogger(__name__)


class MessageUpsertOutcome(StrEnum):
    CREATED = "CREATED"
    DUPLICATE = "DUPLICATE"


class StatusUpdateOutcome(StrEnum):
    UPDATED = "UPDATED"
    SKIPPED = "SKIPPED"


class ShipmentUpsertOutcome(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    UNMAPPED_STATUS = "UNMAPPED_STATUS"
    REGRESSION_REJECTED = "REGRESSION_REJECTED"
    UNCHANGED = "UNCHANGED"
    UPDATED = "UPDATED"


def plan_shipment_update(
    shipment: Shipment,
    incoming: ShipmentStatus,
    event: ShipmentEvent,
    now: datetime,
) -> tuple[ShipmentUpsertOutcome, Shipment | None]:
    """Decide a transição de uma remessa para o status recebido.

    Returns:
        (outcome, nova versão) — a nova versão só existe para UPDATED.
    """
    if not is_progress_or_equal(shipment.status, incoming):
        return ShipmentUpsertOutcome.REGRESSION_REJECTED, None

    changes: dict[str, object] = {}
    if incoming != shipment.status:
        changes["status"] = incoming
    if event.estimated_delivery is not None and event.estimated_delivery != shipment.estimated_delivery:
        changes["estimated_delivery"] = event.estimated_delivery
    if event.actual_delivery is not None and event.actual_delivery != shipment.actual_delivery:
        changes["actual_delivery"] = event.actual_delivery
    if not changes:
        return ShipmentUpsertOutcome.UNCHANGED, None

    # Snapshot substitui o anterior (sem histórico acumulado)
    changes["metadata"] = {
        **shipment.metadata,
        "last_webhook_at": now.isoformat(),
        "webhook_payload": event.raw_payload,
    }
    changes["last_updated"] = now
    return ShipmentUpsertOutcome.UPDATED, shipment.model_copy(update=changes)


class CanonicalPersistence:
    """Aplica eventos normalizados aos stores de mensagens e remessas."""

    def __init__(
        self,
        *,
        customer_store: CustomerStoreProtocol,
        message_store: MessageStoreProtocol,
        shipment_store: ShipmentStoreProtocol,
    ) -> None:
        self._customers = customer_store
        self._messages = message_store
        self._shipments = shipment_store

    async def upsert_message(
        self,
        account: IntegrationAccount,
        event: MessageEvent,
    ) -> MessageUpsertOutcome:
        tenant_id = account.tenant_id
        existing = await self._messages.get(tenant_id, event.platform, event.provider_message_id)
        if existing is not None:
            logger.debug(
                "message_duplicate",
                extra={"platform": str(event.platform), "account_id": account.id},
            )
            return MessageUpsertOutcome.DUPLICATE

        customer_id = await self._resolve_customer_id(account, event)
        message = Message(
            tenant_id=tenant_id,
            integration_account_id=account.id,
            platform=event.platform,
            provider_message_id=event.provider_message_id,
            direction=event.direction,
            sender_id=event.sender_id,
            recipient_id=event.recipient_id,
            message_type=event.message_type,
            content=event.content,
            status=event.status,
            customer_id=customer_id,
            sent_at=event.sent_at,
        )
        # Corrida entre entregas concorrentes: o segundo create vira duplicata
        if not await self._messages.create_if_absent(message):
            return MessageUpsertOutcome.DUPLICATE
        return MessageUpsertOutcome.CREATED

    async def _resolve_customer_id(
        self,
        account: IntegrationAccount,
        event: MessageEvent,
    ) -> str | None:
        """Resolve ou cria o cliente da contraparte (best-effort).

        Qualquer falha degrada para mensagem sem cliente vinculado.
        """
        counterpart = event.counterpart_id
        if not counterpart:
            return None
        try:
            identity = synthetic_identity(event.platform, counterpart)
            customer = await self._customers.find_by_platform_identity(account.tenant_id, identity)
            if customer is None:
                phone = (
                    counterpart.lstrip("+")
                    if event.platform == Platform.WHATSAPP_BUSINESS
                    else None
                )
                customer = await self._customers.create(
                    account.tenant_id,
                    identity=identity,
                    name=placeholder_name(event.platform, counterpart, event.counterpart_name),
                    phone=phone,
                )
        except Exception as exc:
            log_fallback(
                logger,
                "customer_resolution",
                reason=type(exc).__name__,
                platform=str(event.platform),
                account_id=account.id,
            )
            return None
        return customer.id

    async def apply_message_status(
        self,
        account: IntegrationAccount,
        event: MessageStatusEvent,
    ) -> StatusUpdateOutcome:
        incoming = event.status

        def mutate(current: DeliveryStatus) -> DeliveryStatus | None:
            return incoming if is_delivery_progress(current, incoming) else None

        written = await self._messages.update_status(
            account.tenant_id, event.platform, event.provider_message_id, mutate
        )
        if written is None:
            return StatusUpdateOutcome.SKIPPED
        return StatusUpdateOutcome.UPDATED

    async def upsert_shipment(
        self,
        account: IntegrationAccount,
        event: ShipmentEvent,
    ) -> ShipmentUpsertOutcome:
        tenant_id = account.tenant_id
        extra = {"platform": str(event.platform), "account_id": account.id}

        incoming = map_courier_status(event.provider_status)
        if incoming is None:
            existing = await self._shipments.get(tenant_id, event.platform, event.tracking_number)
            outcome = (
                ShipmentUpsertOutcome.NOT_FOUND
                if existing is None
                else ShipmentUpsertOutcome.UNMAPPED_STATUS
            )
            logger.info("shipment_status_unmapped", extra={**extra, "outcome": str(outcome)})
            return outcome

        now = datetime.now(UTC)
        # Última decisão vence (transação pode reexecutar o mutate)
        decision = [ShipmentUpsertOutcome.NOT_FOUND]

        def mutate(shipment: Shipment) -> Shipment | None:
            outcome, updated = plan_shipment_update(shipment, incoming, event, now)
            decision[0] = outcome
            return updated

        await self._shipments.update_atomically(tenant_id, event.platform, event.tracking_number, mutate)
        outcome = decision[0]

        if outcome == ShipmentUpsertOutcome.NOT_FOUND:
            logger.info("shipment_not_found", extra=extra)
        elif outcome == ShipmentUpsertOutcome.REGRESSION_REJECTED:
            logger.info(
                "shipment_regression_rejected",
                extra={**extra, "incoming_status": str(incoming)},
            )
        return outcome
