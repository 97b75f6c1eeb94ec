"""Eventos canônicos produzidos pelos normalizers de plataforma.

Todo payload de provedor vira zero ou mais destes eventos. São imutáveis
e não carregam referências ao tenant: o escopo é dado pela
IntegrationAccount resolvida no roteador.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003 - usado em runtime nos dataclasses
from typing import Any

from app.domain.message import DeliveryStatus, MessageDirection, MessageType
from app.domain.platform import Platform  # noqa: TC001 - usado em runtime nos dataclasses


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """Mensagem extraída de um webhook de mensageria."""

    platform: Platform
    provider_message_id: str
    sender_id: str
    recipient_id: str
    message_type: MessageType
    content: str
    direction: MessageDirection = MessageDirection.INBOUND
    status: DeliveryStatus = DeliveryStatus.DELIVERED
    counterpart_name: str | None = None
    sent_at: datetime | None = None

    @property
    def counterpart_id(self) -> str:
        """Identificador do lado remoto (quem não é a conta do tenant)."""
        if self.direction == MessageDirection.OUTBOUND:
            return self.recipient_id
        return self.sender_id


@dataclass(frozen=True, slots=True)
class MessageStatusEvent:
    """Refinamento de status de entrega de uma mensagem já conhecida."""

    platform: Platform
    provider_message_id: str
    status: DeliveryStatus
    recipient_id: str | None = None


@dataclass(frozen=True, slots=True)
class ShipmentEvent:
    """Atualização de rastreio reportada por uma transportadora."""

    platform: Platform
    tracking_number: str
    provider_status: str | None
    estimated_delivery: datetime | None = None
    actual_delivery: datetime | None = None
    raw_payload: dict[str, Any] = field(default_factory=dict)


NormalizedEvent = MessageEvent | MessageStatusEvent | ShipmentEvent
