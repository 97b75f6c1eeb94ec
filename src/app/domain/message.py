"""Message — unidade de comunicação normalizada (inbound/outbound).

Mensagens são fatos imutáveis. O único campo refinado após a criação
é o status de entrega, e apenas para frente (SENT → DELIVERED → READ).
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from app.domain.platform import Platform  # noqa: TC001 - usado em runtime pelo pydantic


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MessageDirection(StrEnum):
    INBOUND = "INBOUND"
    OUTBOUND = "OUTBOUND"


class MessageType(StrEnum):
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    DOCUMENT = "DOCUMENT"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"


class DeliveryStatus(StrEnum):
    PENDING = "PENDING"
    SENT = "SENT"
    DELIVERED = "DELIVERED"
    READ = "READ"
    FAILED = "FAILED"


# Vocabulário dos provedores de mensageria → tipo canônico
MESSAGE_TYPE_MAP: dict[str, MessageType] = {
    "text": MessageType.TEXT,
    "image": MessageType.IMAGE,
    "document": MessageType.DOCUMENT,
    "video": MessageType.VIDEO,
    "audio": MessageType.AUDIO,
}

# Status reportados pelos provedores → status de entrega canônico
DELIVERY_STATUS_MAP: dict[str, DeliveryStatus] = {
    "sent": DeliveryStatus.SENT,
    "delivered": DeliveryStatus.DELIVERED,
    "read": DeliveryStatus.READ,
    "failed": DeliveryStatus.FAILED,
}

_DELIVERY_RANK: dict[DeliveryStatus, int] = {
    DeliveryStatus.PENDING: 0,
    DeliveryStatus.SENT: 1,
    DeliveryStatus.DELIVERED: 2,
    DeliveryStatus.READ: 3,
}


def map_message_type(raw_type: object) -> MessageType:
    """Traduz tipo do provedor; qualquer valor desconhecido vira TEXT."""
    if not isinstance(raw_type, str):
        return MessageType.TEXT
    return MESSAGE_TYPE_MAP.get(raw_type.lower(), MessageType.TEXT)


def map_delivery_status(raw_status: object) -> DeliveryStatus | None:
    if not isinstance(raw_status, str):
        return None
    return DELIVERY_STATUS_MAP.get(raw_status.lower())


def is_delivery_progress(current: DeliveryStatus, incoming: DeliveryStatus) -> bool:
    """Retorna True se ``incoming`` refina ``current`` sem regredir.

    FAILED é terminal: nunca é sobrescrito, mas pode substituir
    qualquer status ainda não lido.
    """
    if current == incoming or current == DeliveryStatus.FAILED:
        return False
    if incoming == DeliveryStatus.FAILED:
        return current != DeliveryStatus.READ
    return _DELIVERY_RANK[incoming] > _DELIVERY_RANK[current]


class Message(BaseModel):
    """Mensagem persistida, única por (tenant, plataforma, id do provedor)."""

    tenant_id: str
    integration_account_id: str
    platform: Platform
    provider_message_id: str = Field(..., min_length=1)
    direction: MessageDirection = MessageDirection.INBOUND
    sender_id: str
    recipient_id: str
    message_type: MessageType = MessageType.TEXT
    content: str = ""
    status: DeliveryStatus = DeliveryStatus.DELIVERED
    customer_id: str | None = None
    sent_at: datetime | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime | None = None

    @property
    def natural_key(self) -> tuple[str, str, str]:
        return (self.tenant_id, str(self.platform), self.provider_message_id)

    def to_firestore_dict(self) -> dict[str, Any]:
        """Converte para dict compatível com Firestore (sem None)."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_firestore_dict(cls, data: dict[str, Any]) -> Message:
        return cls(**data)
