"""Normalizer Facebook — converte payloads Messenger para eventos canônicos."""

from __future__ import annotations

from typing import Any

from api.normalizers.meta_shared import describe_content, is_valid_message_data
from api.normalizers.timestamps import parse_epoch
from app.domain.message import (
    DeliveryStatus,
    MessageDirection,
    map_delivery_status,
    map_message_type,
)
from app.domain.platform import Platform
from app.protocols.events import MessageEvent, MessageStatusEvent, NormalizedEvent

from .extractor import extract_payload_events

# Tipos de anexo do Messenger → vocabulário comum de mensageria
_ATTACHMENT_TYPES = {"file": "document"}


def normalize_message(data: dict[str, Any]) -> MessageEvent | None:
    if not is_valid_message_data(data):
        return None
    attachment_type = data.get("attachment_type")
    raw_type = _ATTACHMENT_TYPES.get(attachment_type, attachment_type) if attachment_type else "text"
    message_type = map_message_type(raw_type)

    is_echo = bool(data.get("is_echo"))
    return MessageEvent(
        platform=Platform.FACEBOOK_MARKETPLACE,
        provider_message_id=data["message_id"],
        sender_id=data["sender_id"],
        recipient_id=data["recipient_id"],
        message_type=message_type,
        content=describe_content(
            message_type,
            raw_type=raw_type,
            text=data.get("text"),
            filename=data.get("filename"),
        ),
        direction=MessageDirection.OUTBOUND if is_echo else MessageDirection.INBOUND,
        # Echo da página: entrega confirmada depois via evento delivery
        status=DeliveryStatus.SENT if is_echo else DeliveryStatus.DELIVERED,
        sent_at=parse_epoch(data.get("timestamp"), milliseconds=True),
    )


def normalize_messages(payload: Any) -> list[NormalizedEvent]:
    """Normaliza mensagens e confirmações de entrega de um webhook Facebook.

    Raises:
        PayloadParseError: Se o envelope do webhook for inválido
    """
    messages, statuses = extract_payload_events(payload)
    events: list[NormalizedEvent] = []
    for data in messages:
        event = normalize_message(data)
        if event is not None:
            events.append(event)
    for data in statuses:
        status = map_delivery_status(data["status"])
        if status is None:
            continue
        events.append(
            MessageStatusEvent(
                platform=Platform.FACEBOOK_MARKETPLACE,
                provider_message_id=data["message_id"],
                status=status,
                recipient_id=data.get("recipient_id"),
            )
        )
    return events


class FacebookNormalizer:
    """Adapter de plataforma para o Messenger do Facebook Marketplace."""

    platform = Platform.FACEBOOK_MARKETPLACE

    def parse(self, payload: Any) -> list[NormalizedEvent]:
        return normalize_messages(payload)
