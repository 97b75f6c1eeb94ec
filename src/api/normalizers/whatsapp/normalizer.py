"""Normalizer WhatsApp — converte payloads para eventos canônicos."""

from __future__ import annotations

import logging
from typing import Any

from api.normalizers.meta_shared import describe_content, is_valid_message_data
from api.normalizers.timestamps import parse_epoch
from app.domain.message import map_delivery_status, map_message_type
from app.domain.platform import Platform
from app.protocols.events import MessageEvent, MessageStatusEvent, NormalizedEvent

from .extractor import extract_payload_messages, extract_payload_statuses

logger = logging.getLogger(__name__)


def normalize_message(data: dict[str, Any]) -> MessageEvent | None:
    """Converte uma mensagem intermediária em MessageEvent."""
    if not is_valid_message_data(data):
        return None
    raw_type = data.get("message_type")
    message_type = map_message_type(raw_type)
    return MessageEvent(
        platform=Platform.WHATSAPP_BUSINESS,
        provider_message_id=data["message_id"],
        sender_id=data["sender_id"],
        recipient_id=data["recipient_id"],
        message_type=message_type,
        content=describe_content(
            message_type,
            raw_type=raw_type,
            text=data.get("text"),
            caption=data.get("caption"),
            filename=data.get("filename"),
        ),
        counterpart_name=data.get("whatsapp_name"),
        sent_at=parse_epoch(data.get("timestamp")),
    )


def normalize_status(data: dict[str, Any]) -> MessageStatusEvent | None:
    status = map_delivery_status(data.get("status"))
    if status is None:
        return None
    recipient = data.get("recipient_id")
    return MessageStatusEvent(
        platform=Platform.WHATSAPP_BUSINESS,
        provider_message_id=data["message_id"],
        status=status,
        recipient_id=str(recipient) if recipient else None,
    )


def normalize_messages(payload: Any) -> list[NormalizedEvent]:
    """Normaliza todas as mensagens e statuses de um webhook WhatsApp.

    Raises:
        PayloadParseError: Se o envelope do webhook for inválido
    """
    events: list[NormalizedEvent] = []
    for data in extract_payload_messages(payload):
        event = normalize_message(data)
        if event is not None:
            events.append(event)
    for data in extract_payload_statuses(payload):
        status_event = normalize_status(data)
        if status_event is None:
            logger.info("whatsapp_status_ignored", extra={"status": data.get("status")})
            continue
        events.append(status_event)
    return events


class WhatsAppNormalizer:
    """Adapter de plataforma para WhatsApp Business."""

    platform = Platform.WHATSAPP_BUSINESS

    def parse(self, payload: Any) -> list[NormalizedEvent]:
        return normalize_messages(payload)
