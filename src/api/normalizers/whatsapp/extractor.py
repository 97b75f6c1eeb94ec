"""Extrator de payloads WhatsApp Business API.

Responsabilidades:
- Percorrer entry[].changes[] do webhook
- Converter mensagens e statuses em estrutura intermediária
- Descartar individualmente sub-estruturas malformadas

Não faz mapeamento de domínio - apenas extração estrutural.
"""

from __future__ import annotations

import logging
from typing import Any

from api.normalizers.meta_shared import dict_items, extract_entries

from ._extraction_helpers import (
    extract_contact_name,
    extract_media_message,
    extract_phone_number_id,
    extract_text_message,
)

logger = logging.getLogger(__name__)

WEBHOOK_OBJECT = "whatsapp_business_account"
MESSAGES_FIELD = "messages"
MEDIA_TYPES = frozenset({"image", "video", "audio", "document"})
UNKNOWN_RECIPIENT = "unknown"


def _iter_message_values(payload: Any) -> list[dict[str, Any]]:
    """Retorna os blocos ``value`` de todos os changes de mensagens."""
    values: list[dict[str, Any]] = []
    for index, entry in enumerate(extract_entries(payload, WEBHOOK_OBJECT)):
        if not isinstance(entry, dict):
            logger.warning("whatsapp_entry_skipped", extra={"entry_index": index})
            continue
        for change in dict_items(entry.get("changes")):
            if change.get("field") != MESSAGES_FIELD:
                continue
            value = change.get("value")
            if isinstance(value, dict):
                values.append(value)
    return values


def _extract_message(
    msg: dict[str, Any],
    *,
    recipient_id: str,
    contact_name: str | None,
) -> dict[str, Any] | None:
    message_id = msg.get("id")
    sender = msg.get("from")
    if not message_id or not sender:
        return None

    message_type = msg.get("type") if isinstance(msg.get("type"), str) else None
    text = caption = filename = None
    if message_type == "text":
        text = extract_text_message(msg)
    elif message_type in MEDIA_TYPES:
        caption, filename = extract_media_message(msg, message_type)
    elif message_type:
        logger.info("unsupported_message_type_received", extra={"message_type": message_type})

    return {
        "message_id": str(message_id),
        "sender_id": str(sender),
        "recipient_id": recipient_id,
        "timestamp": msg.get("timestamp"),
        "message_type": message_type,
        "whatsapp_name": contact_name,
        "text": text,
        "caption": caption,
        "filename": filename,
    }


def extract_payload_messages(payload: Any) -> list[dict[str, Any]]:
    """Extrai mensagens do payload bruto para estrutura intermediária.

    Raises:
        PayloadParseError: Se o envelope do webhook for inválido
    """
    messages: list[dict[str, Any]] = []
    for value in _iter_message_values(payload):
        recipient_id = extract_phone_number_id(value) or UNKNOWN_RECIPIENT
        contact_name = extract_contact_name(value)
        for msg in dict_items(value.get("messages")):
            extracted = _extract_message(
                msg,
                recipient_id=recipient_id,
                contact_name=contact_name,
            )
            if extracted is None:
                logger.warning("whatsapp_message_skipped", extra={"reason": "missing_ids"})
                continue
            messages.append(extracted)
    return messages


def extract_payload_statuses(payload: Any) -> list[dict[str, Any]]:
    """Extrai atualizações de status (sent/delivered/read/failed).

    Raises:
        PayloadParseError: Se o envelope do webhook for inválido
    """
    statuses: list[dict[str, Any]] = []
    for value in _iter_message_values(payload):
        for status in dict_items(value.get("statuses")):
            message_id = status.get("id")
            if not message_id:
                continue
            statuses.append(
                {
                    "message_id": str(message_id),
                    "status": status.get("status"),
                    "recipient_id": status.get("recipient_id"),
                }
            )
    return statuses
