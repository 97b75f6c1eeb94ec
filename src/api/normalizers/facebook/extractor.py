"""Extrator de payloads Facebook Messenger API.

Estrutura do webhook Facebook:
- entry[].messaging[] (ou entry[].standby[] quando a página não é
  a dona da conversa no handover protocol)

Eventos tratados:
- message (text, attachments, echo)
- delivery (mids entregues)

Demais eventos (postback, read, optin, referral) são ignorados.
"""

from __future__ import annotations

import logging
from typing import Any

from api.normalizers.meta_shared import dict_items, extract_entries

logger = logging.getLogger(__name__)

WEBHOOK_OBJECT = "page"
UNKNOWN_PARTY = "unknown"


def _party_id(event: dict[str, Any], key: str) -> str | None:
    party = event.get(key)
    if not isinstance(party, dict):
        return None
    party_id = party.get("id")
    return str(party_id) if party_id else None


def _first_attachment(message: dict[str, Any]) -> dict[str, Any] | None:
    attachments = dict_items(message.get("attachments"))
    return attachments[0] if attachments else None


def _extract_message(event: dict[str, Any]) -> dict[str, Any] | None:
    message = event.get("message")
    if not isinstance(message, dict):
        return None
    message_id = message.get("mid") or event.get("id")
    sender_id = _party_id(event, "sender")
    if not message_id or not sender_id:
        return None

    attachment = _first_attachment(message)
    attachment_type = attachment.get("type") if attachment else None
    attachment_payload = (attachment or {}).get("payload")
    filename = None
    if isinstance(attachment_payload, dict):
        filename = attachment_payload.get("name") or attachment_payload.get("title")

    return {
        "message_id": str(message_id),
        "sender_id": sender_id,
        "recipient_id": _party_id(event, "recipient") or UNKNOWN_PARTY,
        "timestamp": event.get("timestamp"),
        "is_echo": bool(message.get("is_echo")),
        "text": message.get("text") if isinstance(message.get("text"), str) else None,
        "attachment_type": attachment_type if isinstance(attachment_type, str) else None,
        "filename": filename if isinstance(filename, str) else None,
    }


def _extract_delivery(event: dict[str, Any]) -> list[dict[str, Any]]:
    delivery = event.get("delivery")
    if not isinstance(delivery, dict):
        return []
    mids = delivery.get("mids")
    if not isinstance(mids, list):
        return []
    recipient = _party_id(event, "sender")
    return [
        {"message_id": str(mid), "status": "delivered", "recipient_id": recipient}
        for mid in mids
        if isinstance(mid, str) and mid
    ]


def _iter_events(payload: Any) -> list[dict[str, Any]]:
    events: list[dict[str, Any]] = []
    for index, entry in enumerate(extract_entries(payload, WEBHOOK_OBJECT)):
        if not isinstance(entry, dict):
            logger.warning("facebook_entry_skipped", extra={"entry_index": index})
            continue
        raw_events = entry.get("messaging")
        if raw_events is None:
            raw_events = entry.get("standby")
        events.extend(dict_items(raw_events))
    return events


def extract_payload_events(payload: Any) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Extrai mensagens e confirmações de entrega do payload Facebook.

    Raises:
        PayloadParseError: Se o envelope do webhook for inválido

    Returns:
        (mensagens, statuses) em estrutura intermediária
    """
    messages: list[dict[str, Any]] = []
    statuses: list[dict[str, Any]] = []
    for event in _iter_events(payload):
        if "message" in event:
            extracted = _extract_message(event)
            if extracted is None:
                logger.warning("facebook_message_skipped", extra={"reason": "missing_ids"})
                continue
            messages.append(extracted)
        elif "delivery" in event:
            statuses.extend(_extract_delivery(event))
    return messages, statuses
