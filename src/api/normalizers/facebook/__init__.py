"""Normalizer Facebook Messenger — extração e normalização de mensagens.

Responsabilidades:
- Extrair mensagens do webhook Messenger (messaging/standby)
- Normalizar para MessageEvent / MessageStatusEvent
- Suportar: message (texto, anexos, echo) e delivery
"""

from .extractor import extract_payload_events
from .normalizer import FacebookNormalizer, normalize_message, normalize_messages

__all__ = [
    "FacebookNormalizer",
    "extract_payload_events",
    "normalize_message",
    "normalize_messages",
]
