"""Normalizer WhatsApp — extração e normalização de mensagens.

Responsabilidades:
- Extrair mensagens e statuses do webhook WhatsApp Business API
- Normalizar para MessageEvent / MessageStatusEvent

Tipos mapeados: text, image, video, audio, document. Demais tipos
são persistidos como TEXT com conteúdo descritivo.
"""

from .extractor import extract_payload_messages, extract_payload_statuses
from .normalizer import WhatsAppNormalizer, normalize_message, normalize_messages

__all__ = [
    "WhatsAppNormalizer",
    "extract_payload_messages",
    "extract_payload_statuses",
    "normalize_message",
    "normalize_messages",
]
