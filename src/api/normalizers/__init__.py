"""Normalizers por plataforma — conversão de payloads externos em eventos canônicos.

Estrutura:
- meta_shared/: validação de envelope e conteúdo comuns aos canais Meta
- facebook/: Messenger do Facebook Marketplace
- whatsapp/: WhatsApp Business API
- couriers/: Aramex, DHL e Domex (contrato único)
- registry: um adapter por Platform, consumido pelo roteador de webhooks

Cada canal tem seu próprio extractor e normalizer, mantendo SRP.
"""

from .couriers import CourierNormalizer
from .facebook import FacebookNormalizer
from .registry import build_normalizer_registry
from .whatsapp import WhatsAppNormalizer

__all__ = [
    "CourierNormalizer",
    "FacebookNormalizer",
    "WhatsAppNormalizer",
    "build_normalizer_registry",
]
