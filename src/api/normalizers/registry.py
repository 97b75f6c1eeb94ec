"""Registry de normalizers indexado por plataforma."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.platform import COURIER_PLATFORMS, Platform

from .couriers import CourierNormalizer
from .facebook import FacebookNormalizer
from .whatsapp import WhatsAppNormalizer

if TYPE_CHECKING:
    from app.protocols.normalizer import PlatformNormalizerProtocol


def build_normalizer_registry() -> dict[Platform, PlatformNormalizerProtocol]:
    """Cria um adapter por plataforma suportada."""
    registry: dict[Platform, PlatformNormalizerProtocol] = {
        Platform.FACEBOOK_MARKETPLACE: FacebookNormalizer(),
        Platform.WHATSAPP_BUSINESS: WhatsAppNormalizer(),
    }
    for platform in sorted(COURIER_PLATFORMS):
        registry[platform] = CourierNormalizer(platform)
    return registry
