"""Normalizer de transportadoras — um adapter por plataforma, mesmo contrato."""

from __future__ import annotations

from typing import Any

from app.domain.platform import COURIER_PLATFORMS, Platform
from app.protocols.events import NormalizedEvent, ShipmentEvent

from .extractor import extract_tracking_update


class CourierNormalizer:
    """Adapter de webhook de transportadora.

    Args:
        platform: Plataforma de transportadora (ARAMEX, DHL ou DOMEX)
    """

    def __init__(self, platform: Platform) -> None:
        if platform not in COURIER_PLATFORMS:
            msg = f"{platform} não é uma transportadora"
            raise ValueError(msg)
        self.platform = platform

    def parse(self, payload: Any) -> list[NormalizedEvent]:
        """Produz zero ou um ShipmentEvent.

        Raises:
            PayloadParseError: Se o payload não for um objeto JSON
        """
        update = extract_tracking_update(payload)
        if update is None:
            return []
        return [
            ShipmentEvent(
                platform=self.platform,
                tracking_number=update["tracking_number"],
                provider_status=update["status"],
                estimated_delivery=update["estimated_delivery"],
                actual_delivery=update["actual_delivery"],
                raw_payload=dict(payload),
            )
        ]
