"""Plataformas externas suportadas pelo motor de ingestão.

Cada plataforma corresponde a um tipo de IntegrationAccount e a um
adapter (normalizer) registrado no roteador de webhooks.
"""

from __future__ import annotations

from enum import StrEnum


class Platform(StrEnum):
    """Plataformas com webhook inbound.

    Mensageria:
        - FACEBOOK_MARKETPLACE: Messenger da página do Marketplace
        - WHATSAPP_BUSINESS: WhatsApp Business Cloud API

    Transportadoras:
        - ARAMEX, DHL, DOMEX
    """

    FACEBOOK_MARKETPLACE = "FACEBOOK_MARKETPLACE"
    WHATSAPP_BUSINESS = "WHATSAPP_BUSINESS"
    ARAMEX = "ARAMEX"
    DHL = "DHL"
    DOMEX = "DOMEX"

    def __str__(self) -> str:
        return self.value

    @property
    def wire_name(self) -> str:
        """Nome curto usado na rota e no nome da operação de log."""
        return _WIRE_NAMES[self]

    @property
    def is_courier(self) -> bool:
        return self in COURIER_PLATFORMS

    @property
    def is_messaging(self) -> bool:
        return self in MESSAGING_PLATFORMS

    @classmethod
    def from_wire(cls, value: str | None) -> Platform | None:
        """Resolve plataforma a partir do identificador declarado.

        Aceita o nome curto (``facebook``) ou o valor do enum
        (``FACEBOOK_MARKETPLACE``), sem diferenciar maiúsculas.

        Returns:
            Platform ou None se não reconhecida.
        """
        if not value:
            return None
        normalized = value.strip().lower()
        for platform, wire in _WIRE_NAMES.items():
            if normalized in (wire, platform.value.lower()):
                return platform
        return None


_WIRE_NAMES: dict[Platform, str] = {
    Platform.FACEBOOK_MARKETPLACE: "facebook",
    Platform.WHATSAPP_BUSINESS: "whatsapp",
    Platform.ARAMEX: "aramex",
    Platform.DHL: "dhl",
    Platform.DOMEX: "domex",
}

MESSAGING_PLATFORMS: frozenset[Platform] = frozenset({
    Platform.FACEBOOK_MARKETPLACE,
    Platform.WHATSAPP_BUSINESS,
})

COURIER_PLATFORMS: frozenset[Platform] = frozenset({
    Platform.ARAMEX,
    Platform.DHL,
    Platform.DOMEX,
})
