"""Customer — identidade da contraparte de uma mensagem inbound.

O core só cria placeholders leves; o cadastro completo de clientes
pertence ao ERP.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from app.domain.platform import Platform

_IDENTITY_DOMAINS: dict[Platform, tuple[str, str]] = {
    Platform.FACEBOOK_MARKETPLACE: ("fb", "facebook.com"),
    Platform.WHATSAPP_BUSINESS: ("wa", "whatsapp.com"),
}

_DISPLAY_LABELS: dict[Platform, str] = {
    Platform.FACEBOOK_MARKETPLACE: "Facebook User",
    Platform.WHATSAPP_BUSINESS: "WhatsApp User",
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


def synthetic_identity(platform: Platform, provider_id: str) -> str:
    """Gera o identificador sintético (email) da contraparte.

    Exemplo: ``fb_123@facebook.com``, ``wa_5511999999999@whatsapp.com``.
    """
    prefix, domain = _IDENTITY_DOMAINS.get(platform, (platform.wire_name, "unknown.local"))
    return f"{prefix}_{provider_id.lstrip('+')}@{domain}"


def placeholder_name(platform: Platform, provider_id: str, profile_name: str | None) -> str:
    if profile_name:
        return profile_name
    label = _DISPLAY_LABELS.get(platform, f"{platform.wire_name} user")
    return f"{label} {provider_id}"


class Customer(BaseModel):
    """Cliente do ERP, no subconjunto de campos usado pelo core."""

    id: str
    tenant_id: str
    name: str
    email: str
    phone: str | None = None
    type: Literal["INDIVIDUAL", "COMPANY"] = "INDIVIDUAL"
    created_at: datetime = Field(default_factory=_utcnow)

    def to_firestore_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_firestore_dict(cls, data: dict[str, Any]) -> Customer:
        return cls(**data)
