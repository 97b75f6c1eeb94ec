"""Shipment — remessa rastreada por transportadora.

Criada pelo fluxo de despacho (fora deste core); aqui só recebe
atualizações de status vindas dos webhooks das transportadoras.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from app.domain.platform import Platform  # noqa: TC001 - usado em runtime pelo pydantic
from app.domain.shipment_status import ShipmentStatus


WEBHOOK_OWNED_FIELDS = frozenset(
    {"status", "estimated_delivery", "actual_delivery", "last_updated", "metadata"}
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Shipment(BaseModel):
    """Remessa, única por (tenant, transportadora, tracking number)."""

    id: str
    tenant_id: str
    integration_account_id: str
    platform: Platform
    tracking_number: str = Field(..., min_length=1)
    status: ShipmentStatus = ShipmentStatus.PENDING
    estimated_delivery: datetime | None = None
    actual_delivery: datetime | None = None
    last_updated: datetime = Field(default_factory=_utcnow)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_webhook_update_dict(self) -> dict[str, Any]:
        """Campos que os webhooks das transportadoras podem alterar.

        Os demais campos do documento pertencem ao fluxo de despacho e
        não são reescritos.
        """
        return self.model_dump(include=WEBHOOK_OWNED_FIELDS, exclude_none=True)

    @classmethod
    def from_firestore_dict(cls, data: dict[str, Any]) -> Shipment:
        for key in ("estimated_delivery", "actual_delivery", "last_updated"):
            value = data.get(key)
            if isinstance(value, str):
                data[key] = datetime.fromisoformat(value)
        return cls(**data)
