"""Extrator de payloads de transportadoras (Aramex, DHL, Domex).

As três transportadoras enviam o mesmo contrato de webhook:
``trackingNumber``, ``status``, ``estimatedDelivery``, ``actualDelivery``.
Payloads sem tracking number são heartbeats e não geram evento.
"""

from __future__ import annotations

from typing import Any

from api.normalizers.timestamps import parse_iso_datetime
from utils.errors import PayloadParseError

TRACKING_NUMBER_FIELD = "trackingNumber"


def extract_tracking_update(payload: Any) -> dict[str, Any] | None:
    """Extrai a atualização de rastreio do payload.

    Raises:
        PayloadParseError: Se o payload não for um objeto JSON

    Returns:
        Estrutura intermediária ou None quando não há tracking number
    """
    if not isinstance(payload, dict):
        raise PayloadParseError("payload_not_object")

    tracking_number = payload.get(TRACKING_NUMBER_FIELD)
    if isinstance(tracking_number, (int, float)) and not isinstance(tracking_number, bool):
        tracking_number = str(tracking_number)
    if not isinstance(tracking_number, str) or not tracking_number.strip():
        return None

    status = payload.get("status")
    return {
        "tracking_number": tracking_number.strip(),
        "status": status if isinstance(status, str) else None,
        "estimated_delivery": parse_iso_datetime(payload.get("estimatedDelivery")),
        "actual_delivery": parse_iso_datetime(payload.get("actualDelivery")),
    }
