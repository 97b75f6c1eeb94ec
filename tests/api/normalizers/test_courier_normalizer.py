"""Testes do normalizer de transportadoras (Aramex, DHL, Domex)."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from api.normalizers.couriers import CourierNormalizer
from app.domain.platform import Platform
from app.protocols.events import ShipmentEvent
from utils.errors import PayloadParseError


@pytest.mark.parametrize("platform", [Platform.ARAMEX, Platform.DHL, Platform.DOMEX])
def test_tracking_update_produces_shipment_event(platform: Platform) -> None:
    payload = {
        "trackingNumber": "TRK123",
        "status": "in_transit",
        "estimatedDelivery": "2024-05-01T12:00:00Z",
        "extra": {"hub": "GRU"},
    }

    events = CourierNormalizer(platform).parse(payload)

    assert len(events) == 1
    event = events[0]
    assert isinstance(event, ShipmentEvent)
    assert event.platform == platform
    assert event.tracking_number == "TRK123"
    assert event.provider_status == "in_transit"
    assert event.estimated_delivery == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    assert event.actual_delivery is None
    assert event.raw_payload == payload


@pytest.mark.parametrize(
    "payload",
    [{}, {"status": "in_transit"}, {"trackingNumber": ""}, {"trackingNumber": "   "}],
)
def test_heartbeat_without_tracking_number_yields_no_events(payload: dict) -> None:
    assert CourierNormalizer(Platform.DHL).parse(payload) == []


def test_numeric_tracking_number_is_stringified() -> None:
    events = CourierNormalizer(Platform.ARAMEX).parse({"trackingNumber": 998877, "status": "pending"})

    assert events[0].tracking_number == "998877"


def test_unparseable_timestamps_are_ignored() -> None:
    payload = {"trackingNumber": "T1", "status": "delivered", "actualDelivery": "ontem"}

    event = CourierNormalizer(Platform.DOMEX).parse(payload)[0]

    assert event.actual_delivery is None


def test_non_object_payload_raises() -> None:
    with pytest.raises(PayloadParseError):
        CourierNormalizer(Platform.DHL).parse(["trackingNumber", "T1"])


def test_rejects_messaging_platform() -> None:
    with pytest.raises(ValueError, match="transportadora"):
        CourierNormalizer(Platform.WHATSAPP_BUSINESS)
