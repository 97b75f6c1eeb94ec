"""Testes da camada de persistência canônica."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from app.domain.message import DeliveryStatus, MessageType
from app.domain.platform import Platform
from app.domain.shipment_status import ShipmentStatus
from app.infra.stores import MemoryCustomerStore, MemoryMessageStore, MemoryShipmentStore
from app.protocols.events import MessageEvent, MessageStatusEvent, ShipmentEvent
from app.services import (
    CanonicalPersistence,
    MessageUpsertOutcome,
    ShipmentUpsertOutcome,
    StatusUpdateOutcome,
)
from app.services.canonical_persistence import plan_shipment_update

NOW = datetime(2024, 6, 1, 12, tzinfo=UTC)


def _persistence(
    customers=None,
    messages=None,
    shipments=None,
) -> CanonicalPersistence:
    return CanonicalPersistence(
        customer_store=customers or MemoryCustomerStore(),
        message_store=messages or MemoryMessageStore(),
        shipment_store=shipments or MemoryShipmentStore(),
    )


def _message_event(mid: str = "m_1", sender: str = "U1") -> MessageEvent:
    return MessageEvent(
        platform=Platform.FACEBOOK_MARKETPLACE,
        provider_message_id=mid,
        sender_id=sender,
        recipient_id="PAGE1",
        message_type=MessageType.TEXT,
        content="Hello",
    )


def _shipment_event(status: str | None = "in_transit", **kwargs) -> ShipmentEvent:
    return ShipmentEvent(
        platform=Platform.DHL,
        tracking_number="TRK123",
        provider_status=status,
        raw_payload={"trackingNumber": "TRK123", "status": status},
        **kwargs,
    )


class TestPlanShipmentUpdate:
    def test_status_change(self, make_shipment) -> None:
        shipment = make_shipment(metadata={"origin": "dispatch"})

        outcome, updated = plan_shipment_update(
            shipment, ShipmentStatus.IN_TRANSIT, _shipment_event(), NOW
        )

        assert outcome == ShipmentUpsertOutcome.UPDATED
        assert updated.status == ShipmentStatus.IN_TRANSIT
        assert updated.last_updated == NOW
        assert updated.metadata == {
            "origin": "dispatch",
            "last_webhook_at": NOW.isoformat(),
            "webhook_payload": {"trackingNumber": "TRK123", "status": "in_transit"},
        }
        # Original imutável
        assert shipment.status == ShipmentStatus.PENDING

    def test_same_status_without_new_dates_is_unchanged(self, make_shipment) -> None:
        outcome, updated = plan_shipment_update(
            make_shipment(status=ShipmentStatus.IN_TRANSIT),
            ShipmentStatus.IN_TRANSIT,
            _shipment_event(),
            NOW,
        )

        assert outcome == ShipmentUpsertOutcome.UNCHANGED
        assert updated is None

    def test_same_status_with_new_estimate_is_updated(self, make_shipment) -> None:
        estimate = datetime(2024, 6, 5, tzinfo=UTC)

        outcome, updated = plan_shipment_update(
            make_shipment(status=ShipmentStatus.IN_TRANSIT),
            ShipmentStatus.IN_TRANSIT,
            _shipment_event(estimated_delivery=estimate),
            NOW,
        )

        assert outcome == ShipmentUpsertOutcome.UPDATED
        assert updated.estimated_delivery == estimate

    def test_null_dates_do_not_erase_stored_dates(self, make_shipment) -> None:
        estimate = datetime(2024, 6, 5, tzinfo=UTC)
        shipment = make_shipment(estimated_delivery=estimate)

        _, updated = plan_shipment_update(shipment, ShipmentStatus.PICKED_UP, _shipment_event(), NOW)

        assert updated.estimated_delivery == estimate

    def test_regression(self, make_shipment) -> None:
        outcome, updated = plan_shipment_update(
            make_shipment(status=ShipmentStatus.OUT_FOR_DELIVERY),
            ShipmentStatus.PICKED_UP,
            _shipment_event("picked_up"),
            NOW,
        )

        assert outcome == ShipmentUpsertOutcome.REGRESSION_REJECTED
        assert updated is None

    def test_terminal_to_terminal_is_allowed(self, make_shipment) -> None:
        outcome, updated = plan_shipment_update(
            make_shipment(status=ShipmentStatus.DELIVERED),
            ShipmentStatus.RETURNED,
            _shipment_event("returned"),
            NOW,
        )

        assert outcome == ShipmentUpsertOutcome.UPDATED
        assert updated.status == ShipmentStatus.RETURNED


class TestUpsertMessage:
    @pytest.mark.asyncio
    async def test_created_then_duplicate(self, make_account) -> None:
        persistence = _persistence()
        account = make_account(Platform.FACEBOOK_MARKETPLACE)

        assert await persistence.upsert_message(account, _message_event()) == MessageUpsertOutcome.CREATED
        assert await persistence.upsert_message(account, _message_event()) == MessageUpsertOutcome.DUPLICATE

    @pytest.mark.asyncio
    async def test_lost_race_is_duplicate(self, make_account) -> None:
        messages = MemoryMessageStore()
        messages.get = AsyncMock(return_value=None)
        messages.create_if_absent = AsyncMock(return_value=False)

        outcome = await _persistence(messages=messages).upsert_message(
            make_account(Platform.FACEBOOK_MARKETPLACE), _message_event()
        )

        assert outcome == MessageUpsertOutcome.DUPLICATE

    @pytest.mark.asyncio
    async def test_existing_customer_is_reused(self, make_account) -> None:
        customers = MemoryCustomerStore()
        existing = await customers.create("tenant-1", identity="fb_U1@facebook.com", name="Ana")
        messages = MemoryMessageStore()

        await _persistence(customers=customers, messages=messages).upsert_message(
            make_account(Platform.FACEBOOK_MARKETPLACE), _message_event()
        )

        assert messages.get_messages()[0].customer_id == existing.id
        assert len(customers.get_customers()) == 1

    @pytest.mark.asyncio
    async def test_customer_lookup_failure_falls_back(
        self, make_account, caplog: pytest.LogCaptureFixture
    ) -> None:
        customers = MemoryCustomerStore()
        customers.find_by_platform_identity = AsyncMock(side_effect=RuntimeError("boom"))
        messages = MemoryMessageStore()

        with caplog.at_level(logging.WARNING, logger="app.services.canonical_persistence"):
            outcome = await _persistence(customers=customers, messages=messages).upsert_message(
                make_account(Platform.FACEBOOK_MARKETPLACE), _message_event()
            )

        assert outcome == MessageUpsertOutcome.CREATED
        assert messages.get_messages()[0].customer_id is None
        [record] = [r for r in caplog.records if r.getMessage() == "fallback_applied"]
        assert record.component == "customer_resolution"
        assert record.reason == "RuntimeError"


class TestApplyMessageStatus:
    @pytest.mark.asyncio
    async def test_missing_message_is_skipped(self, make_account) -> None:
        event = MessageStatusEvent(
            platform=Platform.WHATSAPP_BUSINESS,
            provider_message_id="nope",
            status=DeliveryStatus.READ,
        )

        outcome = await _persistence().apply_message_status(make_account(), event)

        assert outcome == StatusUpdateOutcome.SKIPPED


class TestUpsertShipment:
    @pytest.mark.asyncio
    async def test_not_found(self, make_account) -> None:
        outcome = await _persistence().upsert_shipment(make_account(Platform.DHL), _shipment_event())

        assert outcome == ShipmentUpsertOutcome.NOT_FOUND

    @pytest.mark.asyncio
    async def test_unmapped_status_on_missing_shipment_is_not_found(self, make_account) -> None:
        outcome = await _persistence().upsert_shipment(
            make_account(Platform.DHL), _shipment_event("weird")
        )

        assert outcome == ShipmentUpsertOutcome.NOT_FOUND

    @pytest.mark.asyncio
    async def test_unmapped_status(self, make_account, make_shipment) -> None:
        shipments = MemoryShipmentStore()
        shipments.seed(make_shipment())

        outcome = await _persistence(shipments=shipments).upsert_shipment(
            make_account(Platform.DHL), _shipment_event(None)
        )

        assert outcome == ShipmentUpsertOutcome.UNMAPPED_STATUS
        assert shipments.write_count == 0

    @pytest.mark.asyncio
    async def test_updated(self, make_account, make_shipment) -> None:
        shipments = MemoryShipmentStore()
        shipments.seed(make_shipment())

        outcome = await _persistence(shipments=shipments).upsert_shipment(
            make_account(Platform.DHL), _shipment_event("OUT_FOR_DELIVERY")
        )

        assert outcome == ShipmentUpsertOutcome.UPDATED
        stored = await shipments.get("tenant-1", Platform.DHL, "TRK123")
        assert stored.status == ShipmentStatus.OUT_FOR_DELIVERY
