"""Testes dos stores em memória."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from app.domain.message import DeliveryStatus, Message
from app.domain.platform import Platform
from app.domain.shipment_status import ShipmentStatus
from app.infra.stores import (
    MemoryCustomerStore,
    MemoryIntegrationAccountStore,
    MemoryMessageStore,
    MemoryShipmentStore,
)


def _message(provider_message_id: str = "wamid.1", tenant_id: str = "t1") -> Message:
    return Message(
        tenant_id=tenant_id,
        integration_account_id="acc",
        platform=Platform.WHATSAPP_BUSINESS,
        provider_message_id=provider_message_id,
        sender_id="55",
        recipient_id="PN1",
    )


class TestMemoryMessageStore:
    @pytest.mark.asyncio
    async def test_create_if_absent_is_idempotent(self) -> None:
        store = MemoryMessageStore()

        assert await store.create_if_absent(_message()) is True
        assert await store.create_if_absent(_message()) is False
        assert len(store.get_messages()) == 1

    @pytest.mark.asyncio
    async def test_concurrent_creates_yield_single_record(self) -> None:
        store = MemoryMessageStore()

        results = await asyncio.gather(*(store.create_if_absent(_message()) for _ in range(5)))

        assert sorted(results) == [False, False, False, False, True]

    @pytest.mark.asyncio
    async def test_update_status_uses_mutator(self) -> None:
        store = MemoryMessageStore()
        await store.create_if_absent(_message())

        written = await store.update_status(
            "t1", Platform.WHATSAPP_BUSINESS, "wamid.1", lambda current: DeliveryStatus.READ
        )

        assert written == DeliveryStatus.READ
        stored = await store.get("t1", Platform.WHATSAPP_BUSINESS, "wamid.1")
        assert stored.status == DeliveryStatus.READ
        assert stored.updated_at is not None

    @pytest.mark.asyncio
    async def test_update_status_noop(self) -> None:
        store = MemoryMessageStore()
        await store.create_if_absent(_message())

        assert await store.update_status(
            "t1", Platform.WHATSAPP_BUSINESS, "wamid.1", lambda current: None
        ) is None
        assert await store.update_status(
            "t1", Platform.WHATSAPP_BUSINESS, "missing", lambda current: DeliveryStatus.READ
        ) is None


class TestMemoryCustomerStore:
    @pytest.mark.asyncio
    async def test_create_returns_existing_identity(self) -> None:
        store = MemoryCustomerStore()

        first = await store.create("t1", identity="fb_U1@facebook.com", name="A")
        second = await store.create("t1", identity="fb_U1@facebook.com", name="B")

        assert first.id == second.id
        assert second.name == "A"
        assert await store.find_by_platform_identity("t1", "fb_U1@facebook.com") == first
        assert await store.find_by_platform_identity("t2", "fb_U1@facebook.com") is None


class TestMemoryShipmentStore:
    @pytest.mark.asyncio
    async def test_update_atomically(self, make_shipment) -> None:
        store = MemoryShipmentStore()
        store.seed(make_shipment(tenant_id="t1"))

        updated = await store.update_atomically(
            "t1",
            Platform.DHL,
            "TRK123",
            lambda s: s.model_copy(update={"status": ShipmentStatus.PICKED_UP}),
        )

        assert updated.status == ShipmentStatus.PICKED_UP
        assert store.write_count == 1
        assert await store.update_atomically("t1", Platform.DHL, "NOPE", lambda s: s) is None
        assert await store.update_atomically("t1", Platform.DHL, "TRK123", lambda s: None) is None
        assert store.write_count == 1


class TestMemoryIntegrationAccountStore:
    @pytest.mark.asyncio
    async def test_touch_last_sync(self, make_account) -> None:
        store = MemoryIntegrationAccountStore([make_account(Platform.DHL)])
        synced_at = datetime(2024, 3, 1, tzinfo=UTC)

        await store.touch_last_sync("acc-dhl", synced_at)
        await store.touch_last_sync("missing", synced_at)

        assert store.get("acc-dhl").last_sync_at == synced_at
