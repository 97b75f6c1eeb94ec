"""Testes dos mapeamentos e do refinamento de status de mensagens."""

from __future__ import annotations

import pytest

from app.domain.message import (
    DeliveryStatus,
    Message,
    MessageType,
    is_delivery_progress,
    map_delivery_status,
    map_message_type,
)
from app.domain.platform import Platform

D = DeliveryStatus


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("text", MessageType.TEXT),
        ("image", MessageType.IMAGE),
        ("document", MessageType.DOCUMENT),
        ("video", MessageType.VIDEO),
        ("AUDIO", MessageType.AUDIO),
        ("sticker", MessageType.TEXT),
        (None, MessageType.TEXT),
    ],
)
def test_map_message_type(raw: object, expected: MessageType) -> None:
    assert map_message_type(raw) == expected


def test_map_delivery_status() -> None:
    assert map_delivery_status("read") == D.READ
    assert map_delivery_status("Delivered") == D.DELIVERED
    assert map_delivery_status("deleted") is None
    assert map_delivery_status(None) is None


class TestIsDeliveryProgress:
    @pytest.mark.parametrize(
        ("current", "incoming"),
        [
            (D.PENDING, D.SENT),
            (D.SENT, D.DELIVERED),
            (D.DELIVERED, D.READ),
            (D.SENT, D.FAILED),
        ],
    )
    def test_forward(self, current: D, incoming: D) -> None:
        assert is_delivery_progress(current, incoming) is True

    @pytest.mark.parametrize(
        ("current", "incoming"),
        [
            (D.READ, D.DELIVERED),
            (D.DELIVERED, D.DELIVERED),
            (D.FAILED, D.READ),
            (D.READ, D.FAILED),
        ],
    )
    def test_not_forward(self, current: D, incoming: D) -> None:
        assert is_delivery_progress(current, incoming) is False


def test_natural_key_uses_platform_value() -> None:
    message = Message(
        tenant_id="t1",
        integration_account_id="acc",
        platform=Platform.WHATSAPP_BUSINESS,
        provider_message_id="wamid.1",
        sender_id="55",
        recipient_id="PN1",
    )

    assert message.natural_key == ("t1", "WHATSAPP_BUSINESS", "wamid.1")
    assert "customer_id" not in message.to_firestore_dict()
