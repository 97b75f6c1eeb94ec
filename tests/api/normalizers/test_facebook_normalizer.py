"""Testes do normalizer Facebook Messenger (Marketplace)."""

from __future__ import annotations

from typing import Any

import pytest

from api.normalizers.facebook import FacebookNormalizer
from app.domain.message import DeliveryStatus, MessageDirection, MessageType
from app.domain.platform import Platform
from app.protocols.events import MessageEvent, MessageStatusEvent
from utils.errors import PayloadParseError


def _entry(*events: Any, channel: str = "messaging") -> dict[str, Any]:
    return {"id": "PAGE1", "time": 1700000000000, channel: list(events)}


def _message_event(mid: str, sender: str = "U1", **message: Any) -> dict[str, Any]:
    return {
        "sender": {"id": sender},
        "recipient": {"id": "PAGE1"},
        "timestamp": 1700000000000,
        "message": {"mid": mid, **message},
    }


class TestFacebookMessages:
    """Mensagens do Messenger."""

    def test_text_message(self, facebook_payload) -> None:
        events = FacebookNormalizer().parse(facebook_payload(text="Hello"))

        assert len(events) == 1
        event = events[0]
        assert isinstance(event, MessageEvent)
        assert event.platform == Platform.FACEBOOK_MARKETPLACE
        assert event.provider_message_id == "m_1"
        assert event.sender_id == "U1"
        assert event.recipient_id == "PAGE1"
        assert event.message_type == MessageType.TEXT
        assert event.content == "Hello"
        assert event.direction == MessageDirection.INBOUND
        # Timestamp do Messenger vem em milissegundos
        assert event.sent_at is not None
        assert event.sent_at.year == 2023

    @pytest.mark.parametrize(
        ("attachment", "expected_type", "expected_content"),
        [
            ({"type": "image", "payload": {"url": "https://x"}}, MessageType.IMAGE, "Image received"),
            ({"type": "file", "payload": {"name": "cotacao.pdf"}}, MessageType.DOCUMENT, "Document: cotacao.pdf"),
            ({"type": "video", "payload": {}}, MessageType.VIDEO, "Video received"),
            ({"type": "audio", "payload": {}}, MessageType.AUDIO, "Audio received"),
            ({"type": "location", "payload": {}}, MessageType.TEXT, "Message received"),
        ],
    )
    def test_attachments(
        self,
        attachment: dict[str, Any],
        expected_type: MessageType,
        expected_content: str,
    ) -> None:
        payload = {
            "object": "page",
            "entry": [_entry(_message_event("m_att", attachments=[attachment]))],
        }

        events = FacebookNormalizer().parse(payload)

        assert events[0].message_type == expected_type
        assert events[0].content == expected_content

    def test_echo_is_outbound_with_recipient_as_counterpart(self) -> None:
        echo = {
            "sender": {"id": "PAGE1"},
            "recipient": {"id": "U9"},
            "timestamp": 1700000000000,
            "message": {"mid": "m_echo", "is_echo": True, "text": "Oi"},
        }
        payload = {"object": "page", "entry": [_entry(echo)]}

        event = FacebookNormalizer().parse(payload)[0]

        assert event.direction == MessageDirection.OUTBOUND
        assert event.status == DeliveryStatus.SENT
        assert event.counterpart_id == "U9"

    def test_standby_channel_is_read_when_messaging_absent(self) -> None:
        payload = {
            "object": "page",
            "entry": [_entry(_message_event("m_standby", text="x"), channel="standby")],
        }

        events = FacebookNormalizer().parse(payload)

        assert [e.provider_message_id for e in events] == ["m_standby"]

    def test_malformed_events_are_skipped(self) -> None:
        payload = {
            "object": "page",
            "entry": [
                _entry(
                    _message_event("m_ok", text="a"),
                    {"sender": {"id": "U1"}, "message": {"text": "no mid"}},
                    {"message": {"mid": "m_no_sender"}},
                    "junk",
                    {"postback": {"payload": "GET_STARTED"}},
                ),
                "junk-entry",
            ],
        }

        events = FacebookNormalizer().parse(payload)

        assert [e.provider_message_id for e in events] == ["m_ok"]


class TestFacebookDelivery:
    """Confirmações de entrega."""

    def test_delivery_mids_become_status_events(self) -> None:
        delivery = {
            "sender": {"id": "U1"},
            "recipient": {"id": "PAGE1"},
            "delivery": {"mids": ["m_a", "m_b", 42], "watermark": 1700000000000},
        }
        payload = {"object": "page", "entry": [_entry(delivery)]}

        events = FacebookNormalizer().parse(payload)

        assert all(isinstance(e, MessageStatusEvent) for e in events)
        assert [e.provider_message_id for e in events] == ["m_a", "m_b"]
        assert {e.status for e in events} == {DeliveryStatus.DELIVERED}


class TestFacebookEnvelope:
    """Payloads inteiramente inválidos."""

    @pytest.mark.parametrize(
        "payload",
        [None, [], {"object": "instagram", "entry": []}, {"object": "page", "entry": "x"}],
    )
    def test_invalid_envelope_raises(self, payload: Any) -> None:
        with pytest.raises(PayloadParseError):
            FacebookNormalizer().parse(payload)
