"""Configuração do pytest e fixtures compartilhadas."""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.bootstrap.dependencies import (  # noqa: E402
    StoreBundle,
    create_memory_stores,
    create_webhook_use_case,
)
from app.domain.integration import IntegrationAccount  # noqa: E402
from app.domain.platform import Platform  # noqa: E402
from app.domain.shipment import Shipment  # noqa: E402
from app.domain.shipment_status import ShipmentStatus  # noqa: E402
from app.use_cases.webhooks import ProcessWebhookUseCase  # noqa: E402

TENANT_ID = "tenant-1"


@pytest.fixture
def stores() -> StoreBundle:
    return create_memory_stores()


@pytest.fixture
def use_case(stores: StoreBundle) -> ProcessWebhookUseCase:
    return create_webhook_use_case(stores)


@pytest.fixture
def make_account() -> Callable[..., IntegrationAccount]:
    def _make(
        platform: Platform = Platform.WHATSAPP_BUSINESS,
        *,
        account_id: str | None = None,
        tenant_id: str = TENANT_ID,
        **overrides: Any,
    ) -> IntegrationAccount:
        return IntegrationAccount(
            id=account_id or f"acc-{platform.wire_name}",
            tenant_id=tenant_id,
            platform=platform,
            account_name=f"{platform.wire_name} account",
            **overrides,
        )

    return _make


@pytest.fixture
def make_shipment() -> Callable[..., Shipment]:
    def _make(
        tracking_number: str = "TRK123",
        status: ShipmentStatus = ShipmentStatus.PENDING,
        *,
        platform: Platform = Platform.DHL,
        tenant_id: str = TENANT_ID,
        **overrides: Any,
    ) -> Shipment:
        return Shipment(
            id=f"shp-{tracking_number}",
            tenant_id=tenant_id,
            integration_account_id=f"acc-{platform.wire_name}",
            platform=platform,
            tracking_number=tracking_number,
            status=status,
            last_updated=datetime(2024, 1, 1, tzinfo=UTC),
            **overrides,
        )

    return _make


def whatsapp_text_payload(
    message_id: str = "wamid.1",
    sender: str = "5511999990000",
    text: str = "Hello",
    *,
    name: str | None = "Maria",
) -> dict[str, Any]:
    value: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "metadata": {"display_phone_number": "15550000000", "phone_number_id": "PN1"},
        "messages": [
            {
                "from": sender,
                "id": message_id,
                "timestamp": "1700000000",
                "type": "text",
                "text": {"body": text},
            }
        ],
    }
    if name:
        value["contacts"] = [{"profile": {"name": name}, "wa_id": sender}]
    return {
        "object": "whatsapp_business_account",
        "entry": [{"id": "WABA1", "changes": [{"field": "messages", "value": value}]}],
    }


def facebook_text_payload(
    mid: str = "m_1",
    sender: str = "U1",
    text: str = "Hello",
) -> dict[str, Any]:
    return {
        "object": "page",
        "entry": [
            {
                "id": "PAGE1",
                "time": 1700000000000,
                "messaging": [
                    {
                        "sender": {"id": sender},
                        "recipient": {"id": "PAGE1"},
                        "timestamp": 1700000000000,
                        "message": {"mid": mid, "text": text},
                    }
                ],
            }
        ],
    }


@pytest.fixture
def whatsapp_payload() -> Callable[..., dict[str, Any]]:
    return whatsapp_text_payload


@pytest.fixture
def facebook_payload() -> Callable[..., dict[str, Any]]:
    return facebook_text_payload
