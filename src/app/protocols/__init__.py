"""Protocolos e contratos do core da aplicação."""

from .events import MessageEvent, MessageStatusEvent, NormalizedEvent, ShipmentEvent
from .normalizer import PlatformNormalizerProtocol
from .stores import (
    CustomerStoreProtocol,
    IntegrationAccountStoreProtocol,
    IntegrationLogStoreProtocol,
    MessageStoreProtocol,
    ShipmentStoreProtocol,
)

__all__ = [
    "CustomerStoreProtocol",
    "IntegrationAccountStoreProtocol",
    "IntegrationLogStoreProtocol",
    "MessageEvent",
    "MessageStatusEvent",
    "MessageStoreProtocol",
    "NormalizedEvent",
    "PlatformNormalizerProtocol",
    "ShipmentEvent",
    "ShipmentStoreProtocol",
]
