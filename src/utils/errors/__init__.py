"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    FirestoreUnavailableError,
    InfrastructureError,
    PayloadParseError,
    PersistenceError,
    UnsupportedPlatformError,
    WebhookError,
)

__all__ = [
    "FirestoreUnavailableError",
    "InfrastructureError",
    "PayloadParseError",
    "PersistenceError",
    "UnsupportedPlatformError",
    "WebhookError",
]
