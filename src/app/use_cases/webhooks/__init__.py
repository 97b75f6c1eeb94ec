"""Use cases de recepção de webhooks."""

from .process_webhook import (
    ProcessWebhookUseCase,
    WebhookResult,
    WebhookStatus,
)

__all__ = [
    "ProcessWebhookUseCase",
    "WebhookResult",
    "WebhookStatus",
]
