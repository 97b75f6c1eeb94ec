"""Agregador de settings do serviço de ingestão.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    StorageBackend,
    StorageSettings,
    get_base_settings,
    get_storage_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

# Webhook settings
from config.settings.webhooks import (
    WEBHOOK_PLATFORMS,
    WebhookSettings,
    get_webhook_settings,
)

__all__ = [
    # Constants
    "WEBHOOK_PLATFORMS",
    # Base
    "BaseSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    "StorageBackend",
    "StorageSettings",
    # Webhooks
    "WebhookSettings",
    "get_base_settings",
    "get_firestore_settings",
    "get_storage_settings",
    "get_webhook_settings",
]
