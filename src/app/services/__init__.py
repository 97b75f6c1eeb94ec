"""Services — regras de aplicação sobre os stores (sem transporte HTTP)."""

from app.services.canonical_persistence import (
    CanonicalPersistence,
    MessageUpsertOutcome,
    ShipmentUpsertOutcome,
    StatusUpdateOutcome,
)
from app.services.integration_logger import IntegrationLogger
from app.services.tenant_resolver import TenantResolver

__all__ = [
    "CanonicalPersistence",
    "IntegrationLogger",
    "MessageUpsertOutcome",
    "ShipmentUpsertOutcome",
    "StatusUpdateOutcome",
    "TenantResolver",
]
