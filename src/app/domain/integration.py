"""IntegrationAccount e IntegrationLog.

IntegrationAccount é mantida pela UI de gestão; este core apenas lê
e atualiza ``last_sync_at``. IntegrationLog é append-only.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from app.domain.platform import Platform  # noqa: TC001 - usado em runtime pelo pydantic


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LogOutcome(StrEnum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class IntegrationAccount(BaseModel):
    """Conta de integração de um tenant em uma plataforma."""

    id: str
    tenant_id: str
    platform: Platform
    account_name: str = ""
    is_active: bool = True
    # Credenciais são opacas para o core (repassadas à verificação de assinatura)
    access_token: str | None = Field(default=None, repr=False)
    webhook_secret: str | None = Field(default=None, repr=False)
    settings: dict[str, Any] = Field(default_factory=dict)
    last_sync_at: datetime | None = None
    expires_at: datetime | None = None

    def to_firestore_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_firestore_dict(cls, data: dict[str, Any]) -> IntegrationAccount:
        return cls(**data)


class IntegrationLog(BaseModel):
    """Registro de auditoria de uma tentativa de processamento."""

    tenant_id: str
    integration_account_id: str
    operation: str
    outcome: LogOutcome
    message: str = ""
    payload: Any = None
    timestamp: datetime = Field(default_factory=_utcnow)

    def to_firestore_dict(self) -> dict[str, Any]:
        return self.model_dump()
