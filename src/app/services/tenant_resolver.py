"""Resolução de (tenant, plataforma) para a IntegrationAccount ativa."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.integration import IntegrationAccount
    from app.domain.platform import Platform
    from app.protocols.stores import IntegrationAccountStoreProtocol

logger = logging.getLogger(__name__)


def _selection_key(account: IntegrationAccount) -> tuple[int, float, str]:
    # Mais recentemente sincronizada primeiro; nunca sincronizadas por último
    if account.last_sync_at is None:
        return (1, 0.0, account.id)
    return (0, -account.last_sync_at.timestamp(), account.id)


class TenantResolver:
    """Seleciona a conta de integração que recebe o webhook.

    Várias contas ativas para o mesmo par é uma anomalia de configuração:
    a escolha é determinística e gera apenas um warning, pois descartar
    um webhook legítimo é pior do que escolher uma conta.
    """

    def __init__(self, account_store: IntegrationAccountStoreProtocol) -> None:
        self._accounts = account_store

    async def resolve(self, tenant_id: str, platform: Platform) -> IntegrationAccount | None:
        candidates = [
            account
            for account in await self._accounts.find_active_accounts(tenant_id, platform)
            if account.is_active
        ]
        if not candidates:
            logger.info(
                "integration_account_not_found",
                extra={"tenant_id": tenant_id, "platform": str(platform)},
            )
            return None

        candidates.sort(key=_selection_key)
        chosen = candidates[0]
        if len(candidates) > 1:
            logger.warning(
                "multiple_active_accounts",
                extra={
                    "tenant_id": tenant_id,
                    "platform": str(platform),
                    "account_count": len(candidates),
                    "chosen_account_id": chosen.id,
                },
            )
        return chosen
