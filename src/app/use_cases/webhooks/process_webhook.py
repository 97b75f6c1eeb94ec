"""Use case de roteamento de webhooks.

Fluxo por requisição:
    1. Resolve a plataforma declarada no registry de normalizers
    2. Resolve a IntegrationAccount ativa do tenant (senão: no-op silencioso)
    3. Normaliza o payload em eventos canônicos
    4. Aplica cada evento na camada de persistência canônica
    5. Grava um IntegrationLog (SUCCESS ou FAILURE) por tentativa

Nenhuma exceção escapa de ``handle``: o resultado estruturado indica ao
transporte se o provedor deve reentregar (``retryable``).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.platform import Platform
from app.observability import record_latency, record_webhook_dropped, record_webhook_outcome
from app.protocols.events import MessageEvent, MessageStatusEvent, ShipmentEvent
from app.services.canonical_persistence import (
    MessageUpsertOutcome,
    ShipmentUpsertOutcome,
    StatusUpdateOutcome,
)
from config.logging import log_fallback
from utils.errors import PayloadParseError, PersistenceError, UnsupportedPlatformError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.integration import IntegrationAccount
    from app.protocols.events import NormalizedEvent
    from app.protocols.normalizer import PlatformNormalizerProtocol
    from app.protocols.stores import IntegrationAccountStoreProtocol
    from app.services.canonical_persistence import CanonicalPersistence
    from app.services.integration_logger import IntegrationLogger
    from app.services.tenant_resolver import TenantResolver

logger = logging.getLogger(__name__)


class WebhookStatus(StrEnum):
    PROCESSED = "processed"
    NO_INTEGRATION = "no_integration"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    FAILED = "failed"


@dataclass(slots=True)
class WebhookResult:
    """Resultado do processamento de um webhook."""

    status: WebhookStatus
    platform: str
    account_id: str | None = None
    events: int = 0
    messages_created: int = 0
    duplicates: int = 0
    status_updates: int = 0
    shipments_updated: int = 0
    skipped: int = 0
    retryable: bool = False
    error: str | None = None
    outcomes: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status != WebhookStatus.FAILED

    def summary(self) -> str:
        return (
            f"events={self.events} created={self.messages_created} "
            f"duplicates={self.duplicates} status_updates={self.status_updates} "
            f"shipments_updated={self.shipments_updated} skipped={self.skipped}"
        )


class ProcessWebhookUseCase:
    """Roteador de webhooks multi-plataforma.

    Args:
        normalizers: Registry de adapters por plataforma
        tenant_resolver: Resolve a conta de integração ativa
        persistence: Upserts idempotentes de mensagens e remessas
        integration_logger: Auditoria append-only
        account_store: Opcional, para atualizar ``last_sync_at`` após sucesso
    """

    def __init__(
        self,
        *,
        normalizers: Mapping[Platform, PlatformNormalizerProtocol],
        tenant_resolver: TenantResolver,
        persistence: CanonicalPersistence,
        integration_logger: IntegrationLogger,
        account_store: IntegrationAccountStoreProtocol | None = None,
    ) -> None:
        self._normalizers = dict(normalizers)
        self._resolver = tenant_resolver
        self._persistence = persistence
        self._integration_logger = integration_logger
        self._account_store = account_store

    def supports(self, platform: str | Platform) -> bool:
        resolved = platform if isinstance(platform, Platform) else Platform.from_wire(platform)
        return resolved is not None and resolved in self._normalizers

    async def handle(
        self,
        tenant_id: str,
        platform: str | Platform,
        payload: Any,
    ) -> WebhookResult:
        """Processa um webhook já recebido pelo transporte."""
        started = time.perf_counter()
        declared = str(platform)
        resolved = platform if isinstance(platform, Platform) else Platform.from_wire(platform)
        normalizer = self._normalizers.get(resolved) if resolved is not None else None

        if resolved is None or normalizer is None:
            logger.warning("webhook_unsupported_platform", extra={"platform": declared})
            result = WebhookResult(
                status=WebhookStatus.UNSUPPORTED_PLATFORM,
                platform=declared,
                error=str(UnsupportedPlatformError(declared)),
            )
            record_webhook_outcome(declared, str(result.status))
            return result

        result = await self._handle_platform(tenant_id, resolved, normalizer, payload)
        operation = f"webhook_{resolved.wire_name}"
        record_latency("webhook_router", operation, (time.perf_counter() - started) * 1000)
        record_webhook_outcome(
            resolved.wire_name,
            str(result.status),
            events=result.events,
            retryable=result.retryable,
        )
        return result

    async def _handle_platform(
        self,
        tenant_id: str,
        platform: Platform,
        normalizer: PlatformNormalizerProtocol,
        payload: Any,
    ) -> WebhookResult:
        wire = platform.wire_name
        operation = f"webhook_{wire}"

        try:
            account = await self._resolver.resolve(tenant_id, platform)
        except PersistenceError as exc:
            # Sem conta resolvida não há a quem atribuir o IntegrationLog
            logger.error(
                "webhook_account_lookup_failed",
                extra={"platform": wire, "error_type": type(exc).__name__},
            )
            return WebhookResult(
                status=WebhookStatus.FAILED,
                platform=wire,
                retryable=True,
                error="account_lookup_failed",
            )

        if account is None:
            record_webhook_dropped(wire, "no_integration")
            return WebhookResult(status=WebhookStatus.NO_INTEGRATION, platform=wire)

        result = WebhookResult(status=WebhookStatus.PROCESSED, platform=wire, account_id=account.id)

        try:
            events = normalizer.parse(payload)
        except PayloadParseError as exc:
            return await self._fail(account, operation, payload, result, f"parse_error: {exc}")
        except Exception as exc:
            logger.exception("webhook_normalizer_crashed", extra={"platform": wire})
            return await self._fail(
                account, operation, payload, result, f"parse_error: {type(exc).__name__}"
            )

        result.events = len(events)
        for event in events:
            try:
                await self._apply(account, event, result)
            except PersistenceError as exc:
                logger.error(
                    "webhook_persistence_failed",
                    extra={"platform": wire, "error_type": type(exc).__name__},
                )
                return await self._fail(
                    account, operation, payload, result, f"persistence_error: {exc}", retryable=True
                )
            except ValidationError as exc:
                # Evento malformado nunca será aceito: descarta só ele e segue o lote
                logger.warning(
                    "webhook_event_rejected",
                    extra={
                        "platform": wire,
                        "event_type": type(event).__name__,
                        "error_count": exc.error_count(),
                    },
                )
                result.skipped += 1
                result.outcomes.append("rejected")
            except Exception as exc:
                logger.exception("webhook_event_crashed", extra={"platform": wire})
                return await self._fail(
                    account, operation, payload, result, f"unexpected_error: {type(exc).__name__}"
                )

        await self._integration_logger.success(
            account.tenant_id, account.id, operation, result.summary(), payload
        )
        await self._touch_last_sync(account)
        logger.info(
            "webhook_processed",
            extra={
                "platform": wire,
                "account_id": account.id,
                "events": result.events,
                "messages_created": result.messages_created,
                "duplicates": result.duplicates,
                "shipments_updated": result.shipments_updated,
                "skipped": result.skipped,
            },
        )
        return result

    async def _apply(
        self,
        account: IntegrationAccount,
        event: NormalizedEvent,
        result: WebhookResult,
    ) -> None:
        if isinstance(event, MessageEvent):
            outcome = await self._persistence.upsert_message(account, event)
            if outcome == MessageUpsertOutcome.CREATED:
                result.messages_created += 1
            else:
                result.duplicates += 1
        elif isinstance(event, MessageStatusEvent):
            outcome = await self._persistence.apply_message_status(account, event)
            if outcome == StatusUpdateOutcome.UPDATED:
                result.status_updates += 1
            else:
                result.skipped += 1
        elif isinstance(event, ShipmentEvent):
            outcome = await self._persistence.upsert_shipment(account, event)
            if outcome == ShipmentUpsertOutcome.UPDATED:
                result.shipments_updated += 1
            else:
                result.skipped += 1
        else:
            result.skipped += 1
            return
        result.outcomes.append(str(outcome))

    async def _fail(
        self,
        account: IntegrationAccount,
        operation: str,
        payload: Any,
        result: WebhookResult,
        message: str,
        *,
        retryable: bool = False,
    ) -> WebhookResult:
        result.status = WebhookStatus.FAILED
        result.retryable = retryable
        result.error = message
        await self._integration_logger.failure(
            account.tenant_id, account.id, operation, message, payload
        )
        return result

    async def _touch_last_sync(self, account: IntegrationAccount) -> None:
        if self._account_store is None:
            return
        try:
            await self._account_store.touch_last_sync(account.id, datetime.now(UTC))
        except Exception as exc:
            log_fallback(
                logger,
                "account_last_sync",
                reason=type(exc).__name__,
                account_id=account.id,
            )
