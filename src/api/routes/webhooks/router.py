"""Endpoints de webhook multi-plataforma.

Endpoints:
- GET /webhook/{platform}: verificação de webhook (hub.challenge)
- POST /webhook/{platform}: recebimento de eventos do provedor

Códigos de resposta do POST:
- 200: processado, sem integração ativa ou falha não reentregável
- 400: plataforma desconhecida ou corpo não-JSON
- 401: pré-checagem de assinatura falhou
- 500: falha de persistência (provedor deve reentregar)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookChallengeError,
    parse_webhook_request,
    verify_webhook_challenge,
)
from app.bootstrap import get_webhook_use_case
from app.domain.platform import Platform
from app.observability import (
    get_correlation_id,
    reset_correlation_id,
    reset_tenant_id,
    set_correlation_id,
    set_tenant_id,
)
from app.use_cases.webhooks import ProcessWebhookUseCase, WebhookResult, WebhookStatus
from config.settings import (
    BaseSettings,
    WebhookSettings,
    get_base_settings,
    get_webhook_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter()

UseCaseDep = Annotated[ProcessWebhookUseCase, Depends(get_webhook_use_case)]
WebhookSettingsDep = Annotated[WebhookSettings, Depends(get_webhook_settings)]
BaseSettingsDep = Annotated[BaseSettings, Depends(get_base_settings)]


def _status_code_for(result: WebhookResult) -> int:
    if result.status == WebhookStatus.UNSUPPORTED_PLATFORM:
        return status.HTTP_400_BAD_REQUEST
    if result.status == WebhookStatus.FAILED and result.retryable:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_200_OK


def _result_body(result: WebhookResult) -> dict[str, Any]:
    body: dict[str, Any] = {
        "status": str(result.status),
        "correlation_id": get_correlation_id(),
    }
    if result.status == WebhookStatus.PROCESSED:
        body["events"] = result.events
    if result.error and result.status == WebhookStatus.UNSUPPORTED_PLATFORM:
        body["error"] = result.error
    return body


@router.get("/{platform}")
async def verify_webhook(
    platform: str,
    request: Request,
    webhook_settings: WebhookSettingsDep,
) -> Response:
    """Responde ao challenge de verificação (Meta envia hub.* na query)."""
    resolved = Platform.from_wire(platform)
    if resolved is None:
        return Response(
            content="Not Found",
            media_type="text/plain",
            status_code=status.HTTP_404_NOT_FOUND,
        )

    hub_mode = request.query_params.get("hub.mode")
    try:
        challenge = verify_webhook_challenge(
            hub_mode=hub_mode,
            hub_verify_token=request.query_params.get("hub.verify_token"),
            hub_challenge=request.query_params.get("hub.challenge"),
            expected_token=webhook_settings.verify_token_for(resolved.wire_name),
        )
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_verification_failed",
            extra={"platform": resolved.wire_name, "error": str(exc)},
        )
        return Response(
            content="Forbidden",
            media_type="text/plain",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    logger.info("webhook_verified", extra={"platform": resolved.wire_name, "hub_mode": hub_mode})
    # Meta espera o challenge como texto puro
    return Response(content=challenge, media_type="text/plain", status_code=status.HTTP_200_OK)


@router.post("/{platform}", response_model=None)
async def receive_webhook(
    platform: str,
    request: Request,
    use_case: UseCaseDep,
    webhook_settings: WebhookSettingsDep,
    base_settings: BaseSettingsDep,
) -> Response:
    """Recebe, valida e processa um webhook de provedor."""
    correlation_token = set_correlation_id(request.headers.get("x-correlation-id"))
    tenant_id = request.headers.get(webhook_settings.tenant_header) or base_settings.default_tenant_id
    tenant_token = set_tenant_id(tenant_id)

    try:
        if not use_case.supports(platform):
            result = await use_case.handle(tenant_id, platform, None)
            return JSONResponse(_result_body(result), status_code=_status_code_for(result))

        resolved = Platform.from_wire(platform)
        wire = resolved.wire_name if resolved is not None else platform
        raw_body = await request.body()

        try:
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=request.headers,
                secret=webhook_settings.app_secret_for(wire),
            )
        except InvalidSignatureError as exc:
            logger.warning("webhook_signature_invalid", extra={"platform": wire, "error": str(exc)})
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning("webhook_json_invalid", extra={"platform": wire, "error": str(exc)})
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "platform": wire,
                "signature_valid": signature_result.valid,
                "signature_skipped": signature_result.skipped,
                "payload_size": len(raw_body),
            },
        )

        result = await use_case.handle(tenant_id, platform, payload)
        return JSONResponse(_result_body(result), status_code=_status_code_for(result))

    finally:
        reset_tenant_id(tenant_token)
        reset_correlation_id(correlation_token)
