"""Parse e validação inicial do webhook (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from .signature import SignatureResult, verify_hmac_signature

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    SignatureVerifier = Callable[[bytes, Mapping[str, str], str | None], SignatureResult]


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
    *,
    verifier: SignatureVerifier = verify_hmac_signature,
) -> tuple[Any, SignatureResult]:
    """Valida assinatura e parseia o JSON do webhook.

    A estrutura do payload não é validada aqui: cada normalizer decide
    o que é um envelope válido para sua plataforma.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        secret: Secret da plataforma (None = pré-checagem desligada)
        verifier: Função de verificação de assinatura

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        InvalidJsonError: Se o corpo não for JSON

    Returns:
        (payload, SignatureResult)
    """
    signature_result = verifier(raw_body, headers, secret)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    return payload, signature_result
