"""Pré-checagem de assinatura HMAC-SHA256 de webhooks.

Plugável: qualquer função com a assinatura de ``verify_hmac_signature``
pode ser passada a ``parse_webhook_request``.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADERS: tuple[str, ...] = ("x-hub-signature-256", "x-signature")
SIGNATURE_PREFIX = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação de assinatura."""

    valid: bool
    skipped: bool = False
    error: str | None = None


def _find_signature(headers: Mapping[str, str]) -> str | None:
    lowered = {key.lower(): value for key, value in headers.items()}
    for name in SIGNATURE_HEADERS:
        value = lowered.get(name)
        if value:
            return value.strip()
    return None


def verify_hmac_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Valida HMAC-SHA256 do corpo bruto.

    Aceita ``x-hub-signature-256`` (Meta, prefixo ``sha256=``) ou
    ``x-signature`` (hex puro ou com prefixo). Sem secret configurado a
    checagem é pulada.
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    signature = _find_signature(headers)
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    expected = signature.removeprefix(SIGNATURE_PREFIX)
    computed = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    if not hmac.compare_digest(computed, expected.lower()):
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)


def sign_body(raw_body: bytes, secret: str) -> str:
    """Gera o header ``x-hub-signature-256`` para um corpo (testes e tooling)."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"
