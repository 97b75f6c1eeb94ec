"""Webhook genérico: verificação, assinatura e parsing seguro."""

from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookRequestError,
    parse_webhook_request,
)
from .signature import SignatureResult, sign_body, verify_hmac_signature
from .verify import WebhookChallengeError, verify_webhook_challenge

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "SignatureResult",
    "WebhookChallengeError",
    "WebhookRequestError",
    "parse_webhook_request",
    "sign_body",
    "verify_hmac_signature",
    "verify_webhook_challenge",
]
