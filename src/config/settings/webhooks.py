"""Settings dos endpoints de webhook.

Tokens de verificação e secrets de assinatura por plataforma, lidos de
``<PLATAFORMA>_VERIFY_TOKEN`` e ``<PLATAFORMA>_APP_SECRET``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

# Nomes de plataforma aceitos na rota (prefixo das variáveis de ambiente)
WEBHOOK_PLATFORMS: tuple[str, ...] = ("facebook", "whatsapp", "aramex", "dhl", "domex")

DEFAULT_TENANT_HEADER = "x-tenant-id"


@dataclass(frozen=True)
class WebhookSettings:
    """Configurações de recepção de webhooks.

    Attributes:
        tenant_header: Header HTTP que identifica o tenant
        verify_tokens: Token de verificação (GET hub.challenge) por plataforma
        app_secrets: Secret HMAC por plataforma; ausente = pré-checagem desligada
        require_signature: Exige secret configurado para plataformas Meta
    """

    tenant_header: str = DEFAULT_TENANT_HEADER
    verify_tokens: dict[str, str] = field(default_factory=dict)
    app_secrets: dict[str, str] = field(default_factory=dict)
    require_signature: bool = False

    def verify_token_for(self, platform: str) -> str:
        return self.verify_tokens.get(platform.lower(), "")

    def app_secret_for(self, platform: str) -> str | None:
        return self.app_secrets.get(platform.lower()) or None

    def validate(self, *, is_development: bool = True) -> list[str]:
        """Valida configurações de webhook.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.tenant_header:
            errors.append("WEBHOOK_TENANT_HEADER não pode ser vazio")

        if self.require_signature and not is_development:
            for platform in ("facebook", "whatsapp"):
                if not self.app_secret_for(platform):
                    errors.append(f"{platform.upper()}_APP_SECRET não configurado")

        return errors


def _load_from_env() -> WebhookSettings:
    """Carrega WebhookSettings a partir de variáveis de ambiente."""
    verify_tokens: dict[str, str] = {}
    app_secrets: dict[str, str] = {}
    for platform in WEBHOOK_PLATFORMS:
        prefix = platform.upper()
        token = os.getenv(f"{prefix}_VERIFY_TOKEN", "")
        secret = os.getenv(f"{prefix}_APP_SECRET", "")
        if token:
            verify_tokens[platform] = token
        if secret:
            app_secrets[platform] = secret
    return WebhookSettings(
        tenant_header=os.getenv("WEBHOOK_TENANT_HEADER", DEFAULT_TENANT_HEADER).lower(),
        verify_tokens=verify_tokens,
        app_secrets=app_secrets,
        require_signature=os.getenv("WEBHOOK_REQUIRE_SIGNATURE", "").lower()
        in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Retorna instância cacheada de WebhookSettings."""
    return _load_from_env()
