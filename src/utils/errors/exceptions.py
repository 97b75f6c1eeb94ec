"""Exceções compartilhadas do motor de ingestão de webhooks."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class PersistenceError(InfrastructureError):
    """Falha ao ler ou gravar no store de persistência."""


class FirestoreUnavailableError(PersistenceError):
    """Falha de indisponibilidade ao acessar Firestore."""


class WebhookError(ValueError):
    """Base para erros de roteamento e parse de webhook."""


class UnsupportedPlatformError(WebhookError):
    """Plataforma declarada não possui adapter registrado."""

    def __init__(self, platform: str) -> None:
        super().__init__(f"unsupported_platform: {platform}")
        self.platform = platform


class PayloadParseError(WebhookError):
    """Payload estruturalmente inválido para o adapter da plataforma."""
