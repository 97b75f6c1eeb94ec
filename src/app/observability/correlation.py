"""Contexto de requisição: correlation_id e tenant_id.

Ambos são propagados em ContextVar (async-safe) e injetados nos logs
pelo RequestContextFilter.

Uso:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_tenant_id: ContextVar[str] = ContextVar("tenant_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None ou vazio, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_tenant_id() -> str:
    """Retorna o tenant do webhook em processamento."""
    return _tenant_id.get()


def set_tenant_id(tenant_id: str) -> Token[str]:
    return _tenant_id.set(tenant_id)


def reset_tenant_id(token: Token[str]) -> None:
    _tenant_id.reset(token)
