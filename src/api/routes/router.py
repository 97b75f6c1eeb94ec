"""Agregador de rotas — registra health e webhooks.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.webhooks.router import router as webhooks_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Uma rota parametrizada atende todas as plataformas do registry
    api_router.include_router(webhooks_router, prefix="/webhook", tags=["webhooks"])

    return api_router
