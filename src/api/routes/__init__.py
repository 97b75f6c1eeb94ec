"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhooks, health)
- Validação inicial de request (headers, assinatura, JSON)
- Delegação para o use case de webhooks
- Respostas HTTP apropriadas

Estrutura:
- routes/webhooks/: GET/POST /webhook/{platform}
- routes/health/: health checks e readiness
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
