"""Rotas de webhook por plataforma."""

from .router import router

__all__ = ["router"]
