"""Settings do backend de persistência.

Seleciona entre stores em memória (dev/test) e Firestore.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StorageBackend = Literal["memory", "firestore"]


@dataclass(frozen=True)
class StorageSettings:
    """Configurações de persistência.

    Attributes:
        backend: Backend dos stores (memory|firestore)
    """

    backend: StorageBackend = "memory"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de persistência.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "firestore"):
            errors.append(f"STORAGE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "STORAGE_BACKEND=memory proibido em staging/production. "
                "Use Firestore."
            )

        if self.backend == "firestore" and not base.gcp_project:
            errors.append("STORAGE_BACKEND=firestore requer GCP_PROJECT configurado")

        return errors


def _load_storage_from_env() -> StorageSettings:
    """Carrega StorageSettings de variáveis de ambiente."""
    backend_str = os.getenv("STORAGE_BACKEND", "memory").lower()
    backend: StorageBackend = "firestore" if backend_str == "firestore" else "memory"
    return StorageSettings(backend=backend)


@lru_cache(maxsize=1)
def get_storage_settings() -> StorageSettings:
    """Retorna instância cacheada de StorageSettings."""
    return _load_storage_from_env()
