"""Settings base do serviço de ingestão.

Identidade do serviço, ambiente e tenant padrão dos webhooks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do serviço.

    Attributes:
        environment: Ambiente de execução; define se a validação bloqueia o boot
        service_name: Nome do serviço nos logs
        gcp_project: Projeto GCP do Firestore
        default_tenant_id: Tenant usado quando o webhook não traz o header de tenant
    """

    environment: Environment = "development"
    service_name: str = "pyloto-ingest"
    gcp_project: str = ""
    default_tenant_id: str = ""

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Retorna lista de erros (vazia = OK)."""
        if not self.service_name:
            return ["SERVICE_NAME não pode ser vazio"]
        return []


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Carrega BaseSettings do ambiente (cacheado; testes usam cache_clear)."""
    environment = os.getenv("ENVIRONMENT", "development").lower()
    return BaseSettings(
        environment=_ENVIRONMENT_ALIASES.get(environment, "development"),
        service_name=os.getenv("SERVICE_NAME", "pyloto-ingest"),
        gcp_project=os.getenv("GCP_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT", "")),
        default_tenant_id=os.getenv("DEFAULT_TENANT_ID", ""),
    )
