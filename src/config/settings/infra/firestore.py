"""Settings do Firestore.

Configurações para Google Cloud Firestore.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        database: ID do database Firestore
        collection_accounts: Collection de contas de integração
        collection_customers: Collection de clientes
        collection_messages: Collection de mensagens
        collection_shipments: Collection de remessas
        collection_integration_logs: Collection de logs de integração
    """

    project_id: str = ""
    database: str = "(default)"
    collection_accounts: str = "integration_accounts"
    collection_customers: str = "customers"
    collection_messages: str = "messages"
    collection_shipments: str = "shipments"
    collection_integration_logs: str = "integration_logs"

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        effective_project = self.project_id or gcp_project

        if not effective_project:
            errors.append(
                "FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado"
            )

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        database=os.getenv("FIRESTORE_DATABASE", "(default)"),
        collection_accounts=os.getenv(
            "FIRESTORE_COLLECTION_ACCOUNTS", "integration_accounts"
        ),
        collection_customers=os.getenv("FIRESTORE_COLLECTION_CUSTOMERS", "customers"),
        collection_messages=os.getenv("FIRESTORE_COLLECTION_MESSAGES", "messages"),
        collection_shipments=os.getenv("FIRESTORE_COLLECTION_SHIPMENTS", "shipments"),
        collection_integration_logs=os.getenv(
            "FIRESTORE_COLLECTION_INTEGRATION_LOGS", "integration_logs"
        ),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
