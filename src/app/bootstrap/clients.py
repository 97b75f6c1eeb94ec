"""Factories de clientes externos — Firestore."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from config.settings import get_base_settings, get_firestore_settings

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def create_firestore_client() -> FirestoreClient:
    """Cria cliente Firestore (singleton).

    Usa FIRESTORE_PROJECT_ID, com fallback para GCP_PROJECT.
    """
    from google.cloud import firestore

    settings = get_firestore_settings()
    project_id = settings.project_id or get_base_settings().gcp_project or None
    client = firestore.Client(project=project_id, database=settings.database)
    logger.info(
        "firestore_client_created",
        extra={"project": project_id, "database": settings.database},
    )
    return client
