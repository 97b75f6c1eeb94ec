"""Ids determinísticos de documentos Firestore.

A chave natural vira o id do documento; assim ``create()`` é o
create-if-absent atômico e duas entregas do mesmo evento colidem.
"""

from __future__ import annotations

import hashlib


def document_id(*parts: str) -> str:
    """Hash sha256 estável das partes da chave natural."""
    raw = "\x1f".join(parts)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
