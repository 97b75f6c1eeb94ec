"""Validação comum para payloads Meta Graph API.

Responsabilidades:
- Validar o envelope ``{"object": ..., "entry": [...]}``
- Rejeitar payloads inteiramente malformados
- Filtrar sub-estruturas que não são objetos
"""

from __future__ import annotations

from typing import Any

from utils.errors import PayloadParseError


def extract_entries(payload: Any, expected_object: str) -> list[Any]:
    """Valida o envelope Meta e retorna a lista bruta de entries.

    Args:
        payload: Corpo do webhook já decodificado
        expected_object: Valor esperado em ``payload["object"]``

    Raises:
        PayloadParseError: Se o envelope não for reconhecido

    Returns:
        Lista de entries (itens ainda não validados)
    """
    if not isinstance(payload, dict):
        raise PayloadParseError("payload_not_object")

    if payload.get("object") != expected_object:
        raise PayloadParseError("unexpected_object")

    entries = payload.get("entry")
    if not isinstance(entries, list):
        raise PayloadParseError("entry_not_list")

    return entries


def dict_items(value: Any) -> list[dict[str, Any]]:
    """Retorna apenas os itens dict de uma lista (tolerante a None)."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def is_valid_message_data(message: Any) -> bool:
    """Valida shape mínimo necessário para seguir com normalização.

    Args:
        message: Estrutura intermediária produzida pelo extractor

    Returns:
        True se válido, False caso contrário
    """
    if not isinstance(message, dict):
        return False
    return bool(message.get("message_id")) and bool(message.get("sender_id"))
