"""Helpers de extração de campos por tipo de mensagem WhatsApp.

Cada função extrai campos específicos de um bloco do payload e
tolera blocos ausentes ou com shape inesperado.
"""

from __future__ import annotations

from typing import Any


def extract_text_message(msg: dict[str, Any]) -> str | None:
    """Extrai corpo de mensagem de texto."""
    text_block = msg.get("text")
    if isinstance(text_block, dict):
        body = text_block.get("body")
        return body if isinstance(body, str) else None
    return None


def extract_media_message(
    msg: dict[str, Any], media_type: str
) -> tuple[str | None, str | None]:
    """Extrai legenda e nome de arquivo de mídia (image, video, audio, document)."""
    media_block = msg.get(media_type)
    if not isinstance(media_block, dict):
        return None, None
    caption = media_block.get("caption")
    filename = media_block.get("filename")
    return (
        caption if isinstance(caption, str) else None,
        filename if isinstance(filename, str) else None,
    )


def extract_contact_name(value: dict[str, Any]) -> str | None:
    """Extrai nome do perfil do primeiro contato do change."""
    contacts = value.get("contacts") or []
    if not isinstance(contacts, list) or not contacts or not isinstance(contacts[0], dict):
        return None
    profile = contacts[0].get("profile") or {}
    if not isinstance(profile, dict):
        return None
    name = profile.get("name")
    return name if isinstance(name, str) and name else None


def extract_phone_number_id(value: dict[str, Any]) -> str | None:
    """Extrai o phone_number_id do número do tenant (destinatário inbound)."""
    metadata = value.get("metadata") or {}
    if not isinstance(metadata, dict):
        return None
    phone_number_id = metadata.get("phone_number_id")
    return str(phone_number_id) if phone_number_id else None
