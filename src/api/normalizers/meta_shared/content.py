"""Conteúdo descritivo para mensagens de mídia.

O download de binários está fora do escopo; mensagens não-texto são
persistidas com um texto que descreve o que foi recebido.
"""

from __future__ import annotations

from app.domain.message import MessageType

DEFAULT_DOCUMENT_NAME = "document"
UNKNOWN_CONTENT = "Message received"


def describe_content(
    message_type: MessageType,
    *,
    raw_type: str | None,
    text: str | None = None,
    caption: str | None = None,
    filename: str | None = None,
) -> str:
    """Monta o conteúdo persistido de acordo com o tipo da mensagem.

    Args:
        message_type: Tipo canônico já mapeado
        raw_type: Tipo original do provedor (distingue TEXT de desconhecido)
        text: Corpo textual, quando existir
        caption: Legenda da mídia
        filename: Nome do arquivo (documentos)
    """
    if message_type == MessageType.TEXT:
        if text:
            return text
        if raw_type in (None, "text"):
            return ""
        return UNKNOWN_CONTENT
    if message_type == MessageType.IMAGE:
        return caption or "Image received"
    if message_type == MessageType.DOCUMENT:
        return f"Document: {filename or DEFAULT_DOCUMENT_NAME}"
    if message_type == MessageType.VIDEO:
        return "Video received"
    if message_type == MessageType.AUDIO:
        return "Audio received"
    return UNKNOWN_CONTENT
