"""Utilitários compartilhados para normalizers Meta (WhatsApp, Facebook).

Responsabilidades:
- Validação do envelope de webhook Meta
- Conteúdo descritivo para mensagens de mídia
"""

from .content import describe_content
from .validator import dict_items, extract_entries, is_valid_message_data

__all__ = [
    "describe_content",
    "dict_items",
    "extract_entries",
    "is_valid_message_data",
]
