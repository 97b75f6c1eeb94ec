"""Conversão tolerante de timestamps vindos dos provedores."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

logger = logging.getLogger(__name__)


def parse_iso_datetime(value: object) -> datetime | None:
    """Converte string ISO-8601 em datetime com fuso (UTC se ausente).

    Valores vazios ou inválidos retornam None em vez de falhar o evento.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("timestamp_unparseable", extra={"format": "iso8601"})
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_epoch(value: object, *, milliseconds: bool = False) -> datetime | None:
    """Converte epoch (segundos ou milissegundos) em datetime UTC."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if milliseconds:
        number /= 1000
    try:
        return datetime.fromtimestamp(number, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None
