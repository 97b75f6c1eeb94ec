"""Protocolos de normalização inbound por plataforma."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.platform import Platform
    from app.protocols.events import NormalizedEvent


class PlatformNormalizerProtocol(Protocol):
    """Contrato mínimo de um adapter de plataforma.

    ``parse`` levanta PayloadParseError apenas quando o payload inteiro é
    ilegível; sub-estruturas malformadas são descartadas individualmente.
    """

    platform: Platform

    def parse(self, payload: Any) -> list[NormalizedEvent]: ...
