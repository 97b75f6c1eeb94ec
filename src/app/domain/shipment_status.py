"""
Status canônicos de remessa e regra de progresso monotônico.

O ciclo de vida de uma remessa é uma sequência ordenada:
PENDING → PICKED_UP → IN_TRANSIT → OUT_FOR_DELIVERY → (terminal)

Estados terminais (DELIVERED, FAILED, CANCELLED, RETURNED) têm o mesmo
rank: um terminal pode substituir outro, mas nunca volta a não-terminal.
"""

from __future__ import annotations

from enum import StrEnum


class ShipmentStatus(StrEnum):
    """Status canônicos de uma remessa."""

    # Estados não-terminais (em andamento)
    PENDING = "PENDING"
    PICKED_UP = "PICKED_UP"
    IN_TRANSIT = "IN_TRANSIT"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"

    # Estados terminais
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATUSES: frozenset[ShipmentStatus] = frozenset({
    ShipmentStatus.DELIVERED,
    ShipmentStatus.FAILED,
    ShipmentStatus.CANCELLED,
    ShipmentStatus.RETURNED,
})

_TERMINAL_RANK = 4

_PROGRESS_RANK: dict[ShipmentStatus, int] = {
    ShipmentStatus.PENDING: 0,
    ShipmentStatus.PICKED_UP: 1,
    ShipmentStatus.IN_TRANSIT: 2,
    ShipmentStatus.OUT_FOR_DELIVERY: 3,
    **{status: _TERMINAL_RANK for status in TERMINAL_STATUSES},
}

# Vocabulário das transportadoras → status canônico
COURIER_STATUS_MAP: dict[str, ShipmentStatus] = {
    "pending": ShipmentStatus.PENDING,
    "picked_up": ShipmentStatus.PICKED_UP,
    "in_transit": ShipmentStatus.IN_TRANSIT,
    "out_for_delivery": ShipmentStatus.OUT_FOR_DELIVERY,
    "delivered": ShipmentStatus.DELIVERED,
    "failed": ShipmentStatus.FAILED,
    "cancelled": ShipmentStatus.CANCELLED,
    "returned": ShipmentStatus.RETURNED,
}


def is_terminal(status: ShipmentStatus) -> bool:
    """Verifica se o status encerra o ciclo de vida da remessa."""
    return status in TERMINAL_STATUSES


def is_progress_or_equal(current: ShipmentStatus, incoming: ShipmentStatus) -> bool:
    """
    Verifica se aplicar ``incoming`` sobre ``current`` não regride a remessa.

    Args:
        current: Status armazenado
        incoming: Status reportado pelo webhook

    Returns:
        True se o status recebido está no mesmo estágio ou adiante
    """
    return _PROGRESS_RANK[incoming] >= _PROGRESS_RANK[current]


def map_courier_status(raw_status: object) -> ShipmentStatus | None:
    """
    Traduz o status da transportadora para o enum canônico.

    Returns:
        ShipmentStatus ou None para status desconhecido (nunca gravar lixo)
    """
    if not isinstance(raw_status, str):
        return None
    return COURIER_STATUS_MAP.get(raw_status.strip().lower())
