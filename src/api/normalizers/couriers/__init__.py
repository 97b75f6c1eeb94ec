"""Normalizers de transportadoras (Aramex, DHL, Domex)."""

from .extractor import extract_tracking_update
from .normalizer import CourierNormalizer

__all__ = [
    "CourierNormalizer",
    "extract_tracking_update",
]
