# src/satclip/ports/extent.py
from __future__ import annotations

from typing import Protocol, runtime_checkable
from ..contracts.geo import Bounds

URI = str

@runtime_checkable
class ExtentReaderPort(Protocol):
    """
    Lector de envolvente de un vector (shp/gpkg/geojson).
    Reglas: usa SOLO el primer feature de la primera capa; no combina envolventes.
    Lanza ExtentError si no hay capa, features o geometría.
    """
    def read_extent(self, uri: URI) -> Bounds: ...

__all__ = ["ExtentReaderPort", "URI"]
