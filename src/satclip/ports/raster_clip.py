# src/satclip/ports/raster_clip.py
from __future__ import annotations

from typing import Protocol, runtime_checkable
from ..contracts.geo import Bounds

URI = str

@runtime_checkable
class RasterClipperPort(Protocol):
    """
    Recorta un raster por bbox (ventana projWin) y asigna la referencia espacial EPSG dada.
    Implementación típica: gdal.Translate / gdal_translate.
    Devuelve la URI escrita; lanza ClipError si la entrada no abre o no hay salida.
    """
    def clip_bbox(self, in_uri: URI, out_uri: URI, bounds: Bounds, epsg: int) -> URI: ...

__all__ = ["RasterClipperPort", "URI"]
