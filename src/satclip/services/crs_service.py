# src/satclip/services/crs_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..contracts.core import MetadataRecord
from ..contracts.geo import EPSG_PREFIX

log = logging.getLogger(__name__)

UTM_NORTH_BASE = 32600
UTM_SOUTH_BASE = 32700


def epsg_from_utm_zone(zone: int, southern: bool = False) -> str:
    """Zona UTM (1..60) -> 'EPSG:326NN' (norte) o 'EPSG:327NN' (sur); fuera de rango -> ''."""
    if zone < 1 or zone > 60:
        return ""
    code = (UTM_SOUTH_BASE if southern else UTM_NORTH_BASE) + zone
    return f"{EPSG_PREFIX}{code}"


def parse_epsg(text: str) -> int:
    """'EPSG:32615' -> 32615. Prefijo distinto o sufijo no numérico -> -1 (el llamador rechaza <= 0)."""
    if not text.startswith(EPSG_PREFIX):
        return -1
    digits = text[len(EPSG_PREFIX):].strip()
    try:
        return int(digits)
    except ValueError:
        return -1


@dataclass
class CrsState:
    """CRS fuente vigente durante todo el recorrido.

    Un CRS adoptado desde los metadatos de un archivo queda
    como default para los archivos (y datasets) siguientes; nunca se resetea.
    """
    source_crs: str

    def adopt(self, record: MetadataRecord, *, southern: bool = False) -> str:
        """Aplica la zona UTM del registro; devuelve el CRS vigente para el archivo actual."""
        candidate = epsg_from_utm_zone(record.utm_zone, southern)
        log.info("  CRS fuente=%s, CRS metadatos=%s", self.source_crs, candidate or "-")
        if candidate and candidate != self.source_crs:
            log.info("***Actualizando CRS %s -> %s", self.source_crs, candidate)
            self.source_crs = candidate
        return self.source_crs

    def epsg(self) -> int:
        return parse_epsg(self.source_crs)


__all__ = ["epsg_from_utm_zone", "parse_epsg", "CrsState", "UTM_NORTH_BASE", "UTM_SOUTH_BASE"]
