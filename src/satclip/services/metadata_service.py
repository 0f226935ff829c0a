# src/satclip/services/metadata_service.py
from __future__ import annotations

"""
Localiza y parsea el sidecar de metadatos de una escena Landsat (`*_MTL.txt`).

Convención de nombres: los primeros `prefix_len` caracteres del nombre de
cualquier banda identifican la escena, p.ej.
    LC08_L2SP_021047_20250923_20251001_02_T1_SR_B4.TIF
    LC08_L2SP_021047_20250923_20251001_02_T1_MTL.txt
No se valida; si el archivo derivado no existe se devuelve "".
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from ..contracts.core import KeyMatch, MetadataRecord
from ..pathutils import file_exists, join_dir

log = logging.getLogger(__name__)

# Ancho fijo del identificador de escena Landsat Collection 2
METADATA_PREFIX_LEN = 40
METADATA_SUFFIX = "_MTL.txt"

PROJECTION_KEY = "MAP_PROJECTION"
UTM_ZONE_KEY = "UTM_ZONE"


def locate_metadata_file(
    dir_path: str,
    raster_name: str,
    *,
    prefix_len: int = METADATA_PREFIX_LEN,
    suffix: str = METADATA_SUFFIX,
) -> str:
    base = raster_name[:prefix_len]
    candidate = join_dir(dir_path, base + suffix)
    if not file_exists(candidate):
        return ""
    return candidate


def strip_value(text: str) -> str:
    """Quita espacios/tabs y una comilla doble al inicio y al final."""
    out = text.strip(" \t\r\n")
    if out.startswith('"'):
        out = out[1:]
    if out.endswith('"'):
        out = out[:-1]
    return out


def _key_matches(line: str, key: str, mode: KeyMatch) -> bool:
    if mode is KeyMatch.EXACT:
        return line.split("=", 1)[0].strip() == key
    return key in line


def _parse_zone(raw: str) -> int:
    # "15", "  15 ", "\"15\"" -> 15; cualquier otra cosa -> 0 (no encontrado)
    try:
        return int(strip_value(raw))
    except ValueError:
        return 0


def extract_projection_info(
    path: str,
    *,
    key_match: KeyMatch = KeyMatch.SUBSTRING,
) -> Optional[MetadataRecord]:
    """
    Recorre el archivo línea a línea buscando MAP_PROJECTION y UTM_ZONE.
    - El valor es lo que sigue al primer '='.
    - Corta en cuanto ambos campos están poblados.
    - Devuelve None si el archivo no abre o falta alguno de los dos campos.
    """
    projection = ""
    utm_zone = 0
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            for raw_line in fh:
                line = raw_line.strip(" \t\r\n")
                if "=" not in line:
                    continue
                value = line.split("=", 1)[1]

                if _key_matches(line, PROJECTION_KEY, key_match):
                    projection = strip_value(value)

                if _key_matches(line, UTM_ZONE_KEY, key_match):
                    zone = _parse_zone(value)
                    if zone == 0:
                        log.debug("UTM_ZONE no numérico en %s: %r", path, value.strip())
                    utm_zone = zone

                if projection and utm_zone != 0:
                    break
    except OSError as ex:
        log.error("No se pudo abrir el archivo: %s (%s)", path, ex)
        return None

    if not projection or utm_zone == 0:
        return None
    try:
        return MetadataRecord(projection=projection, utm_zone=utm_zone)
    except ValidationError as ex:
        log.debug("Metadatos inválidos en %s: %s", path, ex)
        return None


@dataclass(frozen=True)
class MetadataLocator:
    """Localizador+parser con la convención de nombres inyectada desde Settings."""
    prefix_len: int = METADATA_PREFIX_LEN
    suffix: str = METADATA_SUFFIX
    key_match: KeyMatch = KeyMatch.SUBSTRING

    def locate(self, dir_path: str, raster_name: str) -> str:
        return locate_metadata_file(dir_path, raster_name, prefix_len=self.prefix_len, suffix=self.suffix)

    def read(self, dir_path: str, raster_name: str) -> tuple[str, Optional[MetadataRecord]]:
        path = self.locate(dir_path, raster_name)
        if not path:
            return "", None
        return path, extract_projection_info(path, key_match=self.key_match)


__all__ = [
    "METADATA_PREFIX_LEN", "METADATA_SUFFIX", "PROJECTION_KEY", "UTM_ZONE_KEY",
    "locate_metadata_file", "strip_value", "extract_projection_info", "MetadataLocator",
]
