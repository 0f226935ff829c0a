# src/satclip/adapters/gdal_translate_cli.py
from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass

from ..contracts.geo import Bounds
from ..errors import ClipError
from ..ports.raster_clip import RasterClipperPort

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class GdalTranslateCliClipper(RasterClipperPort):
    """Adapter que invoca `gdal_translate` por CLI para recortar por bbox.

    Si `gdal_translate_exe` es None, intenta usar `gdal_translate` del PATH.
    """
    gdal_translate_exe: str | None = None
    output_format: str = "GTiff"

    def _exe(self) -> str:
        exe = self.gdal_translate_exe or "gdal_translate"
        return exe

    def build_args(self, in_uri: str, out_uri: str, bounds: Bounds, epsg: int) -> list[str]:
        ulx, uly, lrx, lry = bounds.projwin()
        args = [self._exe(), "-of", self.output_format]
        args += ["-projwin", repr(ulx), repr(uly), repr(lrx), repr(lry)]
        args += ["-a_srs", f"EPSG:{int(epsg)}"]
        args += [in_uri, out_uri]
        return args

    # --- RasterClipperPort ---
    def clip_bbox(self, in_uri: str, out_uri: str, bounds: Bounds, epsg: int) -> str:
        args = self.build_args(in_uri, out_uri, bounds, epsg)
        out_dir = os.path.dirname(out_uri)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        log.debug("exec: %s", " ".join(args))
        try:
            cp = subprocess.run(args, capture_output=True, text=True)
        except FileNotFoundError as ex:
            raise ClipError(f"No se encontró {self._exe()}") from ex
        if cp.returncode != 0:
            raise ClipError(f"gdal_translate error: {cp.stderr.strip()}")
        if not os.path.exists(out_uri):
            raise ClipError(f"gdal_translate no generó salida: {out_uri}")
        return out_uri
