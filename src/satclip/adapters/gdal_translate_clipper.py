# src/satclip/adapters/gdal_translate_clipper.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

# Try GDAL first; fallback to rasterio
try:  # GDAL path
    from osgeo import gdal, osr  # type: ignore
    _HAS_GDAL = True
except Exception:  # pragma: no cover
    _HAS_GDAL = False

try:  # rasterio path
    import rasterio
    from rasterio.crs import CRS
    from rasterio.errors import RasterioError, WindowError
    from rasterio.windows import Window, from_bounds
    _HAS_RASTERIO = True
except Exception:  # pragma: no cover
    _HAS_RASTERIO = False

from ..contracts.geo import Bounds
from ..errors import ClipError
from ..ports.raster_clip import RasterClipperPort

log = logging.getLogger(__name__)

# claves de bloque que dejan de ser válidas al achicar el raster
_BLOCK_KEYS = ("blockxsize", "blockysize", "tiled")


def _ensure_dir(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


@dataclass(frozen=True)
class GdalTranslateClipper(RasterClipperPort):
    """Recorte por ventana equivalente a `gdal_translate -projwin ... -a_srs EPSG:n`.

    Prefiere los bindings de GDAL; si no están, usa rasterio con una ventana
    calculada desde la bbox. La referencia espacial se ASIGNA (no se reproyecta).
    """
    output_format: str = "GTiff"
    prefer_gdal: bool = True

    # --------------- GDAL ---------------
    def _clip_with_gdal(self, in_uri: str, out_uri: str, bounds: Bounds, epsg: int) -> str:
        assert _HAS_GDAL
        try:
            src = gdal.Open(in_uri, gdal.GA_ReadOnly)
        except RuntimeError as ex:  # gdal.UseExceptions() activo
            raise ClipError(f"No se puede abrir: {in_uri}") from ex
        if src is None:
            raise ClipError(f"No se puede abrir: {in_uri}")
        out_ds = None
        try:
            srs = osr.SpatialReference()
            if srs.ImportFromEPSG(int(epsg)) != 0:
                raise ClipError(f"EPSG desconocido: {epsg}")
            opts = gdal.TranslateOptions(
                format=self.output_format,
                projWin=list(bounds.projwin()),
                outputSRS=srs.ExportToWkt(),
            )
            try:
                out_ds = gdal.Translate(out_uri, src, options=opts)
            except RuntimeError as ex:
                raise ClipError(f"gdal.Translate falló para {in_uri}: {ex}") from ex
            if out_ds is None:
                raise ClipError(f"gdal.Translate no devolvió dataset para {in_uri}")
            out_ds.FlushCache()
            return out_uri
        finally:
            out_ds = None
            src = None  # cierre explícito

    # --------------- rasterio ---------------
    def _clip_with_rasterio(self, in_uri: str, out_uri: str, bounds: Bounds, epsg: int) -> str:
        assert _HAS_RASTERIO
        try:
            with rasterio.open(in_uri) as src:
                win = from_bounds(bounds.minx, bounds.miny, bounds.maxx, bounds.maxy, transform=src.transform)
                win = win.round_offsets().round_lengths()
                win = win.intersection(Window(0, 0, src.width, src.height))
                data = src.read(window=win)
                profile = src.profile.copy()
                for k in _BLOCK_KEYS:
                    profile.pop(k, None)
                profile.update(
                    driver=self.output_format,
                    width=int(win.width),
                    height=int(win.height),
                    transform=src.window_transform(win),
                    crs=CRS.from_epsg(int(epsg)),
                )
            with rasterio.open(out_uri, "w", **profile) as dst:
                dst.write(data)
        except WindowError as ex:
            raise ClipError(f"La bbox no intersecta {in_uri}") from ex
        except RasterioError as ex:
            raise ClipError(f"rasterio falló para {in_uri}: {ex}") from ex
        return out_uri

    # --------------- RasterClipperPort ---------------
    def clip_bbox(self, in_uri: str, out_uri: str, bounds: Bounds, epsg: int) -> str:
        _ensure_dir(out_uri)
        if _HAS_GDAL and self.prefer_gdal:
            return self._clip_with_gdal(in_uri, out_uri, bounds, epsg)
        if _HAS_RASTERIO:
            return self._clip_with_rasterio(in_uri, out_uri, bounds, epsg)
        raise RuntimeError("No hay backend para recortar rasters (instala GDAL o rasterio)")
