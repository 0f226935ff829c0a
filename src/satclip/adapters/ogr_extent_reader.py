# src/satclip/adapters/ogr_extent_reader.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

# Try GDAL/OGR first; fallback to fiona
try:  # OGR path
    from osgeo import ogr  # type: ignore
    _HAS_OGR = True
except Exception:  # pragma: no cover
    _HAS_OGR = False

try:  # fiona path
    import fiona  # type: ignore
    _HAS_FIONA = True
except Exception:  # pragma: no cover
    _HAS_FIONA = False

from ..contracts.geo import Bounds
from ..errors import ExtentError
from ..ports.extent import ExtentReaderPort

log = logging.getLogger(__name__)

_GEOJSON_EXT = (".geojson", ".json")


def _walk_coords(coords: Any, xs: list[float], ys: list[float]) -> None:
    if isinstance(coords, (list, tuple)) and coords and isinstance(coords[0], (list, tuple)):
        for c in coords:
            _walk_coords(c, xs, ys)
    elif isinstance(coords, (list, tuple)) and len(coords) >= 2 and all(isinstance(v, (int, float)) for v in coords[:2]):
        xs.append(float(coords[0])); ys.append(float(coords[1]))


def geometry_bounds(geom: Mapping[str, Any]) -> Bounds:
    """Envolvente de una geometría GeoJSON (incluye GeometryCollection)."""
    xs: list[float] = []
    ys: list[float] = []

    def _collect(g: Mapping[str, Any]) -> None:
        if g.get("type") == "GeometryCollection":
            for sub in g.get("geometries", []) or []:
                _collect(sub)
        else:
            _walk_coords(g.get("coordinates"), xs, ys)

    _collect(geom)
    if not xs:
        raise ExtentError("Geometría sin coordenadas")
    return Bounds(min(xs), min(ys), max(xs), max(ys))


def _first_feature_geometry(features: Iterable[Any]) -> Optional[Mapping[str, Any]]:
    for feat in features:
        geom = feat.get("geometry") if isinstance(feat, Mapping) else getattr(feat, "geometry", None)
        if geom is None:
            raise ExtentError("No hay geometría en el primer feature")
        # fiona>=1.9 devuelve fiona.model.Geometry (mapping-like)
        return geom if isinstance(geom, Mapping) else dict(geom)
    return None


@dataclass(frozen=True)
class OgrExtentReader(ExtentReaderPort):
    """Envolvente del primer feature de un vector. Prefiere OGR; si no, fiona.

    Los GeoJSON se leen directamente con `json` (sin backend).
    """
    prefer_ogr: bool = True

    # --------------- OGR ---------------
    def _extent_with_ogr(self, uri: str) -> Bounds:
        assert _HAS_OGR
        try:
            ds = ogr.Open(uri, 0)
        except RuntimeError as ex:  # gdal.UseExceptions() activo
            raise ExtentError(f"No se puede leer el vector: {uri}") from ex
        if ds is None:
            raise ExtentError(f"No se puede leer el vector: {uri}")
        try:
            if ds.GetLayerCount() < 1:
                raise ExtentError("Se esperaba una capa en el vector")
            layer = ds.GetLayer(0)
            layer.ResetReading()
            feat = layer.GetNextFeature()
            if feat is None:
                raise ExtentError("No hay features en el vector")
            geom = feat.GetGeometryRef()
            if geom is None:
                raise ExtentError("No hay geometría en el primer feature")
            minx, maxx, miny, maxy = geom.GetEnvelope()
            return Bounds(float(minx), float(miny), float(maxx), float(maxy))
        finally:
            ds = None  # cierre explícito

    # --------------- fiona ---------------
    def _extent_with_fiona(self, uri: str) -> Bounds:
        assert _HAS_FIONA
        try:
            layers = fiona.listlayers(uri)
        except Exception as ex:
            raise ExtentError(f"No se puede leer el vector: {uri}") from ex
        if not layers:
            raise ExtentError("Se esperaba una capa en el vector")
        with fiona.open(uri, layer=layers[0]) as src:
            geom = _first_feature_geometry(src)
        if geom is None:
            raise ExtentError("No hay features en el vector")
        return geometry_bounds(geom)

    # --------------- GeoJSON ---------------
    def _extent_from_geojson(self, uri: str) -> Bounds:
        try:
            with open(uri, "r", encoding="utf-8") as f:
                obj = json.load(f)
        except (OSError, ValueError) as ex:
            raise ExtentError(f"No se puede leer el vector: {uri}") from ex
        t = obj.get("type") if isinstance(obj, Mapping) else None
        if t == "FeatureCollection":
            geom = _first_feature_geometry(obj.get("features", []))
            if geom is None:
                raise ExtentError("No hay features en el vector")
        elif t == "Feature":
            geom = _first_feature_geometry([obj])
        elif isinstance(obj, Mapping) and ("coordinates" in obj or "geometries" in obj):
            geom = obj
        else:
            raise ExtentError("Formato GeoJSON no reconocido para la máscara")
        return geometry_bounds(geom)  # type: ignore[arg-type]

    # --------------- ExtentReaderPort ---------------
    def read_extent(self, uri: str) -> Bounds:
        if not os.path.exists(uri):
            raise ExtentError(f"No se puede leer el vector: {uri}")
        if uri.lower().endswith(_GEOJSON_EXT):
            b = self._extent_from_geojson(uri)
        elif _HAS_OGR and self.prefer_ogr:
            b = self._extent_with_ogr(uri)
        elif _HAS_FIONA:
            b = self._extent_with_fiona(uri)
        else:
            raise RuntimeError("No hay backend para leer vectores (instala GDAL o fiona)")
        log.debug("xmin: %s, ymin: %s, xmax: %s, ymax: %s", b.minx, b.miny, b.maxx, b.maxy)
        return b
