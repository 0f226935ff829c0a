# src/satclip/services/clip_service.py
from __future__ import annotations

"""
Clip Service (driver batch)

Objetivo: recortar las bandas de una escena Landsat a la bbox de una
máscara vectorial, con el CRS inferido desde el `*_MTL.txt` de cada archivo.

Etapas (Stage):
  • validate: directorios de entrada/salida, CRS fuente, lista de datasets.
  • extent: envolvente del primer feature de la máscara + margen fijo.
  • select: filtrado por patrón/banda/extensión y resolución de CRS.
  • clip: una llamada a RasterClipperPort.clip_bbox por archivo.

Notas:
  - El primer fallo aborta todo el recorrido; no hay reintentos.
  - Nunca termina el proceso: devuelve RunResult y el CLI traduce a exit code.
  - El CRS fuente es estado mutable (CrsState) que se arrastra entre archivos
    y entre datasets.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import Settings
from ..contracts.core import ClipJob, KeyMatch, PathParts, RunError, RunResult, Stage
from ..contracts.geo import Bounds, pretty_bounds
from ..errors import ClipError, ExtentError
from ..pathutils import directory_exists, find_pattern, join_dir, list_files_in_directory, split_path
from ..ports.extent import ExtentReaderPort
from ..ports.raster_clip import RasterClipperPort
from .crs_service import CrsState, parse_epsg
from .metadata_service import METADATA_PREFIX_LEN, METADATA_SUFFIX, MetadataLocator

log = logging.getLogger(__name__)


# ----------------------
# DTOs
# ----------------------

class ClipRequest(BaseModel):
    """Parámetros de una corrida (equivalente 1:1 a los flags del CLI)."""
    model_config = ConfigDict(frozen=True)
    input_dir: str
    output_dir: str
    source_crs: str
    mask: str
    datasets: tuple[str, ...] = Field(default=())
    pattern: str = ""
    label: str = ""


@dataclass(frozen=True)
class ClipOptions:
    """Convenciones de la corrida (normalmente derivadas de Settings)."""
    extent_margin: float = 31.0
    raster_extension: str = ".tif"
    southern_hemisphere: bool = False
    metadata_prefix_len: int = METADATA_PREFIX_LEN
    metadata_suffix: str = METADATA_SUFFIX
    key_match: KeyMatch = KeyMatch.SUBSTRING

    @staticmethod
    def from_settings(s: Settings) -> "ClipOptions":
        return ClipOptions(
            extent_margin=s.extent_margin,
            raster_extension=s.raster_extension,
            southern_hemisphere=s.southern_hemisphere,
            metadata_prefix_len=s.metadata_prefix_len,
            metadata_suffix=s.metadata_suffix,
            key_match=s.key_match,
        )

    def locator(self) -> MetadataLocator:
        return MetadataLocator(prefix_len=self.metadata_prefix_len, suffix=self.metadata_suffix, key_match=self.key_match)


class _Abort(Exception):
    """Corte interno del recorrido; lleva el RunError a devolver."""
    def __init__(self, error: RunError):
        super().__init__(error.message)
        self.error = error


def _fail(stage: Stage, message: str, detail: Optional[str] = None) -> _Abort:
    return _Abort(RunError(stage=stage, message=message, detail=detail))


# ----------------------
# Servicio
# ----------------------

@dataclass
class ClipService:
    extent_reader: ExtentReaderPort
    clipper: RasterClipperPort
    options: ClipOptions = field(default_factory=ClipOptions)

    # --- etapas ---
    def _validate(self, req: ClipRequest) -> None:
        log.info("Directorio de entrada: %s", req.input_dir)
        if not directory_exists(req.input_dir):
            raise _fail(Stage.VALIDATE, f"No existe el directorio de entrada: {req.input_dir}")
        log.info("Directorio de salida: %s", req.output_dir)
        if not directory_exists(req.output_dir):
            raise _fail(Stage.VALIDATE, f"No existe el directorio de salida: {req.output_dir}")
        log.info("CRS fuente: %s", req.source_crs)
        log.info("Máscara: %s", req.mask)
        log.info("Label: %s", req.label)
        log.info("Patrón: %s", req.pattern)
        if not req.datasets:
            raise _fail(Stage.VALIDATE, "No se indicaron datasets")
        log.info("Datasets: %s", " ".join(req.datasets))

    def resolve_extent(self, mask: str) -> Bounds:
        try:
            raw = self.extent_reader.read_extent(mask)
        except ExtentError as ex:
            raise _fail(Stage.EXTENT, "No se pudo leer la envolvente de la máscara", str(ex)) from ex
        bounds = raw.inflate(self.options.extent_margin)
        log.info("Extent: %s", pretty_bounds(bounds))
        return bounds

    def select(self, fname: str, band: str, pattern: str) -> Optional[PathParts]:
        """PathParts si el archivo entra al recorte de `band`; None si se descarta."""
        if pattern and not find_pattern(fname, pattern):
            return None
        if not find_pattern(fname, "_" + band):
            return None
        parts = split_path(fname)
        log.debug(
            "Archivo de entrada:\n  Directorio: %s\n  Basename:   %s\n  Stem:       %s\n  Extensión:  %s",
            parts.directory, parts.basename, parts.stem, parts.extension,
        )
        if parts.extension != self.options.raster_extension:
            log.info("%s: se esperaba extensión \"%s\". Se omite.", fname, self.options.raster_extension)
            return None
        return parts

    def resolve_epsg(self, state: CrsState, input_dir: str, fname: str) -> int:
        meta_path, record = self.options.locator().read(input_dir, fname)
        if record is not None:
            log.info("Metadatos=%s, Proj=%s, Zona=%d", meta_path, record.projection, record.utm_zone)
            state.adopt(record, southern=self.options.southern_hemisphere)
        else:
            log.warning("Metadatos no encontrados o extracción fallida. Se usa CRS fuente=%s", state.source_crs)
        code = parse_epsg(state.source_crs)
        if code <= 0:
            raise _fail(Stage.SELECT, "No se pudo obtener el código EPSG", state.source_crs)
        return code

    def build_job(self, req: ClipRequest, band: str, fname: str, parts: PathParts, bounds: Bounds, epsg: int) -> ClipJob:
        name = parts.stem + parts.extension
        return ClipJob(
            band=band,
            source_name=fname,
            in_path=join_dir(req.input_dir, name),
            out_path=join_dir(req.output_dir, parts.stem + req.label + parts.extension),
            bounds=bounds,
            epsg=epsg,
        )

    def _clip(self, job: ClipJob) -> None:
        log.info("inFile: %s", job.in_path)
        log.info("outFile: %s", job.out_path)
        log.info("epsgCode: %d", job.epsg)
        try:
            self.clipper.clip_bbox(job.in_path, job.out_path, job.bounds, job.epsg)
        except ClipError as ex:
            raise _fail(Stage.CLIP, f"Falló el recorte de: {job.source_name}", str(ex)) from ex

    # --- driver ---
    def run(self, req: ClipRequest) -> RunResult:
        state = CrsState(source_crs=req.source_crs)
        done: List[ClipJob] = []
        try:
            self._validate(req)
            bounds = self.resolve_extent(req.mask)
            files = sorted(list_files_in_directory(req.input_dir))
            for band in req.datasets:
                log.info("====== Procesando %s ======", band)
                for fname in files:
                    parts = self.select(fname, band, req.pattern)
                    if parts is None:
                        continue
                    log.info("Archivo=%s", fname)
                    epsg = self.resolve_epsg(state, req.input_dir, fname)
                    job = self.build_job(req, band, fname, parts, bounds, epsg)
                    self._clip(job)
                    done.append(job)
        except _Abort as ab:
            log.error("%s%s", ab.error.message, f" ({ab.error.detail})" if ab.error.detail else "")
            return RunResult(jobs=tuple(done), error=ab.error, final_crs=state.source_crs)
        return RunResult(jobs=tuple(done), final_crs=state.source_crs)


def make_request(
    input_dir: str,
    output_dir: str,
    source_crs: str,
    mask: str,
    datasets: Sequence[str],
    **kw,
) -> ClipRequest:
    return ClipRequest(
        input_dir=input_dir, output_dir=output_dir, source_crs=source_crs,
        mask=mask, datasets=tuple(datasets), **kw,
    )


__all__ = ["ClipRequest", "ClipOptions", "ClipService", "make_request"]
