# src/satclip/contracts/core.py
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .geo import Bounds

# -------------------------
# Rutas
# -------------------------
class PathParts(BaseModel):
    """Partes de una ruta: `basename == stem + extension` siempre."""
    model_config = ConfigDict(frozen=True)
    directory: str = ""   # directorio padre (sin separador final)
    basename: str = ""    # nombre con extensión
    stem: str = ""        # nombre sin extensión
    extension: str = ""   # extensión con el punto, o vacío

# -------------------------
# Metadatos de escena (*_MTL.txt)
# -------------------------
class KeyMatch(str, Enum):
    SUBSTRING = "substring"  # la línea contiene la clave en cualquier posición
    EXACT = "exact"          # lado izquierdo del '=' idéntico a la clave

class MetadataRecord(BaseModel):
    model_config = ConfigDict(frozen=True)
    projection: str
    utm_zone: int

    @field_validator("projection")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("projection no puede ser vacío")
        return v

    @field_validator("utm_zone")
    @classmethod
    def _non_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("utm_zone no puede ser 0")
        return v

# -------------------------
# Trabajo de recorte
# -------------------------
class ClipJob(BaseModel):
    model_config = ConfigDict(frozen=True)
    band: str
    source_name: str
    in_path: str
    out_path: str
    bounds: Bounds
    epsg: int = Field(gt=0)

# -------------------------
# Ejecuciones / auditoría
# -------------------------
class Stage(str, Enum):
    VALIDATE = "validate"
    EXTENT = "extent"
    SELECT = "select"
    CLIP = "clip"

class RunError(BaseModel):
    model_config = ConfigDict(frozen=True)
    stage: Stage
    message: str
    detail: str | None = None

class RunResult(BaseModel):
    """Resultado del driver. El CLI lo traduce a código de salida."""
    model_config = ConfigDict(frozen=True)
    jobs: tuple[ClipJob, ...] = ()
    error: Optional[RunError] = None
    final_crs: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
