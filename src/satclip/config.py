# src/satclip/config.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .contracts.core import KeyMatch
from .services.metadata_service import METADATA_PREFIX_LEN, METADATA_SUFFIX

__version__ = "1.0.0"
RELEASE_DATE = "2025-11-17"

ClipBackend = Literal["bindings", "cli"]

class Settings(BaseSettings):
    """
    Config unificada de satclip. No toca disco.
    Precedencia: defaults < entorno (SATCLIP_*) < YAML (--config) < flags del CLI.
    """
    model_config = SettingsConfigDict(
        frozen=True,
        env_file=".env",
        env_prefix="SATCLIP_",
        extra="forbid",
    )

    # --- convención de nombres de escena ---
    metadata_prefix_len: int = Field(METADATA_PREFIX_LEN, gt=0)
    metadata_suffix: str = METADATA_SUFFIX
    key_match: KeyMatch = KeyMatch.SUBSTRING
    raster_extension: str = ".tif"

    # --- geometría / CRS ---
    # en unidades nativas de la máscara (m si es UTM)
    extent_margin: float = 31.0
    southern_hemisphere: bool = False  # todas las escenas Landsat del flujo son hemisferio norte

    # --- herramientas externas ---
    clip_backend: ClipBackend = "bindings"
    gdal_translate_exe: Optional[Path] = None  # si None, se busca en PATH desde adapters
    output_format: str = "GTiff"

    # ----------------------------
    # Normalizadores / validadores
    # ----------------------------
    @field_validator("metadata_suffix", "output_format", mode="before")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v2 = str(v).strip()
        if not v2:
            raise ValueError("el valor no puede ser vacío")
        return v2

    @field_validator("raster_extension", mode="before")
    @classmethod
    def _dotted(cls, v: str) -> str:
        v2 = str(v).strip()
        if not v2:
            raise ValueError("raster_extension no puede ser vacío")
        return v2 if v2.startswith(".") else "." + v2

    @field_validator("gdal_translate_exe", mode="after")
    @classmethod
    def _expand_exe(cls, p: Optional[Path]) -> Optional[Path]:
        return None if p is None else p.expanduser()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Instancia cacheada. Úsala SOLO desde composition/di.py o CLI.
    Para tests, recuerda limpiar:
        get_settings.cache_clear()
    """
    return Settings()
