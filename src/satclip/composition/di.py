from __future__ import annotations
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..config import Settings, get_settings
from ..errors import ConfigError
from ..adapters.gdal_translate_cli import GdalTranslateCliClipper
from ..adapters.gdal_translate_clipper import GdalTranslateClipper
from ..adapters.ogr_extent_reader import OgrExtentReader
from ..ports.extent import ExtentReaderPort
from ..ports.raster_clip import RasterClipperPort
from ..services.clip_service import ClipOptions, ClipService

def load_settings_from_yaml(path: Path, **overrides: Any) -> Settings:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"YAML de configuración inválido: {path}")
    return Settings(**{**data, **overrides})

def build_settings(config_path: Optional[Path] = None, **overrides: Any) -> Settings:
    """YAML si se indica; si no, Settings del entorno. `overrides` vienen del CLI (None = no tocar)."""
    upd = {k: v for k, v in overrides.items() if v is not None}
    if config_path is not None:
        return load_settings_from_yaml(config_path, **upd)
    s = get_settings()
    return s.model_copy(update=upd) if upd else s

# Factories simples
def build_clipper(s: Settings) -> RasterClipperPort:
    if s.clip_backend == "cli":
        exe = str(s.gdal_translate_exe) if s.gdal_translate_exe else None
        return GdalTranslateCliClipper(gdal_translate_exe=exe, output_format=s.output_format)
    return GdalTranslateClipper(output_format=s.output_format)

def build_extent_reader(s: Settings) -> ExtentReaderPort:
    return OgrExtentReader()

def build_clip_service(s: Settings) -> ClipService:
    return ClipService(
        extent_reader=build_extent_reader(s),
        clipper=build_clipper(s),
        options=ClipOptions.from_settings(s),
    )
