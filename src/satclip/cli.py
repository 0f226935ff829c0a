# src/satclip/cli.py
from __future__ import annotations

"""
CLI satclip: recorta bandas TIF de una escena Landsat a la bbox de una máscara.

Ejemplo rápido:
  python -m satclip.cli \
      --idir ./LANDSAT/SCENES/021047/ --odir ./LANDSAT/CLIPPED/ \
      --source_crs EPSG:32615 --mask ./GIS/Vector/parcela.shp \
      --datasets QA_PIXEL,NDVI,EVI --label _clipped
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import RELEASE_DATE, __version__
from .composition.di import build_clip_service, build_settings
from .contracts.core import KeyMatch, RunError, Stage
from .errors import SatClipError
from .logging_utils import LogOptions, configure_logging
from .pathutils import split_by_commas
from .services.clip_service import ClipRequest

DESCRIPTION = "Recorta bandas TIF de una escena Landsat a la envolvente de una máscara vectorial."

# (dest, mensaje) en el orden en que se validan
_REQUIRED = (
    ("idir", "Se requiere el directorio de entrada."),
    ("odir", "Se requiere el directorio de salida."),
    ("source_crs", "Se requiere el CRS fuente."),
    ("mask", "Se requiere la máscara."),
    ("datasets", "Se requieren los datasets."),
)


def version_text() -> str:
    return (
        f"satclip v{__version__} release {RELEASE_DATE}\n"
        "License GPLv3+: GNU GPL version 3 or later <https://gnu.org/licenses/gpl.html>.\n"
        "This is free software: you are free to change and redistribute it.\n"
        "There is NO WARRANTY, to the extent permitted by law."
    )


class _Parser(argparse.ArgumentParser):
    # opción desconocida o argumento faltante -> ayuda + código 1
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_help(sys.stderr)
        self.exit(1, f"[ERROR] {message}\n")


# ----------------------
# Parser
# ----------------------

def _build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="satclip", description=DESCRIPTION)
    p.add_argument("-i", "--idir", metavar="DIR", help="directorio de entrada con archivos *.tif")
    p.add_argument("-o", "--odir", metavar="DIR", help="directorio de salida para los *.tif recortados")
    p.add_argument("-c", "--source_crs", metavar="STR", help='CRS fuente (p.ej. "EPSG:32615")')
    p.add_argument("-m", "--mask", metavar="FILE", help="máscara vectorial (*.shp, *.gpkg, *.geojson)")
    p.add_argument("-d", "--datasets", metavar="LIST", help="lista de datasets/bandas separadas por coma")
    p.add_argument("-p", "--pattern", metavar="STR", default="", help="patrón para filtrar archivos a procesar")
    p.add_argument("-n", "--label", metavar="STR", default="", help="sufijo para los archivos de salida")
    p.add_argument("-g", "--debug", action="store_true", help="diagnóstico detallado de rutas")
    p.add_argument("-v", "--version", action="store_true", help="muestra la versión")
    p.add_argument("--config", metavar="FILE", help="YAML con Settings (sobre-escribe entorno)")
    p.add_argument("--southern", action="store_true", default=None, help="zonas UTM del hemisferio sur (EPSG:327NN)")
    p.add_argument("--key-match", choices=[k.value for k in KeyMatch], help="coincidencia de claves en *_MTL.txt")
    p.add_argument("--backend", choices=["bindings", "cli"], help="bindings de GDAL/rasterio o binario gdal_translate")
    p.add_argument("--log-file", metavar="FILE", help="archivo de log (nivel DEBUG)")
    return p


def _missing_required(args: argparse.Namespace) -> Optional[str]:
    for dest, msg in _REQUIRED:
        if not getattr(args, dest):
            return msg
    return None


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as ex:  # -h o error de parseo
        return int(ex.code or 0)

    if args.version:
        print(version_text())
        return 0

    print("satclip - " + DESCRIPTION)
    missing = _missing_required(args)
    if missing:
        print(f"[ERROR] {missing}\n", file=sys.stderr)
        parser.print_help()
        return 1

    configure_logging(LogOptions(debug=args.debug, log_file=Path(args.log_file) if args.log_file else None))

    try:
        settings = build_settings(
            Path(args.config) if args.config else None,
            southern_hemisphere=args.southern,
            key_match=KeyMatch(args.key_match) if args.key_match else None,
            clip_backend=args.backend,
        )
        service = build_clip_service(settings)
        req = ClipRequest(
            input_dir=args.idir,
            output_dir=args.odir,
            source_crs=args.source_crs,
            mask=args.mask,
            datasets=tuple(split_by_commas(args.datasets)),
            pattern=args.pattern or "",
            label=args.label or "",
        )
        result = service.run(req)
    except KeyboardInterrupt:
        return 130
    except (SatClipError, ValueError, OSError, RuntimeError) as ex:
        print(f"[ERROR] {ex}", file=sys.stderr)
        return 1

    if not result.ok:
        err = result.error or RunError(stage=Stage.CLIP, message="Corrida fallida")
        print(f"[ERROR] {err.message}" + (f": {err.detail}" if err.detail else ""), file=sys.stderr)
        return result.exit_code

    for job in result.jobs:
        print(job.out_path)
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
