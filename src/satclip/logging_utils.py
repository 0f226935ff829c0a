"""Helpers de logging para el CLI de satclip."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LogOptions:
    """Configuración de la salida de logs."""

    debug: bool = False
    log_file: Path | None = None


def configure_logging(options: LogOptions) -> logging.Logger:
    """Configura el logger `satclip` (consola a stderr + archivo opcional)."""
    level = logging.DEBUG if options.debug else logging.INFO
    root = logging.getLogger("satclip")
    root.handlers.clear()
    root.setLevel(logging.DEBUG)
    root.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(console)

    if options.log_file:
        options.log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(options.log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)

    return root
