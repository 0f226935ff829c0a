# src/satclip/pathutils.py
from __future__ import annotations

"""
Utilidades de argumentos y rutas. Ninguna lanza: ante entrada mala devuelven
contenedores vacíos o False.
"""

import logging
import os
from typing import List

from .contracts.core import PathParts

log = logging.getLogger(__name__)

_SEPARATORS = ("/", "\\")


def split_by_commas(text: str) -> List[str]:
    """Tokens no vacíos en orden. No recorta espacios: "a,,b, c" -> ["a", "b", " c"]."""
    return [tok for tok in (text or "").split(",") if tok]


def split_path(path: str) -> PathParts:
    # último separador, sea Unix '/' o Windows '\\'
    cut = max(path.rfind(s) for s in _SEPARATORS)
    if cut == -1:
        directory, basename = "", path
    else:
        directory, basename = path[:cut], path[cut + 1:]

    dot = basename.rfind(".")
    if dot == -1:
        stem, extension = basename, ""
    else:
        stem, extension = basename[:dot], basename[dot:]
    return PathParts(directory=directory, basename=basename, stem=stem, extension=extension)


def directory_exists(path: str) -> bool:
    try:
        return bool(path) and os.path.isdir(path)
    except (TypeError, ValueError):
        return False


def file_exists(path: str) -> bool:
    return bool(path) and os.path.isfile(path)


def ends_with(text: str, suffix: str) -> bool:
    return text.endswith(suffix)


def find_pattern(filename: str, pattern: str) -> bool:
    """True si `pattern` aparece en cualquier posición de `filename`."""
    return pattern in filename


def join_dir(directory: str, name: str) -> str:
    """Concatena insertando '/' sólo si el directorio no termina en separador."""
    if not directory or any(ends_with(directory, s) for s in _SEPARATORS):
        return directory + name
    return directory + "/" + name


def list_files_in_directory(dir_path: str) -> List[str]:
    """Nombres de las entradas del directorio (sin '.' ni '..'); vacío si no abre."""
    try:
        return os.listdir(dir_path)
    except OSError as ex:
        log.error("opendir: %s: %s", dir_path, ex.strerror or ex)
        return []


__all__ = [
    "split_by_commas", "split_path", "directory_exists", "file_exists",
    "ends_with", "find_pattern", "join_dir", "list_files_in_directory",
]
