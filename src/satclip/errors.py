# src/satclip/errors.py
"""Excepciones de satclip."""


class SatClipError(Exception):
    """Base de errores de satclip."""


class ConfigError(SatClipError):
    """Configuración o argumentos inválidos (flags, directorios, datasets)."""


class ExtentError(SatClipError):
    """No se pudo obtener la envolvente de la máscara vectorial."""


class ClipError(SatClipError):
    """La primitiva de recorte falló o no devolvió dataset de salida."""
