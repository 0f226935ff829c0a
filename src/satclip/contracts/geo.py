# src/satclip/contracts/geo.py

from __future__ import annotations
from typing import NamedTuple, Tuple

EPSG_PREFIX = "EPSG:"

class Bounds(NamedTuple):
    minx: float; miny: float; maxx: float; maxy: float

    def inflate(self, margin: float) -> "Bounds":
        """Caja nueva expandida `margin` unidades en las cuatro direcciones."""
        m = float(margin)
        return Bounds(self.minx - m, self.miny - m, self.maxx + m, self.maxy + m)

    def projwin(self) -> Tuple[float, float, float, float]:
        """Orden de `-projwin` de gdal_translate: ulx, uly, lrx, lry (Y máx antes que Y mín)."""
        return (self.minx, self.maxy, self.maxx, self.miny)

def pretty_bounds(b: Bounds, ndigits: int = 15) -> str:
    return (f"minX={b.minx:.{ndigits}f}, minY={b.miny:.{ndigits}f}, "
            f"maxX={b.maxx:.{ndigits}f}, maxY={b.maxy:.{ndigits}f}")

__all__ = ["Bounds", "EPSG_PREFIX", "pretty_bounds"]
