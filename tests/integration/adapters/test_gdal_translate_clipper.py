# tests/integration/adapters/test_gdal_translate_clipper.py
from pathlib import Path

import pytest

from satclip.adapters.gdal_translate_clipper import GdalTranslateClipper
from satclip.contracts.geo import Bounds
from satclip.errors import ClipError

pytestmark = pytest.mark.integration

rasterio = pytest.importorskip("rasterio")
np = pytest.importorskip("numpy")
from rasterio.transform import from_origin  # noqa: E402


def _tiny_tif(path: Path, epsg=32615) -> Path:
    # 100x100 px de 30 m con origen (0, 3000)
    data = np.arange(100 * 100, dtype=np.uint16).reshape(1, 100, 100)
    profile = {
        "driver": "GTiff", "width": 100, "height": 100, "count": 1, "dtype": "uint16",
        "crs": f"EPSG:{epsg}", "transform": from_origin(0.0, 3000.0, 30.0, 30.0),
    }
    with rasterio.open(path, "w", **profile) as dst:
        dst.write(data)
    return path


def test_rasterio_window_and_assigned_crs(tmp_path: Path):
    src = _tiny_tif(tmp_path / "scene_SR_B4.tif")
    out = tmp_path / "out" / "scene_SR_B4_clipped.tif"

    GdalTranslateClipper(prefer_gdal=False).clip_bbox(str(src), str(out), Bounds(300.0, 300.0, 900.0, 1200.0), 32612)

    with rasterio.open(out) as ds:
        assert ds.crs.to_epsg() == 32612
        assert (ds.width, ds.height) == (20, 30)
        assert ds.bounds.left == pytest.approx(300.0)
        assert ds.bounds.top == pytest.approx(1200.0)


def test_rasterio_missing_input(tmp_path: Path):
    with pytest.raises(ClipError):
        GdalTranslateClipper(prefer_gdal=False).clip_bbox(
            str(tmp_path / "nope.tif"), str(tmp_path / "o.tif"), Bounds(0, 0, 1, 1), 32615)


def test_gdal_translate_bindings(tmp_path: Path):
    pytest.importorskip("osgeo.gdal")
    src = _tiny_tif(tmp_path / "scene_SR_B4.tif")
    out = tmp_path / "scene_SR_B4_clipped.tif"

    GdalTranslateClipper().clip_bbox(str(src), str(out), Bounds(300.0, 300.0, 900.0, 1200.0), 32612)

    with rasterio.open(out) as ds:
        assert ds.crs.to_epsg() == 32612
        assert (ds.width, ds.height) == (20, 30)
