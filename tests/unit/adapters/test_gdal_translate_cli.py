import subprocess

import pytest

from satclip.adapters.gdal_translate_cli import GdalTranslateCliClipper
from satclip.contracts.geo import Bounds
from satclip.errors import ClipError


def test_build_args_projwin_and_srs():
    c = GdalTranslateCliClipper(gdal_translate_exe="/usr/bin/gdal_translate")
    args = c.build_args("in.tif", "out.tif", Bounds(69.0, 69.0, 231.0, 231.0), 32612)
    assert args == [
        "/usr/bin/gdal_translate", "-of", "GTiff",
        "-projwin", "69.0", "231.0", "231.0", "69.0",
        "-a_srs", "EPSG:32612",
        "in.tif", "out.tif",
    ]


def test_clip_runs_subprocess(tmp_path, monkeypatch):
    out = tmp_path / "sub" / "out.tif"
    seen = {}

    def _run(args, capture_output, text):
        seen["args"] = args
        out.write_bytes(b"II*")
        return subprocess.CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(subprocess, "run", _run)
    assert GdalTranslateCliClipper().clip_bbox("in.tif", str(out), Bounds(0, 0, 1, 1), 4326) == str(out)
    assert seen["args"][0] == "gdal_translate"


def test_clip_nonzero_exit_raises(tmp_path, monkeypatch):
    def _run(args, capture_output, text):
        return subprocess.CompletedProcess(args, 1, "", "ERROR 4: in.tif: No such file")

    monkeypatch.setattr(subprocess, "run", _run)
    with pytest.raises(ClipError, match="No such file"):
        GdalTranslateCliClipper().clip_bbox("in.tif", str(tmp_path / "o.tif"), Bounds(0, 0, 1, 1), 4326)


def test_missing_executable_raises(tmp_path):
    c = GdalTranslateCliClipper(gdal_translate_exe=str(tmp_path / "no_such_gdal_translate"))
    with pytest.raises(ClipError):
        c.clip_bbox("in.tif", str(tmp_path / "o.tif"), Bounds(0, 0, 1, 1), 4326)
