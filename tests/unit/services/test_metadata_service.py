from pathlib import Path

from factories import SCENE, mtl_text
from satclip.contracts.core import KeyMatch
from satclip.services.metadata_service import (
    MetadataLocator, extract_projection_info, locate_metadata_file, strip_value,
)

def _write(tmp_path: Path, text: str, name="m_MTL.txt") -> str:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)

def test_extract_projection_and_zone(tmp_path):
    path = _write(tmp_path, '  MAP_PROJECTION = "UTM"\nUTM_ZONE = 15\n')
    rec = extract_projection_info(path)
    assert rec is not None
    assert rec.projection == "UTM"
    assert rec.utm_zone == 15

def test_missing_key_fails(tmp_path):
    assert extract_projection_info(_write(tmp_path, 'MAP_PROJECTION = "UTM"\n')) is None
    assert extract_projection_info(_write(tmp_path, "UTM_ZONE = 15\n", "z_MTL.txt")) is None

def test_unreadable_file_fails(tmp_path):
    assert extract_projection_info(str(tmp_path / "nope_MTL.txt")) is None

def test_non_numeric_zone_is_not_found(tmp_path):
    path = _write(tmp_path, 'MAP_PROJECTION = "UTM"\nUTM_ZONE = abc\n')
    assert extract_projection_info(path) is None

def test_blank_projection_value_is_kept(tmp_path):
    path = _write(tmp_path, 'MAP_PROJECTION = " "\nUTM_ZONE = 12\n')
    rec = extract_projection_info(path)
    assert rec is not None
    assert rec.projection == " " and rec.utm_zone == 12

def test_stops_at_first_complete_pair(tmp_path):
    text = 'MAP_PROJECTION = "UTM"\nUTM_ZONE = 12\nUTM_ZONE = 14\n'
    rec = extract_projection_info(_write(tmp_path, text))
    assert rec is not None and rec.utm_zone == 12

def test_full_landsat_mtl(tmp_path):
    rec = extract_projection_info(_write(tmp_path, mtl_text(zone=16)))
    assert rec is not None
    assert (rec.projection, rec.utm_zone) == ("UTM", 16)

def test_substring_vs_exact_key_match(tmp_path):
    # "ORIG_UTM_ZONE" contiene la clave: sólo coincide en modo substring
    text = 'MAP_PROJECTION = "UTM"\nORIG_UTM_ZONE = 13\nUTM_ZONE = 15\n'
    path = _write(tmp_path, text)
    sub = extract_projection_info(path, key_match=KeyMatch.SUBSTRING)
    exact = extract_projection_info(path, key_match=KeyMatch.EXACT)
    assert sub is not None and sub.utm_zone == 13
    assert exact is not None and exact.utm_zone == 15

def test_strip_value():
    assert strip_value('  "UTM"  ') == "UTM"
    assert strip_value("\t15 ") == "15"
    assert strip_value('"') == ""
    assert strip_value("") == ""

def test_locate_uses_fixed_prefix(tmp_path):
    (tmp_path / f"{SCENE}_MTL.txt").write_text("x")
    name = f"{SCENE}_SR_B4.tif"
    assert locate_metadata_file(str(tmp_path), name) == str(tmp_path / f"{SCENE}_MTL.txt")
    assert locate_metadata_file(str(tmp_path) + "/", name) == str(tmp_path / f"{SCENE}_MTL.txt")
    assert locate_metadata_file(str(tmp_path), "LT05_other_scene_SR_B4.tif") == ""

def test_locator_with_custom_prefix(tmp_path):
    (tmp_path / "S2A_T19HFE_meta.txt").write_text('MAP_PROJECTION = "UTM"\nUTM_ZONE = 19\n')
    loc = MetadataLocator(prefix_len=10, suffix="_meta.txt")
    path, rec = loc.read(str(tmp_path), "S2A_T19HFE_B04.tif")
    assert path.endswith("S2A_T19HFE_meta.txt")
    assert rec is not None and rec.utm_zone == 19

def test_locator_without_sidecar(tmp_path):
    assert MetadataLocator().read(str(tmp_path), f"{SCENE}_SR_B4.tif") == ("", None)
