import pytest
from satclip.pathutils import (
    directory_exists, ends_with, file_exists, find_pattern, join_dir,
    list_files_in_directory, split_by_commas, split_path,
)

def test_split_by_commas_drops_empty_tokens_without_trimming():
    assert split_by_commas("a,,b, c") == ["a", "b", " c"]
    assert split_by_commas("") == []
    assert split_by_commas(",,,") == []
    assert split_by_commas("QA_PIXEL,NDVI,EVI") == ["QA_PIXEL", "NDVI", "EVI"]

@pytest.mark.parametrize("path,directory,basename,stem,ext", [
    ("/data/LC08_SR_B4.tif", "/data", "LC08_SR_B4.tif", "LC08_SR_B4", ".tif"),
    ("LC08_SR_B4.tif", "", "LC08_SR_B4.tif", "LC08_SR_B4", ".tif"),
    ("C:\\scenes\\x.y.TIF", "C:\\scenes", "x.y.TIF", "x.y", ".TIF"),
    ("/data/README", "/data", "README", "README", ""),
    ("/data.d/noext", "/data.d", "noext", "noext", ""),
])
def test_split_path(path, directory, basename, stem, ext):
    p = split_path(path)
    assert (p.directory, p.basename, p.stem, p.extension) == (directory, basename, stem, ext)
    assert p.stem + p.extension == p.basename

def test_split_path_reconstructs_original():
    p = split_path("/a/b/c.tif")
    assert p.directory + "/" + p.basename == "/a/b/c.tif"

def test_directory_and_file_exists(tmp_path):
    f = tmp_path / "x.txt"
    f.write_text("x")
    assert directory_exists(str(tmp_path))
    assert not directory_exists(str(f))
    assert not directory_exists(str(tmp_path / "nope"))
    assert not directory_exists("")
    assert file_exists(str(f))
    assert not file_exists(str(tmp_path))

def test_pattern_and_suffix():
    assert find_pattern("LC08_021047_2017_SR_B4.tif", "_021047_2017")
    assert not find_pattern("LC08_021047_2018_SR_B4.tif", "_021047_2017")
    assert ends_with("scene_MTL.txt", "_MTL.txt")
    assert not ends_with("txt", "_MTL.txt")

def test_join_dir_inserts_separator_only_when_missing():
    assert join_dir("/in", "a.tif") == "/in/a.tif"
    assert join_dir("/in/", "a.tif") == "/in/a.tif"

def test_list_files_in_directory(tmp_path):
    (tmp_path / "b.tif").write_bytes(b"")
    (tmp_path / "a.tif").write_bytes(b"")
    assert sorted(list_files_in_directory(str(tmp_path))) == ["a.tif", "b.tif"]
    assert list_files_in_directory(str(tmp_path / "missing")) == []
