from datetime import datetime
from pathlib import Path

import pytest

from cmsaf_reader.core.exceptions import DataFileNotFoundError, InvalidFormatError
from cmsaf_reader.io.file_utils import (
    file_exists,
    get_working_directory,
    list_netcdf_files,
    parse_product_filename,
    resolve_data_path,
    set_working_directory,
)


def test_parse_product_filename_sample():
    info = parse_product_filename("SDUms201808010000401UD1000101UD.nc")
    assert info.product == "SDU"
    assert info.timestep_code == "ms"
    assert info.timestep == "monthly sum"
    assert info.timestamp == datetime(2018, 8, 1, 0, 0)
    assert info.identifier == "401UD1000101UD"


def test_parse_product_filename_unknown_timestep(tmp_path: Path):
    info = parse_product_filename(tmp_path / "SISzz202001151200.nc")
    assert info.product == "SIS"
    assert info.timestep is None
    assert info.identifier == ""


@pytest.mark.parametrize("name", ["sunshine.nc", "SDUms2018.nc", "SDUms201808010000401UD.grb"])
def test_parse_product_filename_rejects_other_names(name):
    with pytest.raises(InvalidFormatError):
        parse_product_filename(name)


def test_parse_product_filename_rejects_bad_date():
    with pytest.raises(InvalidFormatError):
        parse_product_filename("SDUms201813010000.nc")


def test_resolve_data_path_relative_to_data_dir(tmp_path: Path):
    assert resolve_data_path("file.nc", tmp_path) == tmp_path / "file.nc"


def test_resolve_data_path_absolute_unchanged(tmp_path: Path):
    absolute = tmp_path / "elsewhere" / "file.nc"
    assert resolve_data_path(absolute, "/ignored") == absolute


def test_resolve_data_path_uses_working_directory(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert resolve_data_path("file.nc") == tmp_path.resolve() / "file.nc"


def test_set_working_directory(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(Path.cwd())
    cwd = set_working_directory(tmp_path)
    assert cwd == tmp_path.resolve()
    assert get_working_directory() == tmp_path.resolve()


def test_set_working_directory_missing(tmp_path: Path):
    with pytest.raises(DataFileNotFoundError):
        set_working_directory(tmp_path / "missing")


def test_file_exists(sample_file: Path):
    assert file_exists(sample_file)
    assert not file_exists(sample_file.parent / "missing.nc")
    assert not file_exists(sample_file.parent)


def test_list_netcdf_files(sample_file: Path):
    (sample_file.parent / "notes.txt").write_text("not netcdf")
    assert list_netcdf_files(sample_file.parent) == [sample_file]


def test_list_netcdf_files_missing_directory(tmp_path: Path):
    with pytest.raises(DataFileNotFoundError):
        list_netcdf_files(tmp_path / "missing")
