import numpy as np
import pytest
import xarray as xr

from cmsaf_reader.coordinates import (
    apply_region,
    compute_regional_slices,
    convert_coordinates_to_indices,
    convert_indices_to_coordinates,
    extract_value,
    extract_window,
    validate_grid_coordinates,
    validate_region_bounds,
)
from cmsaf_reader.core.core_types import Region
from cmsaf_reader.core.exceptions import CoordinateError, ParameterError

LON = np.arange(-10.0, 14.0, 2.0)
LAT = np.arange(36.0, 60.0, 3.0)


def test_full_domain_without_selection():
    info = compute_regional_slices(LON, LAT, Region())
    assert info.x_slice == slice(0, 12)
    assert info.y_slice == slice(0, 8)
    assert not info.is_empty


def test_coordinate_selection():
    info = compute_regional_slices(LON, LAT, Region(lon_range=(-5, 5), lat_range=(40, 50)))
    assert LON[info.x_slice].tolist() == [-4.0, -2.0, 0.0, 2.0, 4.0]
    assert LAT[info.y_slice].tolist() == [42.0, 45.0, 48.0]


def test_coordinate_selection_descending_latitude():
    lat_desc = LAT[::-1]
    info = compute_regional_slices(LON, lat_desc, Region(lat_range=(40, 50)))
    assert lat_desc[info.y_slice].tolist() == [48.0, 45.0, 42.0]


def test_index_selection_takes_priority_and_clamps():
    with pytest.warns(UserWarning):
        region = Region(lon_range=(-5, 5), x_range=(10, 50))
    info = compute_regional_slices(LON, LAT, region)
    assert info.x_slice == slice(10, 12)


def test_selection_outside_grid_is_empty():
    info = compute_regional_slices(LON, LAT, Region(lon_range=(100, 120)))
    assert info.is_empty


def test_region_validation():
    with pytest.raises(ValueError):
        Region(lon_range=(5, -5))
    with pytest.raises(ValueError):
        Region(x_range=(-1, 3))


def test_apply_region_on_dataarray():
    da = xr.DataArray(
        np.zeros((8, 12)), dims=("lat", "lon"), coords={"lat": LAT, "lon": LON}
    )
    subset = apply_region(da, Region(x_range=(0, 2), y_range=(1, 1)))
    assert subset.shape == (1, 3)
    assert subset["lat"].item() == 39.0


def test_extract_value_and_window():
    grid = np.arange(20.0).reshape(4, 5)
    assert extract_value(grid, 2, 3) == 13.0
    np.testing.assert_array_equal(extract_window(grid, (0, 2), (1, 3)), [[1.0, 2.0], [6.0, 7.0]])


def test_extract_value_out_of_bounds():
    with pytest.raises(ParameterError):
        extract_value(np.zeros((2, 2)), 2, 0)


@pytest.mark.parametrize("rows, cols", [((0, 5), (0, 1)), ((1, 1), (0, 1)), ((-1, 1), (0, 1))])
def test_extract_window_invalid(rows, cols):
    with pytest.raises(ParameterError):
        extract_window(np.zeros((4, 4)), rows, cols)


def test_conversions():
    indices = convert_coordinates_to_indices(LON, LAT, lon_range=(0, 4), lat_range=(100, 110))
    assert indices == {"x_range": (5, 7), "y_range": None}

    coords = convert_indices_to_coordinates(LON, LAT, x_range=(5, 7), y_range=(0, 99))
    assert coords == {"lon_range": (0.0, 4.0), "lat_range": (36.0, 57.0)}


def test_indices_to_coordinates_descending_latitude():
    lat_desc = LAT[::-1]
    coords = convert_indices_to_coordinates(LON, lat_desc, y_range=(1, 4))
    assert coords["lat_range"] == (45.0, 54.0)

    region = Region(**coords)
    info = compute_regional_slices(LON, lat_desc, region)
    assert lat_desc[info.y_slice].tolist() == [54.0, 51.0, 48.0, 45.0]
    assert convert_coordinates_to_indices(LON, lat_desc, lat_range=region.lat_range)["y_range"] == (1, 4)


def test_validate_region_bounds():
    validate_region_bounds(Region(lon_range=(-10, 12)), LON, LAT)
    with pytest.raises(ParameterError):
        validate_region_bounds(Region(lat_range=(30, 40)), LON, LAT)
    with pytest.raises(ParameterError):
        validate_region_bounds(Region(x_range=(0, 12)), LON, LAT)


def test_validate_grid_coordinates():
    validate_grid_coordinates(np.zeros((8, 12)), LON, LAT)
    validate_grid_coordinates(np.zeros((12, 8)), LON, LAT, lon_first=True)
    with pytest.raises(CoordinateError):
        validate_grid_coordinates(np.zeros((12, 8)), LON, LAT)
