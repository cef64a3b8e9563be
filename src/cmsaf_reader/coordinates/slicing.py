"""
CM SAF Reader Spatial Slicing

This module computes index slices for regional selection and extracts
single values or windows from 2D grids.
"""

from typing import Tuple, Union
import numpy as np
import xarray as xr

from ..core.config import LON_DIM, LAT_DIM
from ..core.core_types import Region, SliceInfo, IndexRange, CoordinateRange
from ..core.exceptions import ParameterError


# ============================================================================
# Region Selection and Slice Computation
# ============================================================================

def _index_slice(size: int, index_range: IndexRange) -> slice:
    i_min, i_max = index_range
    i_min = max(0, min(i_min, size - 1))
    i_max = max(i_min, min(i_max, size - 1))
    return slice(i_min, i_max + 1)


def _coordinate_slice(values: np.ndarray, coord_range: CoordinateRange) -> slice:
    # Works for ascending and descending coordinate vectors
    c_min, c_max = coord_range
    indices = np.where((values >= c_min) & (values <= c_max))[0]
    if indices.size == 0:
        return slice(0, 0)
    return slice(int(indices.min()), int(indices.max()) + 1)


def compute_regional_slices(
    lon: np.ndarray,
    lat: np.ndarray,
    region: Region
) -> SliceInfo:
    """
    Compute index slices for regional selection.

    Supports both coordinate-based (lon/lat) and index-based (x/y) selection.
    Index-based selection takes priority when both are specified.

    Args:
        lon: Longitude vector
        lat: Latitude vector
        region: Regional selection parameters

    Returns:
        SliceInfo: Slices along longitude (x) and latitude (y)
    """
    lon, lat = np.asarray(lon), np.asarray(lat)
    nx, ny = len(lon), len(lat)

    x_slice = slice(0, nx)
    y_slice = slice(0, ny)

    if region.x_range is not None:
        x_slice = _index_slice(nx, region.x_range)
    elif region.lon_range is not None:
        x_slice = _coordinate_slice(lon, region.lon_range)

    if region.y_range is not None:
        y_slice = _index_slice(ny, region.y_range)
    elif region.lat_range is not None:
        y_slice = _coordinate_slice(lat, region.lat_range)

    return SliceInfo(x_slice=x_slice, y_slice=y_slice)


def apply_region(
    data: Union[xr.Dataset, xr.DataArray],
    region: Region
) -> Union[xr.Dataset, xr.DataArray]:
    """
    Apply a regional selection to a dataset or data array with lon/lat dims.

    Args:
        data: Input data
        region: Regional selection parameters

    Returns:
        Spatially selected data
    """
    if not region.has_selection:
        return data

    slice_info = compute_regional_slices(data[LON_DIM].values, data[LAT_DIM].values, region)

    indexers = {}
    if LON_DIM in data.dims:
        indexers[LON_DIM] = slice_info.x_slice
    if LAT_DIM in data.dims:
        indexers[LAT_DIM] = slice_info.y_slice

    return data.isel(indexers) if indexers else data


# ============================================================================
# Value Extraction
# ============================================================================

def extract_value(grid: np.ndarray, i: int, j: int) -> float:
    """
    Extract a single value from a 2D grid (zero-based indices).

    Args:
        grid: 2D array
        i: Index along the first axis
        j: Index along the second axis

    Returns:
        float: Grid value
    """
    grid = np.asarray(grid)
    if grid.ndim != 2:
        raise ParameterError("grid", f"{grid.ndim}D array", "Expected a 2D grid")

    n0, n1 = grid.shape
    if not (0 <= i < n0 and 0 <= j < n1):
        raise ParameterError("index", f"({i}, {j})", f"Outside grid shape {grid.shape}")

    return float(grid[i, j])


def extract_window(
    grid: np.ndarray,
    rows: Tuple[int, int],
    cols: Tuple[int, int]
) -> np.ndarray:
    """
    Extract a rectangular window from a 2D grid.

    Ranges are half-open (start, stop) like Python slices, so ``rows=(0, 10)``
    returns the first ten rows.

    Args:
        grid: 2D array
        rows: (start, stop) along the first axis
        cols: (start, stop) along the second axis

    Returns:
        np.ndarray: Window view of the grid
    """
    grid = np.asarray(grid)
    if grid.ndim != 2:
        raise ParameterError("grid", f"{grid.ndim}D array", "Expected a 2D grid")

    for name, (start, stop), size in (("rows", rows, grid.shape[0]), ("cols", cols, grid.shape[1])):
        if start < 0 or stop > size or start >= stop:
            raise ParameterError(name, f"({start}, {stop})", f"Must satisfy 0 <= start < stop <= {size}")

    return grid[rows[0]:rows[1], cols[0]:cols[1]]
