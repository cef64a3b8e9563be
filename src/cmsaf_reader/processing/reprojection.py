"""
CM SAF Reader Raster Reprojection

This module reprojects a regular lon/lat raster onto a projected grid using
pyproj transforms and nearest-neighbour resampling.
"""

from typing import Optional, Tuple, Union

import numpy as np
import xarray as xr
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError

from ..core.logging_config import get_logger
from ..core.config import LON_DIM, LAT_DIM, PROJ_X_DIM, PROJ_Y_DIM, SOURCE_CRS
from ..core.exceptions import DataProcessingError, ProjectionError

logger = get_logger('processing.reprojection')

CRSLike = Union[str, CRS]


# ============================================================================
# CRS Handling
# ============================================================================

def parse_crs(crs: CRSLike) -> CRS:
    """
    Parse a CRS definition (PROJ string, EPSG code, WKT or CRS object).

    Raises:
        ProjectionError: If pyproj cannot interpret the definition
    """
    if isinstance(crs, CRS):
        return crs
    try:
        return CRS.from_user_input(crs)
    except CRSError as e:
        raise ProjectionError(str(crs), str(e))


def transform_points(
    lon: np.ndarray,
    lat: np.ndarray,
    target_crs: CRSLike
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Transform lon/lat points into the target CRS.

    Returns:
        Tuple[np.ndarray, np.ndarray]: Projected (x, y) coordinates
    """
    transformer = Transformer.from_crs(SOURCE_CRS, parse_crs(target_crs), always_xy=True)
    x, y = transformer.transform(np.asarray(lon, dtype=float), np.asarray(lat, dtype=float))
    return np.asarray(x), np.asarray(y)


# ============================================================================
# Resampling
# ============================================================================

def _nearest_index(coord: np.ndarray, values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Index of the nearest ascending ``coord`` entry for each value.

    Returns the indices and a mask of values lying within the grid extent
    (half a cell beyond the first and last centres).
    """
    n = coord.size
    idx = np.clip(np.searchsorted(coord, values), 1, n - 1)
    left = coord[idx - 1]
    right = coord[idx]
    idx = np.where(values - left <= right - values, idx - 1, idx)

    lower = coord[0] - (coord[1] - coord[0]) / 2
    upper = coord[-1] + (coord[-1] - coord[-2]) / 2
    inside = np.isfinite(values) & (values >= lower) & (values <= upper)
    return idx, inside


def reproject_grid(
    raster: xr.DataArray,
    target_crs: CRSLike,
    shape: Optional[Tuple[int, int]] = None
) -> xr.DataArray:
    """
    Reproject a lon/lat raster to another coordinate reference system.

    The target grid is regular in projected coordinates and covers the
    transformed bounds of the source raster. Each target cell takes the value
    of the nearest source cell; cells outside the source footprint are NaN.

    Args:
        raster: 2D DataArray with ascending 1D lon/lat coordinates
        target_crs: Target CRS (e.g. a PROJ string)
        shape: Target (ny, nx); defaults to the source shape

    Returns:
        xr.DataArray: Raster on (y, x) in target CRS units, with
        ``attrs['crs']`` set to the target definition

    Examples:
        >>> raster = open_raster("SDUms201808010000401UD1000101UD.nc")
        >>> lcc = "+proj=lcc +lat_1=48 +lat_2=33 +lon_0=-100 +datum=WGS84"
        >>> projected = reproject_grid(raster, lcc)
    """
    crs = parse_crs(target_crs)

    if raster.dims != (LAT_DIM, LON_DIM):
        raster = raster.transpose(LAT_DIM, LON_DIM)
    raster = raster.sortby(LAT_DIM).sortby(LON_DIM)

    lon = np.asarray(raster[LON_DIM].values, dtype=float)
    lat = np.asarray(raster[LAT_DIM].values, dtype=float)
    if lon.size < 2 or lat.size < 2:
        raise DataProcessingError("reprojection", "Raster needs at least 2 cells along lon and lat")

    ny, nx = shape if shape is not None else raster.shape
    if ny < 1 or nx < 1:
        raise DataProcessingError("reprojection", f"Invalid target shape: {(ny, nx)}")

    # Source cell edges
    half_dlon = (lon[1] - lon[0]) / 2
    half_dlat = (lat[1] - lat[0]) / 2
    left, right = lon[0] - half_dlon, lon[-1] + half_dlon
    bottom, top = lat[0] - half_dlat, lat[-1] + half_dlat

    forward = Transformer.from_crs(SOURCE_CRS, crs, always_xy=True)
    inverse = Transformer.from_crs(crs, SOURCE_CRS, always_xy=True)

    xmin, ymin, xmax, ymax = forward.transform_bounds(left, bottom, right, top, densify_pts=51)
    if not np.all(np.isfinite([xmin, ymin, xmax, ymax])):
        raise ProjectionError(crs.to_string(), "Source raster bounds cannot be transformed")

    dx = (xmax - xmin) / nx
    dy = (ymax - ymin) / ny
    x = xmin + (np.arange(nx) + 0.5) * dx
    y = ymin + (np.arange(ny) + 0.5) * dy

    xx, yy = np.meshgrid(x, y)
    src_lon, src_lat = inverse.transform(xx, yy)
    src_lon = np.asarray(src_lon, dtype=float)
    src_lat = np.asarray(src_lat, dtype=float)

    ix, x_inside = _nearest_index(lon, src_lon)
    iy, y_inside = _nearest_index(lat, src_lat)
    inside = x_inside & y_inside

    values = np.asarray(raster.values, dtype=float)
    result = np.full((ny, nx), np.nan)
    result[inside] = values[iy[inside], ix[inside]]

    logger.info(
        "Reprojected %s from %s to %s: %d of %d cells inside footprint",
        raster.name, SOURCE_CRS, crs.to_string(), int(inside.sum()), inside.size
    )

    attrs = dict(raster.attrs)
    attrs['crs'] = crs.to_string()
    return xr.DataArray(
        result,
        dims=(PROJ_Y_DIM, PROJ_X_DIM),
        coords={PROJ_Y_DIM: y, PROJ_X_DIM: x},
        name=raster.name,
        attrs=attrs,
    )
