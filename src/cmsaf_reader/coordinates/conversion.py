"""
CM SAF Reader Coordinate Conversion

This module provides functions for converting between coordinate-based
and index-based spatial selections.
"""

from typing import Optional, Dict
import numpy as np

from ..core.core_types import IndexRange, CoordinateRange, Region
from ..core.exceptions import CoordinateError, ParameterError


# ============================================================================
# Coordinate/Index Conversion
# ============================================================================

def convert_coordinates_to_indices(
    lon: np.ndarray,
    lat: np.ndarray,
    lon_range: Optional[CoordinateRange] = None,
    lat_range: Optional[CoordinateRange] = None
) -> Dict[str, Optional[IndexRange]]:
    """
    Convert coordinate ranges to index ranges.

    Args:
        lon: Longitude vector
        lat: Latitude vector
        lon_range: Longitude range to convert
        lat_range: Latitude range to convert

    Returns:
        Dict: Dictionary with 'x_range' and 'y_range' index ranges
    """
    lon, lat = np.asarray(lon), np.asarray(lat)
    x_indices = None
    y_indices = None

    if lon_range is not None:
        lon_min, lon_max = lon_range
        lon_idx = np.where((lon >= lon_min) & (lon <= lon_max))[0]
        if lon_idx.size > 0:
            x_indices = (int(lon_idx.min()), int(lon_idx.max()))

    if lat_range is not None:
        lat_min, lat_max = lat_range
        lat_idx = np.where((lat >= lat_min) & (lat <= lat_max))[0]
        if lat_idx.size > 0:
            y_indices = (int(lat_idx.min()), int(lat_idx.max()))

    return {
        'x_range': x_indices,
        'y_range': y_indices
    }


def _span(values: np.ndarray) -> CoordinateRange:
    return (float(np.min(values)), float(np.max(values)))


def convert_indices_to_coordinates(
    lon: np.ndarray,
    lat: np.ndarray,
    x_range: Optional[IndexRange] = None,
    y_range: Optional[IndexRange] = None
) -> Dict[str, Optional[CoordinateRange]]:
    """
    Convert index ranges to coordinate ranges.

    Indices outside the grid are clamped to its edges. Ranges are returned
    as (min, max) whatever the orientation of the coordinate vector.

    Args:
        lon: Longitude vector
        lat: Latitude vector
        x_range: Longitude index range to convert
        y_range: Latitude index range to convert

    Returns:
        Dict: Dictionary with 'lon_range' and 'lat_range' coordinate ranges
    """
    lon, lat = np.asarray(lon), np.asarray(lat)
    lon_coords = None
    lat_coords = None

    if x_range is not None:
        x_min, x_max = x_range
        x_min = max(0, min(x_min, len(lon) - 1))
        x_max = max(x_min, min(x_max, len(lon) - 1))
        lon_coords = _span(lon[x_min:x_max + 1])

    if y_range is not None:
        y_min, y_max = y_range
        y_min = max(0, min(y_min, len(lat) - 1))
        y_max = max(y_min, min(y_max, len(lat) - 1))
        lat_coords = _span(lat[y_min:y_max + 1])

    return {
        'lon_range': lon_coords,
        'lat_range': lat_coords
    }


# ============================================================================
# Validation
# ============================================================================

def validate_grid_coordinates(grid: np.ndarray, lon: np.ndarray, lat: np.ndarray, lon_first: bool = False) -> None:
    """
    Check that coordinate vector lengths match the grid axes.

    Args:
        grid: 2D grid ordered (lat, lon), or (lon, lat) when ``lon_first``
        lon: Longitude vector
        lat: Latitude vector
        lon_first: Grid axis order

    Raises:
        CoordinateError: If lengths do not correspond
    """
    expected = (len(lon), len(lat)) if lon_first else (len(lat), len(lon))
    if np.shape(grid) != expected:
        raise CoordinateError(
            "grid",
            f"Shape {np.shape(grid)} does not match coordinate lengths {expected}"
        )


def validate_region_bounds(region: Region, lon: np.ndarray, lat: np.ndarray) -> None:
    """
    Validate that region bounds are within coordinate ranges.

    Args:
        region: Region to validate
        lon: Longitude vector
        lat: Latitude vector

    Raises:
        ParameterError: If region bounds are invalid
    """
    lon, lat = np.asarray(lon), np.asarray(lat)
    nx, ny = len(lon), len(lat)

    if region.x_range is not None:
        x_min, x_max = region.x_range
        if x_min < 0 or x_max >= nx:
            raise ParameterError(
                "x_range",
                str(region.x_range),
                f"Outside valid index range: [0, {nx-1}]"
            )

    if region.y_range is not None:
        y_min, y_max = region.y_range
        if y_min < 0 or y_max >= ny:
            raise ParameterError(
                "y_range",
                str(region.y_range),
                f"Outside valid index range: [0, {ny-1}]"
            )

    if region.lon_range is not None and region.x_range is None:
        lon_min, lon_max = lon.min(), lon.max()
        req_min, req_max = region.lon_range

        if req_min < lon_min or req_max > lon_max:
            raise ParameterError(
                "lon_range",
                str(region.lon_range),
                f"Outside available range: [{lon_min:.3f}, {lon_max:.3f}]"
            )

    if region.lat_range is not None and region.y_range is None:
        lat_min, lat_max = lat.min(), lat.max()
        req_min, req_max = region.lat_range

        if req_min < lat_min or req_max > lat_max:
            raise ParameterError(
                "lat_range",
                str(region.lat_range),
                f"Outside available range: [{lat_min:.3f}, {lat_max:.3f}]"
            )
