"""
CM SAF Reader Grid Statistics

This module provides simple aggregates and unit conversions on 2D grids.
Missing values are NaN throughout.
"""

import warnings
from typing import Optional, Union

import numpy as np
import xarray as xr

from ..core.logging_config import get_logger
from ..core.config import SECONDS_PER_HOUR
from ..core.core_types import GridSummary
from ..core.exceptions import ParameterError

logger = get_logger('processing.statistics')

ArrayLike = Union[np.ndarray, xr.DataArray]


# ============================================================================
# Aggregates
# ============================================================================

def grid_mean(grid: ArrayLike, skipna: bool = True) -> float:
    """
    Mean over the whole grid.

    Args:
        grid: Array of values
        skipna: Ignore missing values (NaN)

    Returns:
        float: Grid mean; NaN when no valid values contribute
    """
    values = np.asarray(grid, dtype=float)
    if values.size == 0:
        return float("nan")

    if not skipna:
        return float(np.mean(values))

    with warnings.catch_warnings():
        # All-NaN grids warn "Mean of empty slice"; NaN is the answer
        warnings.simplefilter("ignore", category=RuntimeWarning)
        return float(np.nanmean(values))


def summarize_grid(grid: ArrayLike, units: Optional[str] = None) -> GridSummary:
    """
    Compute summary statistics for a grid.

    Args:
        grid: Array of values
        units: Units label; taken from ``grid.attrs`` for DataArrays when omitted

    Returns:
        GridSummary: Shape, extrema, mean, standard deviation and counts
    """
    if units is None and isinstance(grid, xr.DataArray):
        units = grid.attrs.get('units')

    values = np.asarray(grid, dtype=float)
    valid = values[np.isfinite(values)]

    if valid.size:
        minimum, maximum = float(valid.min()), float(valid.max())
        mean, std = float(valid.mean()), float(valid.std())
    else:
        logger.warning("Grid of shape %s has no valid values", values.shape)
        minimum = maximum = mean = std = float("nan")

    return GridSummary(
        shape=tuple(values.shape),
        minimum=minimum,
        maximum=maximum,
        mean=mean,
        std=std,
        valid_count=int(valid.size),
        missing_count=int(values.size - valid.size),
        units=units,
    )


# ============================================================================
# Unit Conversion
# ============================================================================

def convert_units(grid: ArrayLike, factor: float, units: Optional[str] = None) -> ArrayLike:
    """
    Multiply a grid by a constant factor.

    DataArrays keep their coordinates and attributes; ``units`` replaces the
    units attribute when given.

    Args:
        grid: Array of values
        factor: Multiplicative factor
        units: New units label

    Returns:
        Converted grid of the same type as the input
    """
    if not np.isfinite(factor):
        raise ParameterError("factor", str(factor), "Must be a finite number")

    if isinstance(grid, xr.DataArray):
        converted = grid * factor
        converted.attrs = dict(grid.attrs)
        if units is not None:
            converted.attrs['units'] = units
        return converted

    return np.asarray(grid, dtype=float) * factor


def hours_to_seconds(grid: ArrayLike) -> ArrayLike:
    """Convert a grid from hours to seconds."""
    return convert_units(grid, SECONDS_PER_HOUR, units='seconds')
