"""
CM SAF Reader Data Processing

This package provides data processing functionality including grid statistics,
unit conversion, tidy table conversion and raster reprojection.
"""

# Statistics and unit conversion
from .statistics import (
    grid_mean,
    summarize_grid,
    convert_units,
    hours_to_seconds,
)

# Tidy conversion
from .tidy import (
    to_tidy_dataframe,
    tidy_head,
)

# Reprojection
from .reprojection import (
    parse_crs,
    transform_points,
    reproject_grid,
)

__all__ = [
    # Statistics
    "grid_mean",
    "summarize_grid",
    "convert_units",
    "hours_to_seconds",
    # Tidy conversion
    "to_tidy_dataframe",
    "tidy_head",
    # Reprojection
    "parse_crs",
    "transform_points",
    "reproject_grid",
]
