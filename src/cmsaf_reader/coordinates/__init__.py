"""
CM SAF Reader Coordinate Handling

This package provides spatial coordinate handling: region slicing,
coordinate/index conversion and value extraction from 2D grids.
"""

# Conversion functions
from .conversion import (
    convert_coordinates_to_indices,
    convert_indices_to_coordinates,
    validate_grid_coordinates,
    validate_region_bounds,
)

# Slicing functions
from .slicing import (
    compute_regional_slices,
    apply_region,
    extract_value,
    extract_window,
)

__all__ = [
    # Conversion functions
    "convert_coordinates_to_indices",
    "convert_indices_to_coordinates",
    "validate_grid_coordinates",
    "validate_region_bounds",
    # Slicing functions
    "compute_regional_slices",
    "apply_region",
    "extract_value",
    "extract_window",
]
