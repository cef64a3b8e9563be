"""
CM SAF Reader Type Definitions and Data Classes

This module defines all data structures and type aliases used throughout the codebase
for better type safety and code clarity.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union, Dict, Any, List
from datetime import datetime
from pathlib import Path
import numpy as np

from .config import (
    DEFAULT_CMAP, DEFAULT_FIGSIZE, BORDER_COLOR, BORDER_LINEWIDTH
)

# ============================================================================
# Type Aliases
# ============================================================================

PathLike = Union[str, Path]
IndexRange = Tuple[int, int]
CoordinateRange = Tuple[float, float]
ChunkSetting = Optional[Union[str, Dict[str, int]]]

# ============================================================================
# Validation Utilities (Module Level)
# ============================================================================

def _validate_coordinate_range(name: str, range_val: Optional[CoordinateRange]) -> None:
    """Validate a coordinate range (lon/lat)."""
    if range_val is not None:
        if len(range_val) != 2:
            raise ValueError(f"{name} must contain exactly 2 values")
        if range_val[0] > range_val[1]:
            raise ValueError(f"{name}[0] must be <= {name}[1]")

def _validate_index_range(name: str, range_val: Optional[IndexRange]) -> None:
    """Validate an index range."""
    if range_val is not None:
        if len(range_val) != 2:
            raise ValueError(f"{name} must contain exactly 2 values")
        if range_val[0] < 0:
            raise ValueError(f"{name}[0] must be non-negative")
        if range_val[0] > range_val[1]:
            raise ValueError(f"{name}[0] must be <= {name}[1]")

# ============================================================================
# Spatial Region
# ============================================================================

@dataclass
class Region:
    """
    Spatial region definition for data selection.

    Supports both coordinate-based and index-based selection. When both are
    specified, index-based selection takes priority.

    Attributes:
        lon_range: Longitude range (min_lon, max_lon) in degrees
        lat_range: Latitude range (min_lat, max_lat) in degrees
        x_range: Longitude index range (min_x, max_x) - takes priority over lon_range
        y_range: Latitude index range (min_y, max_y) - takes priority over lat_range
    """
    lon_range: Optional[CoordinateRange] = None
    lat_range: Optional[CoordinateRange] = None
    x_range: Optional[IndexRange] = None
    y_range: Optional[IndexRange] = None

    def __post_init__(self):
        """Validate region parameters."""
        _validate_coordinate_range("lon_range", self.lon_range)
        _validate_coordinate_range("lat_range", self.lat_range)
        _validate_index_range("x_range", self.x_range)
        _validate_index_range("y_range", self.y_range)

        if self.lon_range is not None and self.x_range is not None:
            import warnings
            warnings.warn("Both lon_range and x_range specified. Using x_range (index-based).")

        if self.lat_range is not None and self.y_range is not None:
            import warnings
            warnings.warn("Both lat_range and y_range specified. Using y_range (index-based).")

    @property
    def has_selection(self) -> bool:
        """Check if any spatial selection is defined."""
        return (self.lon_range is not None or self.lat_range is not None or
                self.x_range is not None or self.y_range is not None)

    @property
    def uses_index_selection(self) -> bool:
        """Check if index-based selection is being used."""
        return self.x_range is not None or self.y_range is not None

# ============================================================================
# Slicing
# ============================================================================

@dataclass
class SliceInfo:
    """Index slices along the longitude (x) and latitude (y) axes."""
    x_slice: slice
    y_slice: slice

    @property
    def is_empty(self) -> bool:
        return (self.x_slice.stop - self.x_slice.start <= 0 or
                self.y_slice.stop - self.y_slice.start <= 0)

# ============================================================================
# Plot Options
# ============================================================================

@dataclass
class PlotOptions:
    """
    Figure styling shared by all plotting functions.

    Attributes:
        title: Main figure title
        subtitle: Smaller line drawn under the title
        xlabel: X axis label
        ylabel: Y axis label
        legend_label: Colorbar label
        cmap: Matplotlib colormap name
        reverse_cmap: Use the reversed colormap
        borders: Draw country borders and coastlines (needs Natural Earth data)
        border_color: Border line colour
        border_linewidth: Border line width
        figsize: Figure size in inches
    """
    title: Optional[str] = None
    subtitle: Optional[str] = None
    xlabel: str = "Longitude"
    ylabel: str = "Latitude"
    legend_label: Optional[str] = None
    cmap: str = DEFAULT_CMAP
    reverse_cmap: bool = False
    borders: bool = False
    border_color: str = BORDER_COLOR
    border_linewidth: float = BORDER_LINEWIDTH
    figsize: Tuple[float, float] = DEFAULT_FIGSIZE

    def __post_init__(self):
        if self.border_linewidth <= 0:
            raise ValueError("border_linewidth must be positive")

    @property
    def cmap_name(self) -> str:
        """Colormap name with the reversal applied."""
        if not self.reverse_cmap:
            return self.cmap
        if self.cmap.endswith("_r"):
            return self.cmap[:-2]
        return f"{self.cmap}_r"

# ============================================================================
# File and Grid Info
# ============================================================================

@dataclass
class ProductInfo:
    """Fields encoded in a CM SAF product filename."""
    product: str
    timestep_code: str
    timestep: Optional[str]
    timestamp: datetime
    identifier: str = ""

@dataclass
class GridInfo:
    """Shape and coordinate extent of a gridded variable."""
    variable: str
    dims: Tuple[str, ...]
    shape: Tuple[int, ...]
    lon_range: CoordinateRange
    lat_range: CoordinateRange
    lon_resolution: Optional[float] = None
    lat_resolution: Optional[float] = None
    units: Optional[str] = None
    long_name: Optional[str] = None

@dataclass
class GridSummary:
    """Summary statistics of a 2D grid."""
    shape: Tuple[int, ...]
    minimum: float
    maximum: float
    mean: float
    std: float
    valid_count: int
    missing_count: int
    units: Optional[str] = None

    @property
    def missing_fraction(self) -> float:
        total = self.valid_count + self.missing_count
        return self.missing_count / total if total else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'shape': self.shape,
            'min': self.minimum,
            'max': self.maximum,
            'mean': self.mean,
            'std': self.std,
            'valid_count': self.valid_count,
            'missing_count': self.missing_count,
            'units': self.units,
        }

# ============================================================================
# Walkthrough Result
# ============================================================================

@dataclass
class WalkthroughResult:
    """Everything the sunshine duration walkthrough produces."""
    data_path: Path
    file_info: Dict[str, Any]
    grid_shape: Tuple[int, ...]
    lon: np.ndarray
    lat: np.ndarray
    summary: GridSummary
    mean_hours: float
    mean_seconds: float
    tidy_head: Any = None
    tidy_rows: int = 0
    figures: Dict[str, Path] = field(default_factory=dict)
    figure_objects: List[Any] = field(default_factory=list)
