"""
CM SAF Reader - Explore CM SAF NetCDF climate data records.

This package provides small, composable tools for opening a gridded CM SAF
NetCDF file (e.g. monthly sunshine duration), inspecting its metadata,
extracting arrays, and visualising the field as an image, a map, a
reprojected raster, or a tidy table.

Key Features:
- Read-only NetCDF connection with metadata listing and array extraction
- Labelled xarray grids and rasters
- Grid statistics and unit conversion (hours to seconds)
- Tidy (long-format) pandas tables with regional filtering
- Reprojection to any PROJ projection with pyproj
- Matplotlib/cartopy figures with optional country borders

Quick Start:
    >>> import cmsaf_reader as cms
    >>> with cms.open_sunshine_file("SDUms201808010000401UD1000101UD.nc") as nc:
    ...     print(nc.describe())
    ...     sdu = nc.get_variable("SDU")
    ...     lon, lat = nc.get_coordinates()
    >>> cms.grid_mean(sdu)
    >>>
    >>> # Everything at once, figures written to ./figures
    >>> result = cms.run_walkthrough("SDUms201808010000401UD1000101UD.nc", "figures")
"""

__version__ = "1.0.0"
__author__ = "CM SAF Reader Development Team"

# Main interface functions
from .main import (
    open_sunshine_file,
    extract_sunshine_grid,
    run_walkthrough,
)

# Data access
from .io.connection import NetCDFConnection, open_netcdf
from .io.dataset_loader import open_dataset, load_grid, open_raster
from .io.file_utils import (
    set_working_directory,
    get_working_directory,
    resolve_data_path,
    file_exists,
    list_netcdf_files,
    parse_product_filename,
)

# Processing
from .processing import (
    grid_mean,
    summarize_grid,
    convert_units,
    hours_to_seconds,
    to_tidy_dataframe,
    tidy_head,
    parse_crs,
    transform_points,
    reproject_grid,
)

# Coordinates
from .coordinates import (
    compute_regional_slices,
    apply_region,
    extract_value,
    extract_window,
    convert_coordinates_to_indices,
    convert_indices_to_coordinates,
)

# Plotting
from .plotting import (
    plot_image,
    plot_grid,
    plot_raster,
    plot_projected_raster,
    save_figure,
)

# Information
from .utils import get_file_info, format_file_info, get_grid_info

# Parameter and result classes
from .core.core_types import (
    Region,
    PlotOptions,
    ProductInfo,
    GridInfo,
    GridSummary,
    WalkthroughResult,
)

# Configuration constants
from .core.config import (
    DEFAULT_VARIABLE,
    DEFAULT_DATA_FILENAME,
    DEFAULT_TARGET_PROJ,
    SECONDS_PER_HOUR,
)

# Exceptions for error handling
from .core.exceptions import (
    CMSAFReaderError,
    DataFileNotFoundError,
    InvalidFormatError,
    ConnectionClosedError,
    VariableNotFoundError,
    DimensionError,
    CoordinateError,
    ProjectionError,
    DataProcessingError,
    ParameterError,
)

# Logging configuration
from .core.logging_config import setup_logging, set_log_level, get_logger

__all__ = [
    '__version__',

    # Main interface
    'open_sunshine_file',
    'extract_sunshine_grid',
    'run_walkthrough',

    # Data access
    'NetCDFConnection',
    'open_netcdf',
    'open_dataset',
    'load_grid',
    'open_raster',
    'set_working_directory',
    'get_working_directory',
    'resolve_data_path',
    'file_exists',
    'list_netcdf_files',
    'parse_product_filename',

    # Processing
    'grid_mean',
    'summarize_grid',
    'convert_units',
    'hours_to_seconds',
    'to_tidy_dataframe',
    'tidy_head',
    'parse_crs',
    'transform_points',
    'reproject_grid',

    # Coordinates
    'compute_regional_slices',
    'apply_region',
    'extract_value',
    'extract_window',
    'convert_coordinates_to_indices',
    'convert_indices_to_coordinates',

    # Plotting
    'plot_image',
    'plot_grid',
    'plot_raster',
    'plot_projected_raster',
    'save_figure',

    # Information
    'get_file_info',
    'format_file_info',
    'get_grid_info',

    # Parameter classes
    'Region',
    'PlotOptions',
    'ProductInfo',
    'GridInfo',
    'GridSummary',
    'WalkthroughResult',

    # Configuration constants
    'DEFAULT_VARIABLE',
    'DEFAULT_DATA_FILENAME',
    'DEFAULT_TARGET_PROJ',
    'SECONDS_PER_HOUR',

    # Exception classes
    'CMSAFReaderError',
    'DataFileNotFoundError',
    'InvalidFormatError',
    'ConnectionClosedError',
    'VariableNotFoundError',
    'DimensionError',
    'CoordinateError',
    'ProjectionError',
    'DataProcessingError',
    'ParameterError',

    # Logging configuration
    'setup_logging',
    'set_log_level',
    'get_logger',
]
