"""
CM SAF Reader Main Interface

This module provides the main API functions for opening a CM SAF sunshine
duration file, extracting its grid, and running the complete exploration
walkthrough (inspect, summarise, plot, reproject, tidy).
"""

from pathlib import Path
from typing import Optional, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np

from .core.config import (
    DEFAULT_TARGET_PROJ, DEFAULT_UNITS, DEFAULT_VARIABLE, get_default_data_path
)
from .core.core_types import PlotOptions, WalkthroughResult
from .core.logging_config import get_logger
from .core.exceptions import DataFileNotFoundError, InvalidFormatError
from .coordinates.conversion import validate_grid_coordinates
from .io.connection import NetCDFConnection, open_netcdf
from .io.dataset_loader import open_raster
from .io.file_utils import file_exists, parse_product_filename, resolve_data_path
from .plotting.image import plot_grid, plot_image, save_figure
from .plotting.maps import plot_projected_raster, plot_raster
from .processing.reprojection import reproject_grid
from .processing.statistics import grid_mean, hours_to_seconds, summarize_grid
from .processing.tidy import tidy_head, to_tidy_dataframe
from .utils.info import get_file_info

logger = get_logger('main')


# ============================================================================
# Main API Functions
# ============================================================================

def _resolve(path: Optional[Union[str, Path]]) -> Path:
    data_path = resolve_data_path(path) if path is not None else resolve_data_path(get_default_data_path())
    if not file_exists(data_path):
        raise DataFileNotFoundError(data_path, "NetCDF")
    return data_path


def open_sunshine_file(path: Optional[Union[str, Path]] = None) -> NetCDFConnection:
    """
    Open a connection to a sunshine duration file.

    Args:
        path: File path; defaults to the sample file in the data directory
              (``CMSAF_READER_DATA_DIR`` or the working directory)

    Returns:
        NetCDFConnection: Open connection, to be closed by the caller
    """
    return open_netcdf(_resolve(path))


def extract_sunshine_grid(
    path: Optional[Union[str, Path]] = None,
    variable: str = DEFAULT_VARIABLE,
    lon_first: bool = False
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Extract a 2D grid and its coordinate vectors, closing the file afterwards.

    Args:
        path: File path (default: sample file)
        variable: Variable name
        lon_first: Return the grid ordered (lon, lat) instead of (lat, lon)

    Returns:
        Tuple[np.ndarray, np.ndarray, np.ndarray]: (grid, lon, lat)

    Examples:
        >>> sdu, lon, lat = extract_sunshine_grid("SDUms201808010000401UD1000101UD.nc")
        >>> sdu.shape
        (500, 1200)
    """
    with open_sunshine_file(path) as nc:
        grid = nc.get_variable(variable, lon_first=lon_first)
        lon, lat = nc.get_coordinates()

    validate_grid_coordinates(grid, lon, lat, lon_first=lon_first)
    return grid, lon, lat


# ============================================================================
# Walkthrough
# ============================================================================

def _subtitle(data_path: Path) -> Optional[str]:
    try:
        product = parse_product_filename(data_path)
    except InvalidFormatError:
        return None
    label = (product.timestep or product.timestep_code).title()
    return f"{label} {product.timestamp:%B %Y}"


def run_walkthrough(
    path: Optional[Union[str, Path]] = None,
    output_dir: Optional[Union[str, Path]] = None,
    *,
    variable: str = DEFAULT_VARIABLE,
    target_crs: str = DEFAULT_TARGET_PROJ,
    borders: bool = False,
    show: bool = False,
    keep_figures: bool = False,
) -> WalkthroughResult:
    """
    Run the full exploration of a sunshine duration file.

    Steps: check the file, open a connection, read metadata, extract the grid
    and coordinates, close the connection, compute the mean in hours and
    seconds, plot the raw image and the labelled map, plot the raster and its
    reprojection, and build the tidy table.

    Args:
        path: File path (default: sample file)
        output_dir: Directory for PNG figures (not saved when None)
        variable: Variable name
        target_crs: Projection for the reprojected raster
        borders: Draw country borders (cartopy downloads Natural Earth data)
        show: Display figures with ``plt.show()``
        keep_figures: Return the open figures instead of closing them

    Returns:
        WalkthroughResult: Metadata, statistics, tidy head and figure paths
    """
    data_path = _resolve(path)
    logger.info("Exploring %s", data_path)

    with open_netcdf(data_path) as nc:
        file_info = get_file_info(nc)
        logger.debug("File metadata:\n%s", nc.describe())

        grid = nc.get_variable(variable)
        lon, lat = nc.get_coordinates()
        units = nc.variable_attributes(variable).get('units', DEFAULT_UNITS)

    validate_grid_coordinates(grid, lon, lat)

    mean_hours = grid_mean(grid)
    mean_seconds = grid_mean(hours_to_seconds(grid))
    summary = summarize_grid(grid, units=units)
    logger.info("Mean %s: %.3f %s (%.1f seconds)", variable, mean_hours, units, mean_seconds)

    figures = {}
    saved = {}
    opened_before = set(plt.get_fignums())
    completed = False
    try:
        figures['image'] = plot_image(grid, PlotOptions(xlabel="", ylabel="", legend_label=units))[0]

        options = PlotOptions(
            title="CM SAF Sunshine Duration",
            subtitle=_subtitle(data_path),
            legend_label=f"Sunshine Duration ({units})",
            reverse_cmap=True,
            borders=borders,
        )
        figures['grid'] = plot_grid(lon, lat, grid, options)[0]

        raster = open_raster(data_path, variable)
        raster_options = PlotOptions(title=str(raster.name), legend_label=units, borders=borders)
        figures['raster'] = plot_raster(raster, raster_options)[0]

        projected = reproject_grid(raster, target_crs)
        figures['projected'] = plot_projected_raster(projected, raster_options)[0]

        tidy = to_tidy_dataframe(data_path)
        head = tidy_head(tidy)

        if output_dir is not None:
            output_dir = Path(output_dir)
            for name, fig in figures.items():
                saved[name] = save_figure(fig, output_dir / f"{data_path.stem}_{name}.png")

        if show:
            plt.show()
        completed = True
    finally:
        # Figures opened by a failed run are always closed
        if not completed or not keep_figures:
            for num in set(plt.get_fignums()) - opened_before:
                plt.close(num)

    return WalkthroughResult(
        data_path=data_path,
        file_info=file_info,
        grid_shape=grid.shape,
        lon=lon,
        lat=lat,
        summary=summary,
        mean_hours=mean_hours,
        mean_seconds=mean_seconds,
        tidy_head=head,
        tidy_rows=len(tidy),
        figures=saved,
        figure_objects=list(figures.values()) if keep_figures else [],
    )
