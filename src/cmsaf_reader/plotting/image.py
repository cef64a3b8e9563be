"""
CM SAF Reader Image Plots

Quick image of a raw 2D array, and a labelled lon/lat image with optional
country borders and coastlines.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

import cartopy.crs as ccrs
import cartopy.feature as cfeature
import matplotlib.pyplot as plt
import numpy as np
from cartopy.mpl.ticker import LatitudeFormatter, LongitudeFormatter
from matplotlib.ticker import MaxNLocator

from ..core.logging_config import get_logger
from ..core.config import DEFAULT_DPI
from ..core.core_types import PlotOptions
from ..coordinates.conversion import validate_grid_coordinates

logger = get_logger('plotting.image')


# ============================================================================
# Raw Image
# ============================================================================

def plot_image(
    grid: np.ndarray,
    options: Optional[PlotOptions] = None,
    origin: str = "lower"
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Quick look at a 2D array with a colorbar, without coordinates.

    Args:
        grid: 2D array (rows drawn along the vertical axis)
        options: Styling options
        origin: Placement of row 0 ('lower' or 'upper')

    Returns:
        Tuple[Figure, Axes]: The created figure and axes
    """
    options = options or PlotOptions(xlabel="", ylabel="")
    grid = np.asarray(grid, dtype=float)

    fig, ax = plt.subplots(figsize=options.figsize)
    image = ax.imshow(grid, origin=origin, cmap=options.cmap_name, aspect="auto")
    colorbar = fig.colorbar(image, ax=ax)
    if options.legend_label:
        colorbar.set_label(options.legend_label)

    _apply_titles(fig, ax, options)
    ax.set_xlabel(options.xlabel)
    ax.set_ylabel(options.ylabel)

    logger.debug("Plotted raw image of shape %s", grid.shape)
    return fig, ax


# ============================================================================
# Lon/Lat Image
# ============================================================================

def plot_grid(
    lon: np.ndarray,
    lat: np.ndarray,
    grid: np.ndarray,
    options: Optional[PlotOptions] = None,
    lon_first: bool = False
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot a grid against its longitude and latitude vectors.

    Args:
        lon: Longitude vector
        lat: Latitude vector
        grid: 2D grid ordered (lat, lon), or (lon, lat) when ``lon_first``
        options: Styling options (title, subtitle, colormap, borders...)
        lon_first: Grid axis order

    Returns:
        Tuple[Figure, GeoAxes]: The created figure and map axes

    Examples:
        >>> options = PlotOptions(
        ...     title="CM SAF Sunshine Duration",
        ...     subtitle="Monthly Sum August 2018",
        ...     legend_label="Sunshine Duration (hours)",
        ...     reverse_cmap=True,
        ...     borders=True,
        ... )
        >>> fig, ax = plot_grid(lon, lat, sdu, options)
    """
    options = options or PlotOptions()
    lon = np.asarray(lon, dtype=float)
    lat = np.asarray(lat, dtype=float)
    grid = np.asarray(grid, dtype=float)

    validate_grid_coordinates(grid, lon, lat, lon_first=lon_first)
    if lon_first:
        grid = grid.T

    crs = ccrs.PlateCarree()
    fig = plt.figure(figsize=options.figsize)
    ax = fig.add_subplot(1, 1, 1, projection=crs)

    mesh = ax.pcolormesh(lon, lat, grid, transform=crs, cmap=options.cmap_name, shading="auto")
    ax.set_extent([lon.min(), lon.max(), lat.min(), lat.max()], crs=crs)
    set_lonlat_ticks(ax, lon, lat)

    add_colorbar(fig, ax, mesh, options)
    if options.borders:
        add_borders(ax, options)

    _apply_titles(fig, ax, options)
    ax.set_xlabel(options.xlabel)
    ax.set_ylabel(options.ylabel)

    return fig, ax


# ============================================================================
# Shared Helpers
# ============================================================================

def set_lonlat_ticks(ax, lon: np.ndarray, lat: np.ndarray, nbins: int = 6) -> None:
    """Put degree-formatted ticks on a PlateCarree map so axis labels show."""
    crs = ccrs.PlateCarree()
    xticks = MaxNLocator(nbins=nbins).tick_values(lon.min(), lon.max())
    yticks = MaxNLocator(nbins=nbins).tick_values(lat.min(), lat.max())
    ax.set_xticks(xticks[(xticks >= lon.min()) & (xticks <= lon.max())], crs=crs)
    ax.set_yticks(yticks[(yticks >= lat.min()) & (yticks <= lat.max())], crs=crs)
    ax.xaxis.set_major_formatter(LongitudeFormatter())
    ax.yaxis.set_major_formatter(LatitudeFormatter())


def add_colorbar(fig: plt.Figure, ax, mappable, options: PlotOptions):
    colorbar = fig.colorbar(mappable, ax=ax, orientation="vertical", shrink=0.8)
    if options.legend_label:
        colorbar.set_label(options.legend_label)
    return colorbar


def add_borders(ax, options: PlotOptions) -> None:
    """
    Draw coastlines and country borders on map axes.

    Natural Earth shapes are downloaded by cartopy on first use.
    """
    ax.coastlines(linewidth=options.border_linewidth, color=options.border_color)
    ax.add_feature(
        cfeature.BORDERS,
        linewidth=options.border_linewidth,
        edgecolor=options.border_color,
    )


def _apply_titles(fig: plt.Figure, ax, options: PlotOptions) -> None:
    if options.title and options.subtitle:
        fig.suptitle(options.title)
        ax.set_title(options.subtitle, fontsize="medium")
    elif options.title:
        ax.set_title(options.title)
    elif options.subtitle:
        ax.set_title(options.subtitle, fontsize="medium")


def save_figure(
    fig: plt.Figure,
    path: Union[str, Path],
    dpi: int = DEFAULT_DPI
) -> Path:
    """
    Save a figure, creating parent directories as needed.

    Returns:
        Path: Path of the written image
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    logger.info("Saved figure to %s", path)
    return path
