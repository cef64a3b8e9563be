"""
CM SAF Reader Raster Maps

Plots geographic rasters and reprojected rasters on cartopy map axes.
"""

import warnings
from typing import Optional, Tuple

import cartopy.crs as ccrs
import matplotlib.pyplot as plt
import numpy as np
import xarray as xr

from ..core.logging_config import get_logger
from ..core.config import LON_DIM, LAT_DIM, PROJ_X_DIM, PROJ_Y_DIM, SOURCE_CRS
from ..core.core_types import PlotOptions
from ..core.exceptions import ProjectionError
from ..processing.reprojection import CRSLike, parse_crs
from .image import add_borders, add_colorbar, plot_grid, _apply_titles

logger = get_logger('plotting.maps')


# ============================================================================
# CRS Translation
# ============================================================================

def _proj_parameters(crs) -> dict:
    with warnings.catch_warnings():
        # PROJ strings drop datum/ensemble details; the map only needs the projection terms
        warnings.filterwarnings("ignore", message=".*lose important projection information.*")
        return crs.to_dict()


def _globe(params: dict) -> ccrs.Globe:
    semimajor = params.get("a", params.get("R"))
    semiminor = params.get("b", params.get("R"))
    if semimajor is not None:
        return ccrs.Globe(
            datum=params.get("datum"),
            semimajor_axis=float(semimajor),
            semiminor_axis=float(semiminor) if semiminor is not None else None,
            ellipse=None,
        )
    return ccrs.Globe(datum=params.get("datum"), ellipse=params.get("ellps", params.get("datum", "WGS84")))


def cartopy_projection(crs: CRSLike) -> ccrs.Projection:
    """
    Build the cartopy projection matching a pyproj CRS.

    Supported PROJ projections: longlat, eqc, lcc, merc, stere, laea, robin.
    False easting/northing (x_0, y_0), the latitude of true scale (lat_ts)
    and the scale factor (k, k_0) are carried over, so projected x/y from
    ``reproject_grid`` line up with cartopy's coastlines and borders.

    Raises:
        ProjectionError: For unsupported projections
    """
    crs = parse_crs(crs)
    params = _proj_parameters(crs)
    proj = params.get("proj")

    lon_0 = float(params.get("lon_0", 0.0))
    lat_0 = float(params.get("lat_0", 0.0))
    offsets = dict(
        false_easting=float(params.get("x_0", 0.0)),
        false_northing=float(params.get("y_0", 0.0)),
    )
    lat_ts = params.get("lat_ts")
    scale = params.get("k_0", params.get("k"))
    # cartopy accepts either a true-scale latitude or a scale factor, not both
    true_scale = dict(scale_factor=float(scale)) if lat_ts is None and scale is not None else {}
    globe = _globe(params)

    if proj in ("longlat", "latlong", "eqc"):
        return ccrs.PlateCarree(central_longitude=lon_0)
    if proj == "lcc":
        lat_1 = float(params.get("lat_1", lat_0))
        lat_2 = float(params.get("lat_2", lat_1))
        return ccrs.LambertConformal(
            central_longitude=lon_0,
            central_latitude=lat_0,
            standard_parallels=(lat_1, lat_2),
            globe=globe,
            **offsets,
        )
    if proj == "merc":
        if lat_ts is not None:
            true_scale = dict(latitude_true_scale=float(lat_ts))
        return ccrs.Mercator(central_longitude=lon_0, globe=globe, **offsets, **true_scale)
    if proj == "stere":
        if lat_ts is not None:
            true_scale = dict(true_scale_latitude=float(lat_ts))
        return ccrs.Stereographic(
            central_latitude=lat_0, central_longitude=lon_0, globe=globe,
            **offsets, **true_scale
        )
    if proj == "laea":
        return ccrs.LambertAzimuthalEqualArea(
            central_longitude=lon_0, central_latitude=lat_0, globe=globe, **offsets
        )
    if proj == "robin":
        return ccrs.Robinson(central_longitude=lon_0, globe=globe, **offsets)

    raise ProjectionError(crs.to_string(), f"No cartopy equivalent for proj={proj}")


# ============================================================================
# Raster Plots
# ============================================================================

def plot_raster(
    raster: xr.DataArray,
    options: Optional[PlotOptions] = None
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot a geographic (lon/lat) raster on a map.

    Args:
        raster: 2D DataArray with lon/lat coordinates
        options: Styling options; the title defaults to the raster name

    Returns:
        Tuple[Figure, GeoAxes]: The created figure and map axes
    """
    options = options or PlotOptions(
        title=str(raster.name) if raster.name is not None else None,
        legend_label=raster.attrs.get('units'),
    )
    crs = raster.attrs.get('crs', SOURCE_CRS)
    if parse_crs(crs) != parse_crs(SOURCE_CRS):
        raise ProjectionError(str(crs), "plot_raster expects a lon/lat raster; use plot_projected_raster")

    raster = raster.transpose(LAT_DIM, LON_DIM)
    return plot_grid(raster[LON_DIM].values, raster[LAT_DIM].values, raster.values, options)


def plot_projected_raster(
    projected: xr.DataArray,
    options: Optional[PlotOptions] = None
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot a reprojected raster on map axes in its own projection.

    Args:
        projected: Output of ``reproject_grid`` (dims y, x; attrs['crs'])
        options: Styling options

    Returns:
        Tuple[Figure, GeoAxes]: The created figure and map axes
    """
    if 'crs' not in projected.attrs:
        raise ProjectionError("<missing>", "Raster has no 'crs' attribute")

    options = options or PlotOptions(
        title=str(projected.name) if projected.name is not None else None,
        legend_label=projected.attrs.get('units'),
    )
    projection = cartopy_projection(projected.attrs['crs'])

    projected = projected.transpose(PROJ_Y_DIM, PROJ_X_DIM)
    x = np.asarray(projected[PROJ_X_DIM].values, dtype=float)
    y = np.asarray(projected[PROJ_Y_DIM].values, dtype=float)

    fig = plt.figure(figsize=options.figsize)
    ax = fig.add_subplot(1, 1, 1, projection=projection)
    mesh = ax.pcolormesh(
        x, y, np.asarray(projected.values, dtype=float),
        transform=projection, cmap=options.cmap_name, shading="auto"
    )
    ax.set_extent([x.min(), x.max(), y.min(), y.max()], crs=projection)

    add_colorbar(fig, ax, mesh, options)
    if options.borders:
        add_borders(ax, options)
    _apply_titles(fig, ax, options)

    logger.debug("Plotted projected raster in %s", projected.attrs['crs'])
    return fig, ax
