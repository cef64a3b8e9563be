"""
CM SAF Reader Plotting

Matplotlib and cartopy figures for raw arrays, lon/lat grids and rasters.
"""

from .image import (
    plot_image,
    plot_grid,
    add_borders,
    save_figure,
)

from .maps import (
    cartopy_projection,
    plot_raster,
    plot_projected_raster,
)

__all__ = [
    "plot_image",
    "plot_grid",
    "add_borders",
    "save_figure",
    "cartopy_projection",
    "plot_raster",
    "plot_projected_raster",
]
