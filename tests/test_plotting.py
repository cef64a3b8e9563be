import warnings
from pathlib import Path

import cartopy.crs as ccrs
import numpy as np
import pytest
from pyproj import Transformer

from cmsaf_reader.core.config import DEFAULT_TARGET_PROJ
from cmsaf_reader.core.core_types import PlotOptions
from cmsaf_reader.core.exceptions import CoordinateError, ProjectionError
from cmsaf_reader.io.dataset_loader import open_raster
from cmsaf_reader.plotting import (
    cartopy_projection,
    plot_grid,
    plot_image,
    plot_projected_raster,
    plot_raster,
    save_figure,
)
from cmsaf_reader.processing.reprojection import reproject_grid

LON = np.arange(-10.0, 14.0, 2.0)
LAT = np.arange(36.0, 60.0, 3.0)


def test_plot_options_reverse_cmap():
    assert PlotOptions(cmap="viridis", reverse_cmap=True).cmap_name == "viridis_r"
    assert PlotOptions(cmap="viridis_r", reverse_cmap=True).cmap_name == "viridis"
    assert PlotOptions(cmap="viridis").cmap_name == "viridis"


def test_plot_image(expected_values):
    fig, ax = plot_image(expected_values)
    assert len(fig.axes) == 2  # image + colorbar
    assert ax.images[0].get_array().shape == (8, 12)


def test_plot_grid_titles_and_labels(expected_values):
    options = PlotOptions(
        title="CM SAF Sunshine Duration",
        subtitle="Monthly Sum August 2018",
        legend_label="Sunshine Duration (hours)",
        reverse_cmap=True,
    )
    fig, ax = plot_grid(LON, LAT, expected_values, options)
    assert fig._suptitle.get_text() == "CM SAF Sunshine Duration"
    assert ax.get_title() == "Monthly Sum August 2018"
    assert ax.get_xlabel() == "Longitude"
    assert fig.axes[1].get_ylabel() == "Sunshine Duration (hours)"


def test_plot_grid_lon_first(expected_values):
    fig, _ = plot_grid(LON, LAT, expected_values.T, lon_first=True)
    assert fig is not None


def test_plot_grid_shape_mismatch(expected_values):
    with pytest.raises(CoordinateError):
        plot_grid(LON, LAT, expected_values.T)


def test_plot_raster(sample_file: Path):
    fig, ax = plot_raster(open_raster(sample_file))
    assert ax.get_title() == "SDU"
    assert isinstance(ax.projection, ccrs.PlateCarree)


def test_plot_raster_rejects_projected(sample_file: Path):
    projected = reproject_grid(open_raster(sample_file), DEFAULT_TARGET_PROJ)
    with pytest.raises(ProjectionError):
        plot_raster(projected)


def test_plot_projected_raster(sample_file: Path):
    projected = reproject_grid(open_raster(sample_file), DEFAULT_TARGET_PROJ)
    fig, ax = plot_projected_raster(projected, PlotOptions(title="SDU"))
    assert isinstance(ax.projection, ccrs.LambertConformal)
    assert ax.get_title() == "SDU"


def test_cartopy_projection_lcc_parameters():
    projection = cartopy_projection(DEFAULT_TARGET_PROJ)
    assert isinstance(projection, ccrs.LambertConformal)
    assert projection.proj4_params["lon_0"] == -100.0
    assert projection.proj4_params["lat_1"] == 48.0
    assert projection.proj4_params["lat_2"] == 33.0


@pytest.mark.parametrize("proj, expected", [
    ("EPSG:4326", ccrs.PlateCarree),
    ("+proj=merc +lon_0=10 +datum=WGS84", ccrs.Mercator),
    ("+proj=laea +lat_0=52 +lon_0=10 +datum=WGS84", ccrs.LambertAzimuthalEqualArea),
])
def test_cartopy_projection_supported(proj, expected):
    assert isinstance(cartopy_projection(proj), expected)


def test_cartopy_projection_unsupported():
    with pytest.raises(ProjectionError):
        cartopy_projection("+proj=tmerc +lon_0=9 +datum=WGS84")


@pytest.mark.parametrize("target", [
    DEFAULT_TARGET_PROJ,
    "EPSG:3035",
    "EPSG:3413",
    "+proj=merc +lat_ts=45 +datum=WGS84",
    "+proj=merc +lon_0=10 +x_0=500000 +y_0=-200000 +datum=WGS84",
    "+proj=stere +lat_0=52 +lon_0=10 +k=0.9999 +x_0=155000 +y_0=463000 +datum=WGS84",
    "+proj=robin +lon_0=15 +x_0=1000 +y_0=2000 +datum=WGS84",
])
def test_cartopy_projection_matches_pyproj(target):
    projection = cartopy_projection(target)
    expected = Transformer.from_crs("EPSG:4326", target, always_xy=True).transform(10.0, 52.0)

    x, y = projection.transform_point(10.0, 52.0, ccrs.Geodetic())
    assert x == pytest.approx(expected[0], abs=1.0)
    assert y == pytest.approx(expected[1], abs=1.0)


def test_cartopy_projection_does_not_warn_about_proj_strings():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        cartopy_projection("EPSG:3035")
    assert not [w for w in caught if "projection information" in str(w.message)]


def test_save_figure(tmp_path: Path, expected_values):
    fig, _ = plot_image(expected_values)
    path = save_figure(fig, tmp_path / "figures" / "image.png")
    assert path.is_file()
    assert path.stat().st_size > 0
