import math

import numpy as np
import pytest
import xarray as xr

from cmsaf_reader.core.exceptions import ParameterError
from cmsaf_reader.processing.statistics import (
    convert_units,
    grid_mean,
    hours_to_seconds,
    summarize_grid,
)


def test_grid_mean_ignores_missing(expected_values):
    assert grid_mean(expected_values) == pytest.approx(147.5)


def test_grid_mean_without_skipna_propagates_missing(expected_values):
    assert math.isnan(grid_mean(expected_values, skipna=False))


def test_grid_mean_all_missing_is_nan():
    assert math.isnan(grid_mean(np.full((3, 3), np.nan)))


def test_grid_mean_empty_is_nan():
    assert math.isnan(grid_mean(np.empty((0, 4))))


def test_hours_to_seconds(expected_values):
    seconds = hours_to_seconds(expected_values)
    assert seconds[0, 1] == 101.0 * 3600
    assert np.isnan(seconds[0, 0])
    assert grid_mean(seconds) == pytest.approx(147.5 * 3600)


def test_convert_units_keeps_dataarray_metadata():
    da = xr.DataArray(
        np.array([[1.0, 2.0]]),
        dims=("lat", "lon"),
        coords={"lat": [50.0], "lon": [0.0, 1.0]},
        attrs={"units": "hours", "long_name": "Sunshine Duration"},
    )
    converted = hours_to_seconds(da)
    assert isinstance(converted, xr.DataArray)
    assert converted.attrs == {"units": "seconds", "long_name": "Sunshine Duration"}
    assert da.attrs["units"] == "hours"
    np.testing.assert_array_equal(converted.values, [[3600.0, 7200.0]])


def test_convert_units_rejects_non_finite_factor():
    with pytest.raises(ParameterError):
        convert_units(np.ones(3), float("inf"))


def test_summarize_grid(expected_values):
    summary = summarize_grid(expected_values, units="hours")
    assert summary.shape == (8, 12)
    assert summary.minimum == 101.0
    assert summary.maximum == 194.0
    assert summary.mean == pytest.approx(147.5)
    assert summary.valid_count == 94
    assert summary.missing_count == 2
    assert summary.missing_fraction == pytest.approx(2 / 96)
    assert summary.to_dict()["units"] == "hours"


def test_summarize_grid_takes_units_from_dataarray():
    da = xr.DataArray(np.ones((2, 2)), dims=("lat", "lon"), attrs={"units": "hours"})
    assert summarize_grid(da).units == "hours"


def test_summarize_grid_all_missing():
    summary = summarize_grid(np.full((2, 2), np.nan))
    assert summary.valid_count == 0
    assert math.isnan(summary.mean)
