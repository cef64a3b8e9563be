from datetime import datetime
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import netCDF4
import numpy as np
import pytest

SAMPLE_NAME = "SDUms201808010000401UD1000101UD.nc"
LON = np.arange(-10.0, 14.0, 2.0)   # 12 values
LAT = np.arange(36.0, 60.0, 3.0)    # 8 values
FILL = -999.0


def sample_values() -> np.ndarray:
    values = np.arange(LAT.size * LON.size, dtype=float).reshape(LAT.size, LON.size) + 100.0
    values[0, 0] = np.nan
    values[-1, -1] = np.nan
    return values


def write_sample(path: Path) -> Path:
    values = sample_values()
    with netCDF4.Dataset(path, "w", format="NETCDF4") as ds:
        ds.title = "CM SAF Sunshine Duration (synthetic)"
        ds.institution = "EUMETSAT/CMSAF"

        ds.createDimension("time", None)
        ds.createDimension("lat", LAT.size)
        ds.createDimension("lon", LON.size)
        ds.createDimension("nb2", 2)

        lon = ds.createVariable("lon", "f8", ("lon",))
        lon.units = "degrees_east"
        lon[:] = LON

        lat = ds.createVariable("lat", "f8", ("lat",))
        lat.units = "degrees_north"
        lat[:] = LAT

        time = ds.createVariable("time", "f8", ("time",))
        time.units = "hours since 1983-01-01 00:00:00"
        time.calendar = "standard"
        time[:] = netCDF4.date2num([datetime(2018, 8, 1)], time.units, time.calendar)

        bnds = ds.createVariable("time_bnds", "f8", ("time", "nb2"))
        bnds[:] = netCDF4.date2num(
            [[datetime(2018, 8, 1), datetime(2018, 8, 31)]], time.units, time.calendar
        )

        sdu = ds.createVariable("SDU", "f4", ("time", "lat", "lon"), fill_value=FILL)
        sdu.units = "hours"
        sdu.long_name = "Sunshine Duration"
        sdu[0, :, :] = np.ma.masked_invalid(values)
    return path


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    return write_sample(tmp_path / SAMPLE_NAME)


@pytest.fixture
def expected_values() -> np.ndarray:
    return sample_values()


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
