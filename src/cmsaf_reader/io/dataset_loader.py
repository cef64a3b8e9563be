"""
CM SAF Reader Dataset Loader

This module loads CM SAF NetCDF files into labelled xarray objects: the full
dataset, a single 2D grid, and a geographic raster.
"""

from pathlib import Path
from typing import Optional, Union

import xarray as xr

from ..core.logging_config import get_logger
from ..core.config import (
    DEFAULT_VARIABLE, LAT_DIM, LON_DIM, LON_NAMES, LAT_NAMES, SOURCE_CRS, TIME_DIM
)
from ..core.core_types import ChunkSetting
from ..core.exceptions import (
    CoordinateError, DimensionError, InvalidFormatError, ParameterError,
    VariableNotFoundError, validate_required_file
)

logger = get_logger('io.dataset_loader')


# ============================================================================
# Dataset Loading
# ============================================================================

def open_dataset(
    path: Union[str, Path],
    chunks: ChunkSetting = None,
    engine: Optional[str] = None
) -> xr.Dataset:
    """
    Open a NetCDF file as an xarray Dataset.

    Args:
        path: File path
        chunks: Dask chunking configuration (None loads lazily without dask)
        engine: xarray backend engine

    Returns:
        xr.Dataset: Opened dataset with standardized lon/lat names
    """
    file_path = validate_required_file(Path(path), "NetCDF")
    try:
        ds = xr.open_dataset(file_path, chunks=chunks, engine=engine)
    except (OSError, ValueError) as e:
        raise InvalidFormatError("NetCDF file", "NetCDF3/NetCDF4", f"{file_path} ({e})")

    logger.debug("Opened dataset %s with variables %s", file_path, list(ds.data_vars))
    return standardize_coordinate_names(ds)


def standardize_coordinate_names(ds: xr.Dataset) -> xr.Dataset:
    """Rename longitude/latitude variants (e.g. 'longitude') to 'lon'/'lat'."""
    rename = {}
    for name in list(ds.dims) + list(ds.coords):
        lowered = str(name).lower()
        if lowered in LON_NAMES and name != LON_DIM and LON_DIM not in ds.variables:
            rename[name] = LON_DIM
        elif lowered in LAT_NAMES and name != LAT_DIM and LAT_DIM not in ds.variables:
            rename[name] = LAT_DIM
    if rename:
        logger.debug("Renaming coordinates: %s", rename)
        ds = ds.rename(rename)
    return ds


def resolve_data_variable(ds: xr.Dataset, variable: str) -> str:
    """Match ``variable`` exactly, then case-insensitively."""
    if variable in ds.data_vars:
        return variable

    matches = [str(v) for v in ds.data_vars if str(v).lower() == variable.lower()]
    if len(matches) == 1:
        return matches[0]

    raise VariableNotFoundError([variable], [str(v) for v in ds.data_vars])


def select_grid(
    ds: xr.Dataset,
    variable: str = DEFAULT_VARIABLE,
    time_index: int = 0
) -> xr.DataArray:
    """
    Select a single 2D (lat, lon) field from a dataset.

    Args:
        ds: Source dataset
        variable: Variable name
        time_index: Time step to select when a time dimension exists

    Returns:
        xr.DataArray: 2D field ordered (lat, lon)
    """
    da = ds[resolve_data_variable(ds, variable)]

    if TIME_DIM in da.dims:
        size = da.sizes[TIME_DIM]
        if not -size <= time_index < size:
            raise ParameterError("time_index", str(time_index), f"Outside valid range: [{-size}, {size - 1}]")
        da = da.isel({TIME_DIM: time_index})

    da = da.squeeze(drop=False)
    if LON_DIM not in da.dims or LAT_DIM not in da.dims or da.ndim != 2:
        raise DimensionError(str(da.name), f"({LAT_DIM}, {LON_DIM})", [str(d) for d in da.dims])

    return da.transpose(LAT_DIM, LON_DIM)


def load_grid(
    path: Union[str, Path],
    variable: str = DEFAULT_VARIABLE,
    time_index: int = 0
) -> xr.DataArray:
    """
    Load a single 2D field into memory.

    Args:
        path: File path
        variable: Variable name
        time_index: Time step to select

    Returns:
        xr.DataArray: 2D field ordered (lat, lon), values loaded
    """
    with open_dataset(path) as ds:
        da = select_grid(ds, variable, time_index).load()
    logger.info("Loaded grid %s with shape %s", da.name, da.shape)
    return da


# ============================================================================
# Raster Loading
# ============================================================================

def open_raster(
    path: Union[str, Path],
    variable: str = DEFAULT_VARIABLE,
    time_index: int = 0
) -> xr.DataArray:
    """
    Load a variable as a geographic raster.

    The raster is sorted by ascending latitude and longitude and tagged with
    its coordinate reference system in ``attrs['crs']``.

    Args:
        path: File path
        variable: Variable name
        time_index: Time step to select

    Returns:
        xr.DataArray: Raster on a regular lon/lat grid
    """
    da = load_grid(path, variable, time_index)
    for dim in (LON_DIM, LAT_DIM):
        if da[dim].ndim != 1:
            raise CoordinateError(dim, f"Expected 1D, got {da[dim].ndim}D")

    raster = da.sortby(LAT_DIM).sortby(LON_DIM)
    raster.attrs['crs'] = SOURCE_CRS
    return raster
