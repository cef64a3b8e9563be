"""
CM SAF Reader Tidy Conversion

This module converts gridded NetCDF variables into a long ("tidy") pandas
DataFrame: one row per grid cell and time step, one column per variable and
per dimension.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd
import xarray as xr

from ..core.logging_config import get_logger
from ..core.config import LON_DIM, LAT_DIM, TIME_DIM, TIDY_HEAD_ROWS
from ..core.core_types import Region
from ..core.exceptions import DataProcessingError, check_variables_availability
from ..coordinates.slicing import apply_region
from ..io.dataset_loader import open_dataset

logger = get_logger('processing.tidy')


def _grid_variables(ds: xr.Dataset) -> List[str]:
    """Data variables defined on both the lon and lat dimensions."""
    return [
        str(name) for name, da in ds.data_vars.items()
        if LON_DIM in da.dims and LAT_DIM in da.dims
    ]


def _dimension_order(dims: Sequence[str]) -> List[str]:
    # Longitude varies fastest, then latitude, then time
    preferred = [TIME_DIM, LAT_DIM, LON_DIM]
    others = [d for d in dims if d not in preferred]
    return others + [d for d in preferred if d in dims]


def to_tidy_dataframe(
    source: Union[str, Path, xr.Dataset],
    variables: Optional[Sequence[str]] = None,
    region: Optional[Region] = None,
    dropna: bool = True
) -> pd.DataFrame:
    """
    Convert gridded variables into a long-format DataFrame.

    Args:
        source: File path or already opened dataset
        variables: Variables to include (default: every lon/lat variable)
        region: Optional spatial filter applied before conversion
        dropna: Drop rows where every value column is missing

    Returns:
        pd.DataFrame: Value columns followed by lon, lat, time (and any other
        dimension) columns

    Examples:
        >>> df = to_tidy_dataframe("SDUms201808010000401UD1000101UD.nc")
        >>> df.head()
    """
    if isinstance(source, xr.Dataset):
        return _dataset_to_tidy(source, variables, region, dropna)

    with open_dataset(source) as ds:
        return _dataset_to_tidy(ds, variables, region, dropna)


def _dataset_to_tidy(
    ds: xr.Dataset,
    variables: Optional[Sequence[str]],
    region: Optional[Region],
    dropna: bool
) -> pd.DataFrame:
    available = _grid_variables(ds)
    if variables is None:
        variables = available
    else:
        variables = list(variables)
        check_variables_availability(variables, available)

    if not variables:
        raise DataProcessingError("tidy conversion", "No variables on a lon/lat grid")

    subset = ds[variables]
    if region is not None:
        subset = apply_region(subset, region)

    # Drop auxiliary coordinates (bounds etc.) so they do not become columns
    extra_coords = [c for c in subset.coords if c not in subset.dims]
    subset = subset.reset_coords(extra_coords, drop=True)

    dims = _dimension_order([str(d) for d in subset.dims])
    df = subset.to_dataframe(dim_order=dims).reset_index()

    if dropna:
        df = df.dropna(subset=variables, how="all").reset_index(drop=True)

    columns = variables + [LON_DIM, LAT_DIM] + [d for d in reversed(dims) if d not in (LON_DIM, LAT_DIM)]
    df = df[columns]

    logger.info("Tidy table with %d rows and columns %s", len(df), list(df.columns))
    return df


def tidy_head(df: pd.DataFrame, n: int = TIDY_HEAD_ROWS) -> pd.DataFrame:
    """First ``n`` rows of a tidy table."""
    return df.head(n)
