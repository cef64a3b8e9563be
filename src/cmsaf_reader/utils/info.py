"""
CM SAF Reader Information Utilities

This module provides functions for querying file and grid information:
a concise file overview (dimensions, variables, attributes) and the shape
and extent of a gridded variable.
"""

from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from ..core.config import DEFAULT_VARIABLE
from ..core.core_types import GridInfo
from ..core.exceptions import InvalidFormatError
from ..io.connection import NetCDFConnection, open_netcdf
from ..io.file_utils import parse_product_filename


# ============================================================================
# File Information
# ============================================================================

def get_file_info(source: Union[str, Path, NetCDFConnection]) -> Dict[str, Any]:
    """
    Get a concise overview of a NetCDF file.

    Args:
        source: File path or open connection (left open)

    Returns:
        Dict: File path, format, dimensions, variables and global attributes

    Examples:
        >>> info = get_file_info("SDUms201808010000401UD1000101UD.nc")
        >>> print(info['dimensions'])
        {'lon': 1200, 'lat': 500, 'time': 1}
    """
    if isinstance(source, NetCDFConnection):
        return _collect_file_info(source)

    with open_netcdf(source) as nc:
        return _collect_file_info(nc)


def _collect_file_info(nc: NetCDFConnection) -> Dict[str, Any]:
    variables = {}
    for name in nc.data_variables:
        attrs = nc.variable_attributes(name)
        variables[name] = {
            'dims': nc.variable_dimensions(name),
            'units': attrs.get('units'),
            'long_name': attrs.get('long_name', attrs.get('standard_name')),
        }

    try:
        product = parse_product_filename(nc.path)
    except InvalidFormatError:
        product = None

    return {
        'file': str(nc.path),
        'format': nc.data_model,
        'dimensions': nc.dimensions,
        'variables': variables,
        'global_attributes': nc.global_attributes,
        'product': product,
    }


def format_file_info(info: Dict[str, Any]) -> str:
    """
    Render ``get_file_info`` output as short text.

    Args:
        info: Output of ``get_file_info``

    Returns:
        str: Multi-line summary
    """
    lines = [f"File: {info['file']} ({info['format']})"]

    product = info.get('product')
    if product is not None:
        timestep = product.timestep or product.timestep_code
        lines.append(f"Product: {product.product} ({timestep}), {product.timestamp:%Y-%m-%d %H:%M}")

    dims = ", ".join(f"{name}={size}" for name, size in info['dimensions'].items())
    lines.append(f"Dimensions: {dims}")

    lines.append("Variables:")
    for name, var in info['variables'].items():
        desc = f"  {name}[{','.join(var['dims'])}]"
        if var['long_name']:
            desc += f" {var['long_name']}"
        if var['units']:
            desc += f" ({var['units']})"
        lines.append(desc)

    attrs = info['global_attributes']
    if attrs:
        lines.append(f"Global attributes: {len(attrs)}")
        for key in ('title', 'institution', 'product_version', 'time_coverage_start'):
            if key in attrs:
                lines.append(f"  {key}: {attrs[key]}")

    return "\n".join(lines)


# ============================================================================
# Grid Information
# ============================================================================

def _resolution(values: np.ndarray):
    if values.size < 2:
        return None
    return float(np.mean(np.abs(np.diff(values))))


def get_grid_info(
    source: Union[str, Path, NetCDFConnection],
    variable: str = DEFAULT_VARIABLE
) -> GridInfo:
    """
    Get shape and coordinate extent of a gridded variable.

    Args:
        source: File path or open connection (left open)
        variable: Variable name

    Returns:
        GridInfo: Dimensions, squeezed shape, lon/lat ranges and resolution
    """
    if isinstance(source, NetCDFConnection):
        return _collect_grid_info(source, variable)

    with open_netcdf(source) as nc:
        return _collect_grid_info(nc, variable)


def _collect_grid_info(nc: NetCDFConnection, variable: str) -> GridInfo:
    name = nc.resolve_variable_name(variable)
    attrs = nc.variable_attributes(name)
    sizes = nc.dimensions
    dims = nc.variable_dimensions(name)
    lon, lat = nc.get_coordinates()

    return GridInfo(
        variable=name,
        dims=dims,
        shape=tuple(sizes[d] for d in dims if sizes[d] != 1),
        lon_range=(float(np.nanmin(lon)), float(np.nanmax(lon))),
        lat_range=(float(np.nanmin(lat)), float(np.nanmax(lat))),
        lon_resolution=_resolution(lon),
        lat_resolution=_resolution(lat),
        units=attrs.get('units'),
        long_name=attrs.get('long_name'),
    )
