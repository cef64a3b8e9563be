"""
CM SAF Reader NetCDF Connection

This module wraps a read-only ``netCDF4.Dataset`` handle. The connection is
opened once, queried for metadata and arrays, and closed once.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union, Any

import netCDF4
import numpy as np

from ..core.logging_config import get_logger
from ..core.config import LON_NAMES, LAT_NAMES
from ..core.exceptions import (
    ConnectionClosedError, CoordinateError, DimensionError, InvalidFormatError,
    VariableNotFoundError, validate_required_file
)

logger = get_logger('io.connection')


# ============================================================================
# Connection Class
# ============================================================================

class NetCDFConnection:
    """
    Read-only connection to a NetCDF file.

    Supports the context manager protocol so the handle is always released:

        >>> with NetCDFConnection("SDUms201808010000401UD1000101UD.nc") as nc:
        ...     sdu = nc.get_variable("SDU")
    """

    def __init__(self, path: Union[str, Path]):
        self.path = validate_required_file(Path(path), "NetCDF")
        try:
            self._ds = netCDF4.Dataset(self.path, mode="r")
        except OSError as e:
            raise InvalidFormatError("NetCDF file", "NetCDF3/NetCDF4", f"{self.path} ({e})")
        logger.info("Opened NetCDF connection to %s", self.path)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._ds is not None and self._ds.isopen()

    def close(self) -> None:
        """Close the underlying handle. Closing twice is a no-op."""
        if self._ds is None:
            return
        if self._ds.isopen():
            self._ds.close()
            logger.info("Closed NetCDF connection to %s", self.path)
        self._ds = None

    def __enter__(self) -> "NetCDFConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<NetCDFConnection {self.path.name} ({state})>"

    def _handle(self) -> netCDF4.Dataset:
        if not self.is_open:
            raise ConnectionClosedError(self.path)
        return self._ds

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def data_model(self) -> str:
        return self._handle().data_model

    @property
    def dimensions(self) -> Dict[str, int]:
        return {name: len(dim) for name, dim in self._handle().dimensions.items()}

    @property
    def variables(self) -> List[str]:
        return list(self._handle().variables)

    @property
    def data_variables(self) -> List[str]:
        """Variables that are not coordinate (dimension) variables."""
        ds = self._handle()
        return [name for name in ds.variables if name not in ds.dimensions]

    @property
    def global_attributes(self) -> Dict[str, Any]:
        ds = self._handle()
        return {attr: ds.getncattr(attr) for attr in ds.ncattrs()}

    def variable_attributes(self, name: str) -> Dict[str, Any]:
        var = self._variable(name)
        return {attr: var.getncattr(attr) for attr in var.ncattrs()}

    def variable_dimensions(self, name: str) -> Tuple[str, ...]:
        return tuple(self._variable(name).dimensions)

    def describe(self) -> str:
        """
        Full metadata listing of the file.

        Lists every data variable with its dimensions and attributes, every
        dimension with its length, and the global attributes.
        """
        ds = self._handle()
        lines = [f"File {self.path} ({ds.data_model}):", ""]

        data_vars = self.data_variables
        lines.append(f"     {len(data_vars)} variables (excluding dimension variables):")
        for name in data_vars:
            var = ds.variables[name]
            lines.append(f"        {var.dtype} {name}[{','.join(var.dimensions)}]")
            for attr in var.ncattrs():
                lines.append(f"            {attr}: {var.getncattr(attr)}")

        lines.append("")
        lines.append(f"     {len(ds.dimensions)} dimensions:")
        for name, dim in ds.dimensions.items():
            unlimited = "  *** is unlimited ***" if dim.isunlimited() else ""
            lines.append(f"        {name}  Size:{len(dim)}{unlimited}")
            if name in ds.variables:
                for attr in ds.variables[name].ncattrs():
                    lines.append(f"            {attr}: {ds.variables[name].getncattr(attr)}")

        attrs = self.global_attributes
        lines.append("")
        lines.append(f"    {len(attrs)} global attributes:")
        for attr, value in attrs.items():
            lines.append(f"        {attr}: {value}")

        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Data Extraction
    # ------------------------------------------------------------------

    def resolve_variable_name(self, name: str) -> str:
        """Match ``name`` exactly, then case-insensitively."""
        variables = self._handle().variables
        if name in variables:
            return name

        matches = [v for v in variables if v.lower() == name.lower()]
        if len(matches) == 1:
            logger.debug("Resolved variable '%s' to '%s'", name, matches[0])
            return matches[0]

        raise VariableNotFoundError([name], list(variables))

    def _variable(self, name: str) -> netCDF4.Variable:
        return self._handle().variables[self.resolve_variable_name(name)]

    def get_variable(
        self,
        name: str,
        squeeze: bool = True,
        lon_first: bool = False
    ) -> np.ndarray:
        """
        Read a variable into a float array.

        Missing values become NaN. Length-1 dimensions are dropped when
        ``squeeze`` is set, so a (time=1, lat, lon) variable becomes a
        (lat, lon) array.

        Args:
            name: Variable name (case-insensitive fallback)
            squeeze: Drop length-1 dimensions
            lon_first: Return a 2D grid ordered (lon, lat)

        Returns:
            np.ndarray: Variable values
        """
        var = self._variable(name)
        values = np.ma.filled(np.ma.asarray(var[:], dtype=float), np.nan)
        dims = list(var.dimensions)

        if squeeze:
            keep = [i for i, size in enumerate(values.shape) if size != 1]
            dims = [dims[i] for i in keep]
            values = values.reshape([values.shape[i] for i in keep])

        if lon_first:
            values = self._order_lon_first(var.name, values, dims)

        logger.debug("Read variable %s with shape %s", var.name, values.shape)
        return values

    @staticmethod
    def _order_lon_first(name: str, values: np.ndarray, dims: List[str]) -> np.ndarray:
        if values.ndim != 2:
            raise DimensionError(name, "2D (lon, lat) after squeezing", dims)

        lon_axis = _find_axis(dims, LON_NAMES)
        lat_axis = _find_axis(dims, LAT_NAMES)
        if lon_axis is None or lat_axis is None:
            raise DimensionError(name, "one longitude and one latitude dimension", dims)

        return np.transpose(values, (lon_axis, lat_axis))

    def get_coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Read the longitude and latitude coordinate vectors.

        Returns:
            Tuple[np.ndarray, np.ndarray]: (lon, lat) 1D arrays
        """
        variables = self.variables
        lon_name = _find_name(variables, LON_NAMES)
        lat_name = _find_name(variables, LAT_NAMES)
        if lon_name is None:
            raise CoordinateError("longitude", f"No variable named one of {LON_NAMES}")
        if lat_name is None:
            raise CoordinateError("latitude", f"No variable named one of {LAT_NAMES}")

        lon = self.get_variable(lon_name, squeeze=False)
        lat = self.get_variable(lat_name, squeeze=False)
        if lon.ndim != 1:
            raise CoordinateError("longitude", f"Expected 1D, got {lon.ndim}D")
        if lat.ndim != 1:
            raise CoordinateError("latitude", f"Expected 1D, got {lat.ndim}D")
        return lon, lat


# ============================================================================
# Helpers
# ============================================================================

def _find_name(names: List[str], candidates: Tuple[str, ...]) -> Optional[str]:
    lowered = {n.lower(): n for n in names}
    for candidate in candidates:
        if candidate in lowered:
            return lowered[candidate]
    return None

def _find_axis(dims: List[str], candidates: Tuple[str, ...]) -> Optional[int]:
    for i, dim in enumerate(dims):
        if dim.lower() in candidates:
            return i
    return None

# ============================================================================
# Convenience Functions
# ============================================================================

def open_netcdf(path: Union[str, Path]) -> NetCDFConnection:
    """
    Open a read-only connection to a NetCDF file.

    Args:
        path: File path

    Returns:
        NetCDFConnection: Open connection; close it with ``close()`` or use it
        as a context manager
    """
    return NetCDFConnection(path)
