"""
CM SAF Reader File Operation Utilities

This module handles all file and directory operations including the working
directory, data path resolution, file checks and product filename parsing.
"""

import os
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from ..core.logging_config import get_logger
from ..core.config import (
    PRODUCT_FILENAME_PATTERN, PRODUCT_TIMESTAMP_FORMAT, TIMESTEP_CODES
)
from ..core.core_types import ProductInfo
from ..core.exceptions import DataFileNotFoundError, InvalidFormatError

logger = get_logger('io.file_utils')

# ============================================================================
# Working Directory
# ============================================================================

def set_working_directory(path: Union[str, Path]) -> Path:
    """
    Change the process working directory.

    Files directly in the working directory can then be referred to by name.

    Args:
        path: Directory to switch to

    Returns:
        Path: The new working directory

    Raises:
        DataFileNotFoundError: If the directory does not exist
    """
    target = Path(path).expanduser()
    if not target.is_dir():
        raise DataFileNotFoundError(target, "Working directory")

    os.chdir(target)
    cwd = get_working_directory()
    logger.info("Working directory set to %s", cwd)
    return cwd

def get_working_directory() -> Path:
    """Return the current working directory."""
    return Path.cwd()

# ============================================================================
# Path Resolution
# ============================================================================

def resolve_data_path(
    path: Union[str, Path],
    data_dir: Optional[Union[str, Path]] = None
) -> Path:
    """
    Resolve a data file path.

    Absolute paths are returned unchanged. Relative paths are resolved against
    ``data_dir`` when given, otherwise against the working directory.

    Args:
        path: File name or path
        data_dir: Optional base directory

    Returns:
        Path: Absolute file path
    """
    path = Path(path).expanduser()
    if path.is_absolute():
        return path

    base = Path(data_dir).expanduser() if data_dir is not None else get_working_directory()
    return (base / path).absolute()

def file_exists(path: Union[str, Path]) -> bool:
    """Check whether ``path`` points to an existing file."""
    try:
        return Path(path).is_file()
    except OSError:
        return False

def list_netcdf_files(directory: Union[str, Path]) -> List[Path]:
    """
    List NetCDF files in a directory.

    Args:
        directory: Directory to search

    Returns:
        List[Path]: Sorted list of ``*.nc`` files
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DataFileNotFoundError(directory, "Data directory")
    return sorted(directory.glob("*.nc"))

# ============================================================================
# File Name Parsing
# ============================================================================

def parse_product_filename(path: Union[str, Path]) -> ProductInfo:
    """
    Parse a CM SAF product filename.

    Examples:
        SDUms201808010000401UD1000101UD.nc -> SDU, monthly sum, 2018-08-01 00:00

    Args:
        path: File path or name

    Returns:
        ProductInfo: Parsed product fields

    Raises:
        InvalidFormatError: If the name does not follow the CM SAF convention
    """
    filename = Path(path).name
    match = re.match(PRODUCT_FILENAME_PATTERN, filename)
    if not match:
        raise InvalidFormatError("filename", "PPPttYYYYMMDDhhmm*.nc", filename)

    product, timestep_code, stamp, identifier = match.groups()
    try:
        timestamp = datetime.strptime(stamp, PRODUCT_TIMESTAMP_FORMAT)
    except ValueError as e:
        raise InvalidFormatError("timestamp", "YYYYMMDDhhmm", f"{stamp} ({e})")

    return ProductInfo(
        product=product,
        timestep_code=timestep_code,
        timestep=TIMESTEP_CODES.get(timestep_code),
        timestamp=timestamp,
        identifier=identifier,
    )
