"""
CM SAF Reader Configuration and Constants

This module centralizes all configuration parameters, constants, and default values
for better maintainability and consistency across the codebase.
"""

import os
from pathlib import Path

# ============================================================================
# File Paths and Directories
# ============================================================================

# Users can override via CMSAF_READER_DATA_DIR environment variable
DEFAULT_DATA_DIR = Path(os.environ.get("CMSAF_READER_DATA_DIR", "."))

# Monthly sunshine duration over Europe, August 2018 (Interim Climate Data Record)
DEFAULT_DATA_FILENAME = "SDUms201808010000401UD1000101UD.nc"

# ============================================================================
# Dimension and Variable Names
# ============================================================================

LON_DIM = 'lon'
LAT_DIM = 'lat'
TIME_DIM = 'time'

LON_NAMES = ('lon', 'longitude', 'x')
LAT_NAMES = ('lat', 'latitude', 'y')

DEFAULT_VARIABLE = 'SDU'

# Projected raster dimensions
PROJ_X_DIM = 'x'
PROJ_Y_DIM = 'y'

# ============================================================================
# Units
# ============================================================================

SECONDS_PER_HOUR = 60 * 60
DEFAULT_UNITS = 'hours'

# ============================================================================
# Coordinate Reference Systems
# ============================================================================

SOURCE_CRS = "EPSG:4326"
DEFAULT_TARGET_PROJ = "+proj=lcc +lat_1=48 +lat_2=33 +lon_0=-100 +datum=WGS84"

# ============================================================================
# CM SAF File Naming
# ============================================================================

# <product:3><timestep:2><YYYYMMDDhhmm><remaining identifier>.nc
PRODUCT_FILENAME_PATTERN = r"^([A-Z]{3})([a-z]{2})(\d{12})([0-9A-Za-z]*)\.nc$"
PRODUCT_TIMESTAMP_FORMAT = "%Y%m%d%H%M"

TIMESTEP_CODES = {
    "in": "instantaneous",
    "hm": "hourly mean",
    "dm": "daily mean",
    "ds": "daily sum",
    "mm": "monthly mean",
    "ms": "monthly sum",
    "mh": "monthly mean diurnal cycle",
    "ym": "yearly mean",
}

# ============================================================================
# Plotting Defaults
# ============================================================================

# Closest matplotlib equivalent of fields::larry.colors
DEFAULT_CMAP = "Spectral"
DEFAULT_FIGSIZE = (10, 6)
DEFAULT_DPI = 150
BORDER_COLOR = "0.2"
BORDER_LINEWIDTH = 1.5

# ============================================================================
# Tidy Conversion
# ============================================================================

TIDY_HEAD_ROWS = 6

# ============================================================================
# Logging
# ============================================================================

# Overrides the package default level (WARNING) at import time
LOG_LEVEL_ENV = "CMSAF_READER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ============================================================================
# Helper Functions
# ============================================================================

def get_default_data_path() -> Path:
    """Get the path of the sample sunshine duration file."""
    return DEFAULT_DATA_DIR / DEFAULT_DATA_FILENAME
