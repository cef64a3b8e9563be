"""
CM SAF Reader Custom Exception Classes

This module defines all custom exception classes for better error handling
and more informative error messages.
"""

from typing import Optional, Sequence
from pathlib import Path

# ============================================================================
# Base Exception
# ============================================================================

class CMSAFReaderError(Exception):
    """Base exception class for all CM SAF Reader related errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        full_message = f"{message}\nDetails: {details}" if details else message
        super().__init__(full_message)

# ============================================================================
# File and Directory Errors
# ============================================================================

class DataFileNotFoundError(CMSAFReaderError):
    """Data file or directory not found."""

    def __init__(self, file_path: Path, file_type: str = "Data"):
        super().__init__(f"{file_type} file not found: {file_path}")
        self.file_path = file_path
        self.file_type = file_type

class InvalidFormatError(CMSAFReaderError):
    """Invalid data format errors."""

    def __init__(self, item: str, expected_format: str, actual: str):
        super().__init__(
            f"Invalid format for {item}: {actual}",
            f"Expected format: {expected_format}"
        )
        self.item = item
        self.expected_format = expected_format
        self.actual = actual

class ConnectionClosedError(CMSAFReaderError):
    """Operation attempted on a closed NetCDF connection."""

    def __init__(self, file_path: Path):
        super().__init__(f"NetCDF connection is closed: {file_path}")
        self.file_path = file_path

# ============================================================================
# Data Availability Errors
# ============================================================================

class VariableNotFoundError(CMSAFReaderError):
    """Variables not found."""

    def __init__(self, missing_variables: Sequence[str], available_variables: Optional[Sequence[str]] = None):
        vars_str = ", ".join(missing_variables)
        super().__init__(
            f"Variables not found: {vars_str}",
            f"Available variables: {', '.join(sorted(available_variables))}" if available_variables else None
        )
        self.missing_variables = list(missing_variables)
        self.available_variables = list(available_variables) if available_variables else None

class DimensionError(CMSAFReaderError):
    """Unexpected variable dimensionality."""

    def __init__(self, variable: str, expected: str, actual: Sequence[str]):
        super().__init__(
            f"Unexpected dimensions for '{variable}': ({', '.join(actual)})",
            f"Expected: {expected}"
        )
        self.variable = variable
        self.actual = tuple(actual)

class CoordinateError(CMSAFReaderError):
    """Coordinate system related errors."""

    def __init__(self, coord_name: str, issue: str):
        super().__init__(f"Coordinate error in '{coord_name}': {issue}")
        self.coord_name = coord_name

# ============================================================================
# Processing Errors
# ============================================================================

class ProjectionError(CMSAFReaderError):
    """Coordinate reference system errors."""

    def __init__(self, projection: str, reason: str):
        super().__init__(f"Invalid projection: {projection}", reason)
        self.projection = projection

class DataProcessingError(CMSAFReaderError):
    """Data processing related errors."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Data processing failed during {operation}", reason)
        self.operation = operation
        self.reason = reason

class ParameterError(CMSAFReaderError):
    """Parameter validation errors."""

    def __init__(self, parameter: str, value: str, reason: str):
        super().__init__(f"Invalid parameter '{parameter}': {value}", reason)
        self.parameter = parameter
        self.value = value

# ============================================================================
# Utility Functions
# ============================================================================

def validate_required_file(file_path: Path, file_type: str = "Data") -> Path:
    """
    Validate that a required file exists.

    Args:
        file_path: Path to the file
        file_type: Type description of the file

    Returns:
        Path: The validated file path

    Raises:
        DataFileNotFoundError: If file doesn't exist
    """
    if not file_path.is_file():
        raise DataFileNotFoundError(file_path, file_type)
    return file_path

def check_variables_availability(requested: Sequence[str], available: Sequence[str]) -> None:
    """Check if all requested variables are available."""
    missing = [v for v in requested if v not in available]
    if missing:
        raise VariableNotFoundError(missing, available)
