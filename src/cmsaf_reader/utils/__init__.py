"""
CM SAF Reader Utilities

This package provides utility functions for file and grid information queries.
"""

from .info import (
    get_file_info,
    format_file_info,
    get_grid_info,
)

__all__ = [
    "get_file_info",
    "format_file_info",
    "get_grid_info",
]
