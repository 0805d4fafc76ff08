"""
Utility Module for Gold Invoice Entry.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Exception hierarchy
    - Common helpers
"""

from .logger import setup_logger, get_logger
from .helpers import (
    get_file_extension,
    format_file_size,
    generate_identifier,
    parse_iso_date,
    format_inr
)

__all__ = [
    'setup_logger',
    'get_logger',
    'get_file_extension',
    'format_file_size',
    'generate_identifier',
    'parse_iso_date',
    'format_inr'
]
