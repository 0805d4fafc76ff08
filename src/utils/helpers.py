"""
Helper Utilities Module.

This module provides small utility functions used throughout gold
invoice entry. Functions here should be generic and reusable across
different modules.

Functions:
    - get_file_extension: Extract file extension safely
    - format_file_size: Human-readable byte counts
    - generate_identifier: Opaque unique transaction identifiers
    - parse_iso_date: Strict ISO calendar date parsing
    - format_inr: Indian-grouped rupee amounts
"""

import uuid
from datetime import date
from pathlib import Path
from typing import Optional, Union


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the file extension from a filepath.

    Returns the extension in lowercase, including the dot.
    Returns empty string if no extension exists.

    Args:
        filepath: Path to the file.

    Returns:
        Lowercase file extension including dot (e.g., ".pdf").

    Example:
        >>> get_file_extension("invoice.PDF")
        ".pdf"
        >>> get_file_extension("noextension")
        ""
    """
    return Path(filepath).suffix.lower()


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes.

    Returns:
        Human-readable file size string.

    Example:
        >>> format_file_size(1536)
        "1.5 KB"
    """
    size = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} PB"


def generate_identifier() -> str:
    """
    Generate an opaque unique identifier for a transaction.

    Returns:
        32-character hexadecimal string.
    """
    return uuid.uuid4().hex


def parse_iso_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD calendar date.

    Args:
        value: Date string or date instance.

    Returns:
        Parsed date, or None if the value is empty or not an ISO date.
    """
    if value is None:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def format_inr(amount: float) -> str:
    """
    Format an amount in rupees with Indian digit grouping.

    Example:
        >>> format_inr(1234567.5)
        "₹12,34,567.50"
    """
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")

    # Last three digits, then groups of two
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail]) if groups else tail

    return f"{sign}₹{grouped}.{fraction}"
