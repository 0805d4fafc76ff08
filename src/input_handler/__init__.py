"""
Input Handler Module for Gold Invoice Entry.

This module provides functionality for:
    - Loading and validating invoice documents
    - Detecting document media types (PDF vs image)

Supported formats:
    - PDF (digital and scanned)
    - Images: JPG, JPEG, PNG, WEBP, TIFF, BMP

Author: ML Engineering Team
"""

from .handler import DocumentLoader

__all__ = ['DocumentLoader']
