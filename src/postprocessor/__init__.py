"""
Post-Processing Module for Gold Invoice Entry.

This module provides functionality for:
    - Date, amount and weight normalization
    - Normalizing extraction service responses
    - Rule-based fallback extraction from raw text

Author: ML Engineering Team
"""

from .normalizers import DateNormalizer, AmountNormalizer, QuantityNormalizer
from .fallback_parser import FallbackTextParser, FALLBACK_FAILURE_MESSAGE
from .processor import PostProcessor

__all__ = [
    'PostProcessor',
    'FallbackTextParser',
    'FALLBACK_FAILURE_MESSAGE',
    'DateNormalizer',
    'AmountNormalizer',
    'QuantityNormalizer'
]
