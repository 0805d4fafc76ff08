"""
Computation Module for Gold Invoice Entry.

This module provides the numeric side of a transaction:
    - Unset / Invalid / Valid field values
    - Forward computation of taxable, GST and grand totals
    - Inverse derivation of rate from an edited taxable total
"""

from .numeric import NumericValue, Unset, Invalid, Valid, UNSET, parse_numeric, is_positive
from .engine import ComputedTotals, compute_totals, derive_rate_from_total, taxable_total_view

__all__ = [
    'NumericValue',
    'Unset',
    'Invalid',
    'Valid',
    'UNSET',
    'parse_numeric',
    'is_positive',
    'ComputedTotals',
    'compute_totals',
    'derive_rate_from_total',
    'taxable_total_view'
]
