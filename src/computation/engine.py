"""
Numeric Computation Engine.

Pure functions deriving the taxable amount, GST amount and grand total
of a gold transaction, plus the inverse derivation of the per-gram rate
from an edited taxable total.

    taxable = quantity × rate
    gst     = taxable × gst_rate / 100
    total   = taxable + gst

Totals are always a view over the current quantity, rate and GST rate;
they are never stored alongside them.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .numeric import NumericValue, Unset, Valid, UNSET, is_positive, parse_numeric


@dataclass(frozen=True)
class ComputedTotals:
    """
    Amounts derived from a quantity, rate and GST rate.

    Attributes:
        taxable_amount: quantity × rate
        gst_amount: taxable_amount × gst_rate / 100
        total_amount: taxable_amount + gst_amount
    """
    taxable_amount: float
    gst_amount: float
    total_amount: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'taxable_amount': self.taxable_amount,
            'gst_amount': self.gst_amount,
            'total_amount': self.total_amount
        }


def compute_totals(quantity: Any, rate: Any, gst_rate: Any) -> ComputedTotals:
    """
    Compute taxable, GST and grand total amounts.

    Missing or non-numeric inputs count as zero, so this never raises.

    Args:
        quantity: Quantity in grams (NumericValue, number, text or None).
        rate: Rate per gram.
        gst_rate: GST percentage.

    Returns:
        ComputedTotals for the given inputs.

    Example:
        >>> compute_totals("10", "6200", "3").total_amount
        63860.0
    """
    qty = parse_numeric(quantity).as_float()
    per_gram = parse_numeric(rate).as_float()
    gst_percent = parse_numeric(gst_rate).as_float()

    taxable = qty * per_gram
    gst_amount = taxable * (gst_percent / 100)

    return ComputedTotals(
        taxable_amount=taxable,
        gst_amount=gst_amount,
        total_amount=taxable + gst_amount
    )


def derive_rate_from_total(
    desired_total: Any,
    quantity: Any,
    current_rate: NumericValue = UNSET
) -> NumericValue:
    """
    Back-derive the per-gram rate from an edited taxable total.

    Args:
        desired_total: Taxable total entered by the operator.
        quantity: Current quantity in grams.
        current_rate: Rate currently held by the draft.

    Returns:
        Valid(total / quantity) when quantity is positive and the total is
        a number; Unset when the total was cleared; otherwise
        current_rate unchanged.
    """
    total = parse_numeric(desired_total)
    qty = parse_numeric(quantity)

    if isinstance(total, Valid) and is_positive(qty):
        return Valid(total.value / qty.value)

    if isinstance(total, Unset):
        return UNSET

    return parse_numeric(current_rate)


def taxable_total_view(quantity: Any, rate: Any) -> str:
    """
    Render the editable taxable total.

    Returns:
        quantity × rate with two decimals, or an empty string when either
        input is not a valid number.
    """
    qty = parse_numeric(quantity)
    per_gram = parse_numeric(rate)

    if isinstance(qty, Valid) and isinstance(per_gram, Valid):
        return f"{qty.value * per_gram.value:.2f}"
    return ""
