"""
Transaction Data Models.

This module defines the transaction type, the mutable in-progress draft
an operator edits, and the immutable finalized transaction record.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, TYPE_CHECKING

from config import get_config
from src.computation import (
    ComputedTotals,
    NumericValue,
    UNSET,
    compute_totals,
    derive_rate_from_total,
    is_positive,
    parse_numeric,
    taxable_total_view
)

if TYPE_CHECKING:
    from src.model_inference.extraction_result import ExtractionResult


class TransactionType(str, Enum):
    """Direction of a gold transaction."""

    PURCHASE = "PURCHASE"
    SALE = "SALE"

    @property
    def party_label(self) -> str:
        """Label for the counterparty field."""
        return "Supplier Name" if self is TransactionType.PURCHASE else "Customer Name"

    @classmethod
    def parse(cls, value: Any) -> Optional['TransactionType']:
        """
        Parse a transaction type case-insensitively.

        Returns:
            The matching TransactionType, or None if the value is not one.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


def default_gst_rate() -> float:
    """Default GST percentage from configuration."""
    return float(get_config("defaults.gst_rate_percent", 3))


def default_transaction_type() -> TransactionType:
    """Default transaction type from configuration."""
    configured = get_config("defaults.transaction_type", "PURCHASE")
    return TransactionType.parse(configured) or TransactionType.PURCHASE


@dataclass
class TransactionDraft:
    """
    In-progress transaction being edited by the operator.

    Numeric fields hold Unset / Invalid / Valid values so that an empty
    field, a malformed entry and zero stay distinguishable. The totals are
    always derived from the current fields; there is no stored total.

    Attributes:
        date: Transaction date (YYYY-MM-DD)
        type: PURCHASE or SALE
        party_name: Supplier or customer name
        quantity_grams: Gold weight in grams
        rate_per_gram: Price per gram
        gst_rate_percent: GST percentage

    Example:
        >>> draft = TransactionDraft.default(date(2026, 1, 15))
        >>> draft.set_quantity("10")
        >>> draft.set_taxable_total("62000")
        >>> draft.rate_per_gram
        Valid(value=6200.0)
    """
    date: str
    type: TransactionType = TransactionType.PURCHASE
    party_name: str = ""
    quantity_grams: NumericValue = UNSET
    rate_per_gram: NumericValue = UNSET
    gst_rate_percent: NumericValue = field(default_factory=lambda: parse_numeric(default_gst_rate()))

    @classmethod
    def default(cls, today: date) -> 'TransactionDraft':
        """
        Create an empty draft.

        Args:
            today: Date to pre-fill.

        Returns:
            Draft dated today, PURCHASE, with empty party, quantity and
            rate and the default GST rate.
        """
        return cls(
            date=today.isoformat(),
            type=default_transaction_type(),
            party_name="",
            quantity_grams=UNSET,
            rate_per_gram=UNSET,
            gst_rate_percent=parse_numeric(default_gst_rate())
        )

    def set_quantity(self, raw: Any) -> None:
        self.quantity_grams = parse_numeric(raw)

    def set_rate(self, raw: Any) -> None:
        self.rate_per_gram = parse_numeric(raw)

    def set_gst_rate(self, raw: Any) -> None:
        self.gst_rate_percent = parse_numeric(raw)

    def set_taxable_total(self, raw: Any) -> None:
        """
        Apply an edit of the taxable total by back-deriving the rate.

        This is the only edit that changes the rate indirectly. A cleared
        total clears the rate; anything that cannot be divided leaves the
        rate as it is.
        """
        self.rate_per_gram = derive_rate_from_total(
            raw,
            self.quantity_grams,
            self.rate_per_gram
        )

    @property
    def totals(self) -> ComputedTotals:
        return compute_totals(
            self.quantity_grams,
            self.rate_per_gram,
            self.gst_rate_percent
        )

    @property
    def taxable_total_view(self) -> str:
        return taxable_total_view(self.quantity_grams, self.rate_per_gram)

    @property
    def can_edit_total(self) -> bool:
        """The taxable total is editable only once quantity is positive."""
        return is_positive(self.quantity_grams)

    def apply_extraction(self, result: 'ExtractionResult') -> None:
        """
        Replace the draft fields with an extraction result.

        Fields the result left unset keep the draft's current date, type
        and GST rate; party, quantity and rate are cleared.

        Args:
            result: Successful extraction result.
        """
        if result.date:
            self.date = result.date
        if result.transaction_type is not None:
            self.type = result.transaction_type
        self.party_name = result.party_name or ""
        self.quantity_grams = parse_numeric(result.quantity_grams)
        self.rate_per_gram = parse_numeric(result.rate_per_gram)
        if result.gst_rate_percent is not None:
            self.gst_rate_percent = parse_numeric(result.gst_rate_percent)

    def to_dict(self) -> Dict[str, Any]:
        """
        Boundary (form) representation of the draft.

        Returns:
            Dictionary with text values for the numeric fields and the
            derived totals.
        """
        totals = self.totals
        return {
            'date': self.date,
            'type': self.type.value,
            'party_name': self.party_name,
            'quantity_grams': self.quantity_grams.text,
            'rate_per_gram': self.rate_per_gram.text,
            'gst_rate_percent': self.gst_rate_percent.text,
            'taxable_total': self.taxable_total_view,
            'taxable_amount': totals.taxable_amount,
            'gst_amount': totals.gst_amount,
            'total_amount': totals.total_amount
        }


@dataclass(frozen=True)
class Transaction:
    """
    Finalized, immutable transaction record.

    Invariant:
        total_amount = taxable_amount + gst_amount
                     = quantity_grams × rate_per_gram × (1 + gst_rate_percent / 100)
    """
    identifier: str
    date: str
    type: TransactionType
    party_name: str
    quantity_grams: float
    rate_per_gram: float
    gst_rate_percent: float
    gst_amount: float
    taxable_amount: float
    total_amount: float

    def is_consistent(self, tolerance: float = 0.01) -> bool:
        """Check the amount invariant within the given tolerance."""
        expected = self.quantity_grams * self.rate_per_gram * (1 + self.gst_rate_percent / 100)
        return (
            abs(self.total_amount - (self.taxable_amount + self.gst_amount)) <= tolerance
            and abs(self.total_amount - expected) <= tolerance
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'identifier': self.identifier,
            'date': self.date,
            'type': self.type.value,
            'party_name': self.party_name,
            'quantity_grams': self.quantity_grams,
            'rate_per_gram': self.rate_per_gram,
            'gst_rate_percent': self.gst_rate_percent,
            'gst_amount': self.gst_amount,
            'taxable_amount': self.taxable_amount,
            'total_amount': self.total_amount
        }
