"""
Extraction Result Data Class.

This module defines the data structure for transaction extraction
results, providing a standardized format for fields produced either by
the extraction service or by the fallback text parser.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime

from src.transaction.models import TransactionType


@dataclass
class ExtractionResult:
    """
    Represents the result of transaction field extraction.

    Every field is optional; an unset field means the source did not
    provide it. The result is consumed once to populate a draft.

    Attributes:
        date: Transaction date (YYYY-MM-DD)
        transaction_type: PURCHASE or SALE
        party_name: Supplier or customer name
        quantity_grams: Total gold weight in grams
        rate_per_gram: Price per gram
        gst_rate_percent: GST percentage
        source: "model" or "fallback"
        model_name: Name of the model used, if any
        processing_time: Seconds spent extracting
        extraction_timestamp: When extraction was performed
        success: Whether extraction was successful
        errors: List of errors encountered
        warnings: List of warnings

    Example:
        >>> result = ExtractionResult(
        ...     party_name="ABC Traders",
        ...     quantity_grams=10.5,
        ...     rate_per_gram=6200.0
        ... )
        >>> result.to_dict()["party_name"]
        'ABC Traders'
    """
    # Core transaction fields
    date: Optional[str] = None
    transaction_type: Optional[TransactionType] = None
    party_name: Optional[str] = None
    quantity_grams: Optional[float] = None
    rate_per_gram: Optional[float] = None
    gst_rate_percent: Optional[float] = None

    # Metadata
    source: Optional[str] = None
    model_name: Optional[str] = None
    processing_time: float = 0.0
    extraction_timestamp: Optional[str] = None

    # Status
    success: bool = True
    errors: list = field(default_factory=list)
    warnings: list = field(default_factory=list)

    def __post_init__(self):
        """Initialize timestamp if not provided."""
        if self.extraction_timestamp is None:
            self.extraction_timestamp = datetime.now().isoformat()

    @classmethod
    def failure(cls, reason: str, source: Optional[str] = None) -> 'ExtractionResult':
        """
        Create a failed result carrying a displayable reason.

        Args:
            reason: Human-readable failure reason.
            source: Stage that failed.

        Returns:
            ExtractionResult with success=False.
        """
        result = cls(source=source)
        result.add_error(reason)
        return result

    @property
    def fields(self) -> Dict[str, Any]:
        """
        Get all extracted fields as a dictionary.

        Returns:
            Dictionary of field names to values.
        """
        return {
            'date': self.date,
            'transaction_type': self.transaction_type,
            'party_name': self.party_name,
            'quantity_grams': self.quantity_grams,
            'rate_per_gram': self.rate_per_gram,
            'gst_rate_percent': self.gst_rate_percent
        }

    @property
    def extracted_fields(self) -> Dict[str, Any]:
        """Only the fields that have values."""
        return {k: v for k, v in self.fields.items() if v is not None and v != ""}

    @property
    def has_minimum_signal(self) -> bool:
        """
        Whether the result identifies at least a party or a quantity.

        A zero or negative quantity counts as no quantity. Results without
        either are too ambiguous to pre-fill a draft.
        """
        has_quantity = self.quantity_grams is not None and self.quantity_grams > 0
        return bool(self.party_name) or has_quantity

    @property
    def failure_reason(self) -> Optional[str]:
        """First recorded error, if any."""
        return self.errors[0] if self.errors else None

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)
        self.success = False

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation of the extraction result.
        """
        return {
            'date': self.date,
            'transaction_type': self.transaction_type.value if self.transaction_type else None,
            'party_name': self.party_name,
            'quantity_grams': self.quantity_grams,
            'rate_per_gram': self.rate_per_gram,
            'gst_rate_percent': self.gst_rate_percent,
            'source': self.source,
            'model_name': self.model_name,
            'processing_time': self.processing_time,
            'extraction_timestamp': self.extraction_timestamp,
            'success': self.success,
            'errors': self.errors,
            'warnings': self.warnings
        }

    def __repr__(self) -> str:
        return (
            f"ExtractionResult("
            f"type={self.transaction_type.value if self.transaction_type else None}, "
            f"party={self.party_name}, "
            f"qty={self.quantity_grams}, "
            f"rate={self.rate_per_gram}, "
            f"source={self.source}, "
            f"success={self.success})"
        )
