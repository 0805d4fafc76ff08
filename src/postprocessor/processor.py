"""
Main Post-Processor Module.

This module provides the PostProcessor class that turns a validated
extraction service response into an ExtractionResult ready to populate
a draft.

Operations:
    - Normalize the date to ISO format
    - Parse the transaction type
    - Clean the party name
    - Fill defaults for missing date, type and GST rate
    - Reject responses without a party name and without a quantity

Author: ML Engineering Team
"""

from datetime import date
from typing import Optional

from src.model_inference.extraction_result import ExtractionResult
from src.model_inference.schema import ExtractionResponse, parse_response
from src.transaction.models import (
    TransactionType,
    default_gst_rate,
    default_transaction_type
)
from src.utils.exceptions import ExtractionAmbiguousError
from src.utils.logger import get_logger
from .normalizers import DateNormalizer

# Initialize module logger
logger = get_logger(__name__)


class PostProcessor:
    """
    Post-processor for extraction service responses.

    Attributes:
        date_normalizer: DateNormalizer instance

    Example:
        >>> processor = PostProcessor()
        >>> result = processor.process_raw('{"partyName": "ABC Traders", "quantityGrams": 10}',
        ...                                today=date(2026, 1, 15))
        >>> result.transaction_type, result.gst_rate_percent
        (<TransactionType.PURCHASE: 'PURCHASE'>, 3.0)
    """

    def __init__(self) -> None:
        self.date_normalizer = DateNormalizer()
        logger.debug("PostProcessor initialized")

    def process_raw(self, raw_text: str, today: date) -> ExtractionResult:
        """
        Parse, validate and normalize a raw service response.

        Raises:
            ExtractionServiceError: The response is not a JSON object.
            ExtractionAmbiguousError: Neither party name nor quantity present.
        """
        return self.process(parse_response(raw_text), today)

    def process(self, response: ExtractionResponse, today: date) -> ExtractionResult:
        """
        Convert a validated response into an ExtractionResult.

        Args:
            response: Validated service response.
            today: Date used when the response carries none.

        Returns:
            ExtractionResult with source "model".

        Raises:
            ExtractionAmbiguousError: Neither party name nor quantity present.
        """
        result = ExtractionResult(source="model")

        result.party_name = self._clean_name(response.party_name)
        result.quantity_grams = response.quantity_grams
        result.rate_per_gram = response.rate_per_gram

        if not result.has_minimum_signal:
            logger.warning("Service response has neither party name nor quantity")
            raise ExtractionAmbiguousError()

        result.date = self._normalize_date(response.date, result)
        if result.date is None:
            result.date = today.isoformat()

        result.transaction_type = TransactionType.parse(response.type)
        if result.transaction_type is None:
            if response.type:
                result.add_warning(f"Unknown transaction type {response.type!r}")
            result.transaction_type = default_transaction_type()

        result.gst_rate_percent = response.gst_rate_percent
        if result.gst_rate_percent is None:
            result.gst_rate_percent = default_gst_rate()

        logger.debug(f"Post-processed service response: {result!r}")
        return result

    def _normalize_date(self, value: Optional[str], result: ExtractionResult) -> Optional[str]:
        if not value:
            return None
        normalized = self.date_normalizer.normalize(value)
        if normalized is None:
            result.add_warning(f"Unparseable date {value!r}; using today")
        elif normalized != value:
            logger.debug(f"Normalized date: '{value}' -> '{normalized}'")
        return normalized

    def _clean_name(self, name: Optional[str]) -> Optional[str]:
        """Collapse whitespace and strip stray punctuation from a name."""
        if not name:
            return None
        cleaned = ' '.join(name.split()).strip(" .,:;-")
        return cleaned or None
