"""
Data Normalizers Module.

This module provides normalization functions for:
    - Date formats
    - Currency/amount values
    - Gold weights with units

Author: ML Engineering Team
"""

import re
from datetime import datetime
from typing import Any, Optional, List, Tuple
from dateutil import parser as date_parser

from config import get_config
from src.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

# Numeric literal with optional thousands separators and decimals
NUMBER_PATTERN = r'\d[\d,]*(?:\.\d+)?'

# Dates that open with a four-digit year
YEAR_FIRST_PATTERN = re.compile(r'\d{4}[\s/\-.]')


class DateNormalizer:
    """
    Normalizes date strings to a standard format.

    Handles the date formats found on Indian gold invoices (day first)
    as well as ISO and month-name forms, and converts them to ISO format
    (YYYY-MM-DD) or a configured output format.

    Attributes:
        output_format: Target date format string
        input_formats: List of recognized input format strings
        dayfirst: Whether ambiguous numeric dates are read day first

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("15/01/2026")
        "2026-01-15"
        >>> normalizer.normalize("January 15, 2026")
        "2026-01-15"
    """

    # Date patterns searched for in free text
    DATE_PATTERNS = [
        # YYYY-MM-DD
        r'\b(\d{4})[/\-.](\d{1,2})[/\-.](\d{1,2})\b',
        # DD/MM/YYYY or DD-MM-YY
        r'\b(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2,4})\b',
        # Month DD, YYYY
        r'\b((?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*)\.?\s+(\d{1,2})(?:st|nd|rd|th)?,?\s+(\d{2,4})\b',
        # DD Month YYYY
        r'\b(\d{1,2})(?:st|nd|rd|th)?[\s\-]+((?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*)\.?[\s\-,]+(\d{2,4})\b',
    ]

    def __init__(self) -> None:
        """Initialize the date normalizer with configuration."""
        self.output_format = get_config(
            "postprocessing.date.output_format",
            "%Y-%m-%d"
        )
        self.input_formats = get_config(
            "postprocessing.date.input_formats",
            [
                "%Y-%m-%d",
                "%Y/%m/%d",
                "%Y.%m.%d",
                "%d/%m/%Y",
                "%d-%m-%Y",
                "%d.%m.%Y",
                "%d %B %Y",
                "%d %b %Y",
                "%B %d, %Y",
                "%b %d, %Y"
            ]
        )
        self.dayfirst = get_config("postprocessing.date.dayfirst", True)

        logger.debug(f"DateNormalizer initialized (output: {self.output_format})")

    def normalize(self, date_str: Any) -> Optional[str]:
        """
        Normalize a date string to the configured output format.

        Args:
            date_str: Input date string in any recognized format.

        Returns:
            Normalized date string, or None if parsing fails.

        Example:
            >>> normalizer.normalize("15-01-2026")
            "2026-01-15"
        """
        if not date_str or not isinstance(date_str, str):
            return None

        date_str = self._clean_date_string(date_str)
        if not date_str:
            return None

        parsed_date = self._try_explicit_formats(date_str)

        if parsed_date is None:
            parsed_date = self._try_dateutil_parser(date_str)

        if parsed_date:
            return parsed_date.strftime(self.output_format)

        logger.debug(f"Could not parse date: {date_str}")
        return None

    def _clean_date_string(self, date_str: str) -> str:
        """
        Clean and prepare date string for parsing.

        Args:
            date_str: Raw date string.

        Returns:
            Cleaned date string.
        """
        date_str = ' '.join(date_str.split())

        prefixes = ['invoice date:', 'bill date:', 'dated:', 'date:', 'dt:', 'on']
        for prefix in prefixes:
            if date_str.lower().startswith(prefix):
                date_str = date_str[len(prefix):].strip()

        # Remove ordinal suffixes (1st, 2nd, 3rd, 4th, etc.)
        date_str = re.sub(r'(\d+)(st|nd|rd|th)\b', r'\1', date_str, flags=re.IGNORECASE)

        return date_str.strip()

    def _try_explicit_formats(self, date_str: str) -> Optional[datetime]:
        for fmt in self.input_formats:
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue
        return None

    def _try_dateutil_parser(self, date_str: str) -> Optional[datetime]:
        """
        Try to parse date using dateutil's parser.

        Fuzzy parsing is left off: a bare number must not turn into a date.
        A leading four-digit year is always followed by the month.
        """
        year_first = YEAR_FIRST_PATTERN.match(date_str) is not None
        try:
            return date_parser.parse(
                date_str,
                dayfirst=self.dayfirst and not year_first,
                yearfirst=year_first
            )
        except (ValueError, OverflowError):
            return None

    def extract_date(self, text: str) -> Optional[str]:
        """
        Extract and normalize the first date found in text.

        Only substrings matching a date pattern are considered.

        Args:
            text: Text that may contain a date.

        Returns:
            Normalized date string or None.
        """
        if not text:
            return None

        for pattern in self.DATE_PATTERNS:
            for match in re.finditer(pattern, text, re.IGNORECASE):
                normalized = self.normalize(match.group(0))
                if normalized:
                    return normalized
        return None


class AmountNormalizer:
    """
    Normalizes currency/amount strings to standard numeric format.

    Handles rupee symbols and codes, thousand separators (including
    Indian lakh grouping) and decimal formats.

    Example:
        >>> normalizer = AmountNormalizer()
        >>> normalizer.normalize("Rs. 1,23,456.50")
        "123456.50"
        >>> normalizer.to_float("₹ 6,200")
        6200.0
    """

    # Currency symbols and codes to remove
    CURRENCY_SYMBOLS = ['₹', '$', '€', '£']
    CURRENCY_CODES = ['INR', 'RS', 'USD', 'EUR', 'GBP']

    def __init__(self) -> None:
        """Initialize the amount normalizer with configuration."""
        self.output_format = get_config(
            "postprocessing.amount.output_format",
            "float"
        )
        logger.debug("AmountNormalizer initialized")

    def normalize(self, amount_str: Any) -> Optional[str]:
        """
        Normalize an amount string to standard format.

        Args:
            amount_str: Input amount string (e.g., "Rs 1,234.56").

        Returns:
            Normalized amount string (e.g., "1234.56") or None.
        """
        value = self.to_float(amount_str)
        if value is None:
            return None

        if self.output_format == 'float':
            return f"{value:.2f}"
        return str(value)

    def to_float(self, amount_str: Any) -> Optional[float]:
        """
        Convert an amount to float without rounding.

        Args:
            amount_str: Amount string or number to convert.

        Returns:
            Float value or None.
        """
        # bool is an int subclass but never an amount
        if amount_str is None or isinstance(amount_str, bool):
            return None

        if isinstance(amount_str, (int, float)):
            return float(amount_str)

        if not isinstance(amount_str, str):
            return None

        cleaned = self._clean_amount_string(amount_str)
        if not cleaned:
            return None

        try:
            return float(cleaned.replace(',', ''))
        except ValueError:
            logger.debug(f"Could not parse amount: {amount_str}")
            return None

    def _clean_amount_string(self, amount_str: str) -> str:
        """
        Clean and prepare amount string for parsing.

        Args:
            amount_str: Raw amount string.

        Returns:
            Cleaned amount string, empty if it is not an amount.
        """
        amount_str = ' '.join(amount_str.split())

        for symbol in self.CURRENCY_SYMBOLS:
            amount_str = amount_str.replace(symbol, '')

        for code in self.CURRENCY_CODES:
            amount_str = re.sub(rf'\b{code}\b\.?', '', amount_str, flags=re.IGNORECASE)

        prefixes = ['total:', 'amount:', 'rate:', 'taxable:']
        for prefix in prefixes:
            if amount_str.lower().startswith(prefix):
                amount_str = amount_str[len(prefix):]

        amount_str = amount_str.strip()

        # Anything other than digits, separators and a sign is not an amount
        if re.search(r'[^\d,.\-\s]', amount_str):
            return ''

        return amount_str.replace(' ', '')


class QuantityNormalizer:
    """
    Normalizes gold weights to grams.

    Recognizes weights written with a unit (g, gm, gms, gram, grams,
    kg, mg) and converts them to grams.

    Example:
        >>> normalizer = QuantityNormalizer()
        >>> normalizer.to_grams("10.5", "g")
        10.5
        >>> normalizer.find_all("1.2 kg and 250 mg")
        [1200.0, 0.25]
    """

    UNIT_FACTORS = {
        'mg': 0.001,
        'g': 1.0,
        'gm': 1.0,
        'gms': 1.0,
        'grm': 1.0,
        'grms': 1.0,
        'gram': 1.0,
        'grams': 1.0,
        'gr': 1.0,
        'kg': 1000.0,
        'kgs': 1000.0,
    }

    # Longest units first so "gms" is not read as "g"
    UNIT_PATTERN = '|'.join(sorted(UNIT_FACTORS, key=len, reverse=True))

    WEIGHT_PATTERN = re.compile(
        rf'({NUMBER_PATTERN})\s*({UNIT_PATTERN})\b',
        re.IGNORECASE
    )

    def to_grams(self, value: str, unit: str = 'g') -> Optional[float]:
        """
        Convert a numeric string and unit to grams.

        Returns:
            Weight in grams, or None if the value or unit is unknown.
        """
        factor = self.UNIT_FACTORS.get(unit.lower())
        if factor is None:
            return None
        try:
            return float(value.replace(',', '')) * factor
        except ValueError:
            return None

    def find_all(self, text: str) -> List[float]:
        """Every weight-with-unit token in text, in grams."""
        return [grams for grams, _ in self.find_all_with_spans(text)]

    def find_all_with_spans(self, text: str) -> List[Tuple[float, Tuple[int, int]]]:
        """Every weight-with-unit token in text with its position."""
        weights = []
        for match in self.WEIGHT_PATTERN.finditer(text or ''):
            grams = self.to_grams(match.group(1), match.group(2))
            if grams is not None:
                weights.append((grams, match.span()))
        return weights
