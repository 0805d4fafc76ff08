"""
Fallback Text Parser Module.

Deterministic, rule-based extraction of transaction fields from raw
invoice text. Used when the extraction service is unavailable or its
response is unusable.

Heuristics:
    - Type: SALE only when an explicit sale word appears, else PURCHASE
    - Date: first date-like token, read day first
    - Quantity: labelled weight ("Net Wt: 10.5 g"), else first weight
      token with a unit ("10.5g", "1.2 kg")
    - Rate: per-gram price ("@ 6200/g", "Rs 6500 per gram", "Rate: 6200"),
      else taxable value divided by quantity
    - GST: "GST 3%", "IGST @ 3%", or CGST + SGST
    - Party: name introduced by a keyword ("to", "from", "M/s",
      "Supplier:"), else a capitalized name ending in a trade suffix
      ("ABC Traders", "XYZ Jewellers")

Author: ML Engineering Team
"""

import re
from typing import List, Optional, Pattern

from config import get_config
from src.utils.logger import get_logger
from src.transaction.models import TransactionType
from src.model_inference.extraction_result import ExtractionResult
from .normalizers import NUMBER_PATTERN, AmountNormalizer, DateNormalizer, QuantityNormalizer

# Initialize module logger
logger = get_logger(__name__)

FALLBACK_FAILURE_MESSAGE = "Auto-extraction failed. Please enter details manually."

# Optional rupee marker in front of an amount
CURRENCY_PREFIX = r'(?:(?:rs|inr)\.?\s*|₹\s*)?'

# "/g", "per gram", "/gm" ...
PER_GRAM = r'(?:/\s*|per\s+)(?:grams?|gms?|grms?|g)\b'

# One capitalized word of a name, and the continuation of a name
NAME_WORD = r"[A-Z][\w&.'\-]*"
NAME = rf"{NAME_WORD}(?:[ \t]+(?:&|{NAME_WORD}))*"

# Words that end a party name when they follow it
NAME_STOP_WORDS = {
    'gst', 'cgst', 'sgst', 'igst', 'hsn', 'inr', 'rs', 'rate', 'qty',
    'quantity', 'weight', 'wt', 'date', 'dated', 'invoice', 'bill', 'tax',
    'total', 'taxable', 'amount', 'purchase', 'sale', 'sold',
    'no', 'at', 'on', 'for', 'of'
}


class FallbackTextParser:
    """
    Rule-based transaction extractor for raw text.

    Never raises on malformed input: fields it cannot identify stay
    unset, and a result without a quantity and without a party name is
    marked unsuccessful.

    Attributes:
        date_normalizer: DateNormalizer instance
        amount_normalizer: AmountNormalizer instance
        quantity_normalizer: QuantityNormalizer instance

    Example:
        >>> parser = FallbackTextParser()
        >>> result = parser.parse("Purchase invoice, ABC Traders, 10.5g gold @ 6200/g, GST 3%")
        >>> result.party_name, result.quantity_grams, result.rate_per_gram
        ('ABC Traders', 10.5, 6200.0)
    """

    RATE_PATTERNS = [
        # 6200/g, Rs 6500 per gram
        rf'{CURRENCY_PREFIX}({NUMBER_PATTERN})\s*{PER_GRAM}',
        # Rate: 6200, Rate per gram - Rs. 6,200
        rf'\brate(?:\s+per\s+(?:grams?|gms?|g))?\s*[:\-=]?\s*(?:of\s+)?{CURRENCY_PREFIX}({NUMBER_PATTERN})(?![\d.,]|\s*%)',
        # @ 6200 (but not "GST @ 3%")
        rf'@\s*{CURRENCY_PREFIX}({NUMBER_PATTERN})(?![\d.,]|\s*%)',
    ]

    TAXABLE_PATTERN = (
        rf'\btaxable(?:\s+(?:value|amount|amt))?\s*[:\-=]?\s*{CURRENCY_PREFIX}({NUMBER_PATTERN})'
    )

    QUANTITY_LABEL_PATTERN = (
        rf'\b(?P<label>(?:(?:net|gross|total)\s+)?(?:weight|wt|qty|quantity))\.?'
        rf'\s*(?:\(\s*(?:grams?|gms?|g)\s*\))?\s*[:\-=]?\s*'
        rf'(?P<value>{NUMBER_PATTERN})(?![\d.,])'
        rf'\s*(?:(?P<unit>{QuantityNormalizer.UNIT_PATTERN})\b)?'
        rf'(?!\s*(?:pcs?|nos?|pieces|items)\b)'
    )

    GST_PATTERNS = [
        rf'\b(?:i?gst|tax)\b\s*(?:@|rate)?\s*[:\-]?\s*(\d+(?:\.\d+)?)\s*%',
        rf'(\d+(?:\.\d+)?)\s*%\s*(?:i?gst)\b',
    ]

    CGST_PATTERN = r'\bcgst\b\s*(?:@|rate)?\s*[:\-]?\s*(\d+(?:\.\d+)?)\s*%'
    SGST_PATTERN = r'\b(?:sgst|utgst)\b\s*(?:@|rate)?\s*[:\-]?\s*(\d+(?:\.\d+)?)\s*%'

    def __init__(self) -> None:
        """Initialize the parser with normalizers and keyword lists."""
        self.date_normalizer = DateNormalizer()
        self.amount_normalizer = AmountNormalizer()
        self.quantity_normalizer = QuantityNormalizer()

        self.sale_keywords = get_config(
            "fallback.sale_keywords",
            ["sold", "sale", "sales", "sell", "selling"]
        )
        self.party_keywords = get_config(
            "fallback.party_keywords",
            ["sold to", "purchased from", "bought from", "m/s", "party",
             "supplier", "customer", "from", "to"]
        )
        self.party_suffixes = get_config(
            "fallback.party_suffixes",
            ["Traders", "Jewellers", "Jewelers", "Bullion", "Enterprises", "Ltd", "LLP"]
        )

        self._sale_pattern = self._keyword_pattern(self.sale_keywords)
        self._party_keyword_pattern = re.compile(
            rf'(?i:\b(?:{self._alternation(self.party_keywords)})(?!\w))'
            rf'\s*[:\-]?\s*(?P<name>{NAME})'
        )
        self._party_suffix_pattern = re.compile(
            rf"\b(?P<name>{NAME_WORD}(?:[ \t]+(?:&|{NAME_WORD}))*?"
            rf"[ \t]+(?:{self._alternation(self.party_suffixes)}))\b"
        )

        logger.debug("FallbackTextParser initialized")

    @staticmethod
    def _alternation(words: List[str]) -> str:
        # Longest first so "sold to" wins over "to"
        ordered = sorted(words, key=len, reverse=True)
        return '|'.join(re.escape(w).replace(r'\ ', r'\s+') for w in ordered)

    def _keyword_pattern(self, words: List[str]) -> Pattern:
        return re.compile(rf'\b(?:{self._alternation(words)})\b', re.IGNORECASE)

    def parse(self, text: str) -> ExtractionResult:
        """
        Extract whatever transaction fields the text reliably contains.

        Args:
            text: Raw invoice text.

        Returns:
            ExtractionResult with source "fallback". success is False
            when neither a quantity nor a party name was found.
        """
        result = ExtractionResult(source="fallback")

        if not isinstance(text, str) or not text.strip():
            result.add_error(FALLBACK_FAILURE_MESSAGE)
            return result

        result.transaction_type = self.detect_type(text)
        result.date = self.date_normalizer.extract_date(text)
        result.party_name = self.find_party(text)
        result.quantity_grams = self.find_quantity(text)
        result.rate_per_gram = self.find_rate(text)
        result.gst_rate_percent = self.find_gst_rate(text)

        if result.rate_per_gram is None and result.quantity_grams:
            taxable = self.find_taxable_value(text)
            if taxable:
                result.rate_per_gram = taxable / result.quantity_grams
                result.add_warning("rate_per_gram derived from taxable value")

        if not result.has_minimum_signal:
            logger.info("Fallback parser found neither quantity nor party name")
            result.add_error(FALLBACK_FAILURE_MESSAGE)
            return result

        logger.info(
            f"Fallback parser extracted {len(result.extracted_fields)}/6 fields "
            f"(type={result.transaction_type.value})"
        )
        return result

    def detect_type(self, text: str) -> TransactionType:
        """SALE when an explicit sale word is present, otherwise PURCHASE."""
        if self._sale_pattern.search(text):
            return TransactionType.SALE
        return TransactionType.PURCHASE

    def find_quantity(self, text: str) -> Optional[float]:
        """
        Find the gold weight in grams.

        A labelled weight wins over bare weight tokens; among labels,
        "net"/"total" wins over the rest.
        """
        labelled = []
        for match in re.finditer(self.QUANTITY_LABEL_PATTERN, text, re.IGNORECASE):
            grams = self.quantity_normalizer.to_grams(
                match.group('value'),
                match.group('unit') or 'g'
            )
            if grams and grams > 0:
                labelled.append((match.group('label').lower(), grams))

        if labelled:
            for label, grams in labelled:
                if label.startswith(('net', 'total')):
                    return grams
            return labelled[0][1]

        for grams in self.quantity_normalizer.find_all(text):
            if grams > 0:
                return grams
        return None

    def find_rate(self, text: str) -> Optional[float]:
        """Find an explicit per-gram rate."""
        for pattern in self.RATE_PATTERNS:
            for match in re.finditer(pattern, text, re.IGNORECASE):
                rate = self.amount_normalizer.to_float(match.group(1))
                if rate and rate > 0:
                    return rate
        return None

    def find_taxable_value(self, text: str) -> Optional[float]:
        match = re.search(self.TAXABLE_PATTERN, text, re.IGNORECASE)
        if match:
            value = self.amount_normalizer.to_float(match.group(1))
            if value and value > 0:
                return value
        return None

    def find_gst_rate(self, text: str) -> Optional[float]:
        """
        Find the GST percentage.

        Split CGST and SGST rates are added together.
        """
        cgst = re.search(self.CGST_PATTERN, text, re.IGNORECASE)
        sgst = re.search(self.SGST_PATTERN, text, re.IGNORECASE)
        if cgst and sgst:
            return float(cgst.group(1)) + float(sgst.group(1))

        for pattern in self.GST_PATTERNS:
            match = re.search(pattern, text, re.IGNORECASE)
            if match:
                return float(match.group(1))
        return None

    def find_party(self, text: str) -> Optional[str]:
        """Find the counterparty name."""
        for match in self._party_keyword_pattern.finditer(text):
            name = self._clean_party_name(match.group('name'))
            if name:
                return name

        for match in self._party_suffix_pattern.finditer(text):
            name = self._clean_party_name(match.group('name'))
            if name:
                return name

        return None

    def _clean_party_name(self, name: str) -> Optional[str]:
        """
        Trim label words around a candidate name.

        Leading label words ("Purchase Invoice ABC Traders") are dropped
        and the name ends at the first label word that follows it.
        """
        words = name.split()

        while words and words[0].lower().strip(".:,") in NAME_STOP_WORDS:
            words.pop(0)

        kept = []
        for word in words:
            if kept and word.lower().strip(".:,") in NAME_STOP_WORDS:
                break
            kept.append(word)

        cleaned = ' '.join(kept).rstrip(" .,:-")
        if len(cleaned) < 2:
            return None
        return cleaned
