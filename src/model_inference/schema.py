"""
Extraction Response Schema.

Defines the structured output the extraction service is asked to
produce and the pydantic model its raw JSON response is validated
against. Fields of the wrong type are treated as absent rather than
rejecting the whole response.

Author: ML Engineering Team
"""

import json
import math
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils.exceptions import ExtractionServiceError
from src.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

# Output fields and their JSON types, in the order the service sees them
OUTPUT_FIELDS: Dict[str, str] = {
    "date": "string",
    "type": "string",
    "partyName": "string",
    "quantityGrams": "number",
    "ratePerGram": "number",
    "gstRatePercent": "number",
}

TYPE_ENUM = ["PURCHASE", "SALE"]

REQUIRED_FIELDS = ["date", "type", "partyName", "quantityGrams", "ratePerGram"]

OUTPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        name: ({"type": kind, "enum": TYPE_ENUM} if name == "type" else {"type": kind})
        for name, kind in OUTPUT_FIELDS.items()
    },
    "required": REQUIRED_FIELDS,
}

_FENCE_PATTERN = re.compile(r'^\s*```[\w-]*\s*\n?(.*?)\n?\s*```\s*$', re.DOTALL)


class ExtractionResponse(BaseModel):
    """
    Validated extraction service response.

    Unknown keys are ignored; known keys holding a value of the wrong
    type become None.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date: Optional[str] = None
    type: Optional[str] = None
    party_name: Optional[str] = Field(default=None, alias="partyName")
    quantity_grams: Optional[float] = Field(default=None, alias="quantityGrams")
    rate_per_gram: Optional[float] = Field(default=None, alias="ratePerGram")
    gst_rate_percent: Optional[float] = Field(default=None, alias="gstRatePercent")

    @field_validator("date", "type", "party_name", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        return value.strip() or None

    @field_validator("quantity_grams", "rate_per_gram", "gst_rate_percent", mode="before")
    @classmethod
    def _number_or_none(cls, value: Any) -> Optional[float]:
        # bool is an int subclass but never a quantity
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        try:
            number = float(value)
        except OverflowError:
            return None
        if not math.isfinite(number):
            return None
        return number


def strip_code_fences(text: str) -> str:
    """
    Remove a surrounding markdown code fence, if any.

    Example:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    match = _FENCE_PATTERN.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_response(raw_text: str) -> ExtractionResponse:
    """
    Parse and validate a raw service response.

    Args:
        raw_text: Text returned by the extraction service.

    Returns:
        Validated ExtractionResponse.

    Raises:
        ExtractionServiceError: The text is not a JSON object.
    """
    if not raw_text or not raw_text.strip():
        raise ExtractionServiceError("Empty response from extraction service")

    cleaned = strip_code_fences(raw_text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.debug(f"Unparseable response: {cleaned[:200]!r}")
        raise ExtractionServiceError(f"Invalid JSON in response: {e.msg}")
    except ValueError as e:
        # Integer literals beyond the interpreter's digit limit
        raise ExtractionServiceError(f"Invalid JSON in response: {e}")

    if not isinstance(payload, dict):
        raise ExtractionServiceError("Response is not a JSON object")

    return ExtractionResponse.model_validate(payload)


__all__ = [
    'OUTPUT_FIELDS',
    'OUTPUT_SCHEMA',
    'REQUIRED_FIELDS',
    'TYPE_ENUM',
    'ExtractionResponse',
    'strip_code_fences',
    'parse_response',
]
