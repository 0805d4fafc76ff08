"""
Numeric Field Values.

Form fields arrive as text, but "not entered yet", "entered but not a
number" and "a number" must never be conflated. This module models a
numeric field as one of three variants:

    Unset           nothing entered
    Invalid(raw)    something entered that is not a usable number
    Valid(value)    a finite, non-negative number

Example:
    >>> parse_numeric("10.5")
    Valid(value=10.5)
    >>> parse_numeric("")
    Unset()
    >>> parse_numeric("ten")
    Invalid(raw='ten')
"""

import math
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Unset:
    """A numeric field with no value entered."""

    is_valid = False

    @property
    def text(self) -> str:
        return ""

    def as_float(self, default: float = 0.0) -> float:
        return default


@dataclass(frozen=True)
class Invalid:
    """A numeric field holding text that is not a usable number."""

    raw: str

    is_valid = False

    @property
    def text(self) -> str:
        return self.raw

    def as_float(self, default: float = 0.0) -> float:
        return default


@dataclass(frozen=True)
class Valid:
    """A numeric field holding a finite, non-negative number."""

    value: float

    is_valid = True

    @property
    def text(self) -> str:
        # Integral values render without a trailing ".0"
        if self.value == int(self.value):
            return str(int(self.value))
        return repr(self.value)

    def as_float(self, default: float = 0.0) -> float:
        return self.value


NumericValue = Union[Unset, Invalid, Valid]

UNSET = Unset()


def parse_numeric(raw: Any) -> NumericValue:
    """
    Classify a raw field value.

    Args:
        raw: A NumericValue (returned as is), a number, a string or None.

    Returns:
        Unset for None and blank strings, Valid for finite non-negative
        numbers, Invalid for everything else.
    """
    if isinstance(raw, (Unset, Invalid, Valid)):
        return raw

    if raw is None:
        return UNSET

    # bool is an int subclass but never a quantity
    if isinstance(raw, bool):
        return Invalid(str(raw))

    if isinstance(raw, (int, float)):
        return _classify(float(raw), str(raw))

    text = str(raw).strip()
    if not text:
        return UNSET

    try:
        number = float(text)
    except ValueError:
        return Invalid(text)

    return _classify(number, text)


def _classify(number: float, raw: str) -> NumericValue:
    if math.isnan(number) or math.isinf(number) or number < 0:
        return Invalid(raw)
    return Valid(number)


def is_positive(value: NumericValue) -> bool:
    """Return True for a Valid value strictly greater than zero."""
    return isinstance(value, Valid) and value.value > 0
