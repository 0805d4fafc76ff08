"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout gold invoice
entry. Using specific exceptions allows callers to tell user-correctable
rejections apart from extraction failures.

Exception Hierarchy:
    GoldEntryError (base)
    ├── ConfigurationError
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   ├── DocumentNotFoundError
    │   └── CorruptedFileError
    ├── ExtractionError
    │   ├── ExtractionServiceError
    │   ├── ExtractionAmbiguousError
    │   └── ExtractionBusyError
    └── ValidationError
        ├── PeriodLockedError
        ├── MissingFieldsError
        └── InsufficientInventoryError
"""

from typing import List


class GoldEntryError(Exception):
    """
    Base exception for all gold invoice entry errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(GoldEntryError):
    """Raised when configuration is missing or unusable."""
    pass


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(GoldEntryError):
    """Base exception for document input errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".pdf", ".jpg"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class DocumentNotFoundError(InputError):
    """Raised when an input document cannot be found."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)


class CorruptedFileError(InputError):
    """Raised when a document is empty, oversized or unreadable."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Corrupted or unreadable file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# EXTRACTION ERRORS
# =============================================================================

class ExtractionError(GoldEntryError):
    """Base exception for automated extraction errors."""
    pass


class ExtractionServiceError(ExtractionError):
    """
    Raised when the extraction service call fails or its response
    cannot be parsed.
    """

    def __init__(self, reason: str = None):
        message = reason or "Extraction service failed"
        details = {"reason": reason} if reason else {}
        super().__init__(message, details)

    def __str__(self) -> str:
        return self.message


class ExtractionAmbiguousError(ExtractionError):
    """Raised when a structured response lacks both party name and quantity."""

    def __init__(self, reason: str = "Could not extract valid data"):
        super().__init__(reason)


class ExtractionBusyError(ExtractionError):
    """Raised when an extraction is requested while another is in flight."""

    def __init__(self):
        super().__init__("An extraction is already in progress")


# =============================================================================
# VALIDATION ERRORS
# =============================================================================

class ValidationError(GoldEntryError):
    """
    Base exception for user-correctable transaction rejections.

    The message is always suitable for display to the operator.
    """

    def __str__(self) -> str:
        return self.message


class PeriodLockedError(ValidationError):
    """Raised when the transaction date falls on or before the lock date."""

    def __init__(self, lock_date: str):
        message = f"Date locked: cannot add transactions on or before {lock_date}."
        super().__init__(message, {"lock_date": lock_date})


class MissingFieldsError(ValidationError):
    """Raised when required draft fields are absent or not numeric."""

    def __init__(self, missing: List[str]):
        message = "Missing required fields: " + ", ".join(missing) + "."
        super().__init__(message, {"missing": list(missing)})


class InsufficientInventoryError(ValidationError):
    """Raised when a sale exceeds the available stock."""

    def __init__(self, requested: float, available: float):
        message = f"Insufficient inventory: available {available:.3f}g"
        super().__init__(
            message,
            {"requested": requested, "available": available}
        )


__all__ = [
    'GoldEntryError',
    'ConfigurationError',
    'InputError',
    'UnsupportedFileTypeError',
    'DocumentNotFoundError',
    'CorruptedFileError',
    'ExtractionError',
    'ExtractionServiceError',
    'ExtractionAmbiguousError',
    'ExtractionBusyError',
    'ValidationError',
    'PeriodLockedError',
    'MissingFieldsError',
    'InsufficientInventoryError',
]
