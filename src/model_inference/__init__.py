"""
Model Inference Module for Gold Invoice Entry.

This module provides structured extraction of transaction fields
through an external extraction service.

Features:
    - Fixed output schema and pydantic response validation
    - Gemini (google-genai) service implementation
    - Standardized ExtractionResult output

The ExtractionOrchestrator lives in src.model_inference.extractor and
is imported from there; it depends on the post-processor, which in turn
depends on the result type defined here.

Author: ML Engineering Team
"""

from .extraction_result import ExtractionResult
from .schema import ExtractionResponse, OUTPUT_SCHEMA, parse_response, strip_code_fences
from .service import (
    DocumentPayload,
    ExtractionRequest,
    ExtractionService,
    GeminiExtractionService
)

__all__ = [
    'ExtractionResult',
    'ExtractionResponse',
    'OUTPUT_SCHEMA',
    'parse_response',
    'strip_code_fences',
    'DocumentPayload',
    'ExtractionRequest',
    'ExtractionService',
    'GeminiExtractionService',
]
