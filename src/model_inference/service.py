"""
Extraction Service Module.

Abstraction over the structured-output model that reads invoices, plus
the Gemini implementation used in production. The orchestrator only
depends on ExtractionService, so tests substitute a fake.

Author: ML Engineering Team
"""

import abc
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from config import get_config
from src.utils.exceptions import ExtractionServiceError
from src.utils.logger import get_logger
from .schema import OUTPUT_SCHEMA

# Initialize module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentPayload:
    """Raw document bytes with their media type."""

    data: bytes
    media_type: str
    filename: Optional[str] = None


@dataclass(frozen=True)
class ExtractionRequest:
    """
    One structured-extraction request.

    Exactly one of text or document is set. Document requests carry
    the instructions separately from the document content.
    """

    text: Optional[str] = None
    document: Optional[DocumentPayload] = None
    instructions: Optional[str] = None
    schema: Dict[str, Any] = field(default_factory=lambda: OUTPUT_SCHEMA)
    json_only: bool = True

    @property
    def is_document(self) -> bool:
        return self.document is not None


class ExtractionService(abc.ABC):
    """Contract every extraction service must implement."""

    name: str = "base"
    model_name: Optional[str] = None

    @abc.abstractmethod
    async def generate(self, request: ExtractionRequest) -> str:
        """
        Send the request and return the raw response text.

        Raises:
            ExtractionServiceError: The call failed or returned nothing.
        """


_SCHEMA_TYPES = {
    "object": types.Type.OBJECT,
    "string": types.Type.STRING,
    "number": types.Type.NUMBER,
}


def to_genai_schema(schema: Dict[str, Any]) -> types.Schema:
    """Convert a JSON-schema style dict to a google-genai Schema."""
    properties = {
        name: to_genai_schema(field_schema)
        for name, field_schema in schema.get("properties", {}).items()
    }
    return types.Schema(
        type=_SCHEMA_TYPES[schema["type"]],
        enum=schema.get("enum"),
        properties=properties or None,
        required=schema.get("required"),
    )


class GeminiExtractionService(ExtractionService):
    """
    Extraction service backed by the Gemini API (google-genai SDK).

    Attributes:
        model_name: Gemini model identifier
        client: genai.Client instance

    Example:
        >>> service = GeminiExtractionService.from_config()
        >>> raw = await service.generate(ExtractionRequest(text="..."))
    """

    name = "gemini"

    def __init__(self, api_key: str, model_name: Optional[str] = None) -> None:
        if not api_key:
            raise ExtractionServiceError("No API key configured for extraction service")

        self.model_name = model_name or get_config("extraction.model", "gemini-2.0-flash")
        self.client = genai.Client(api_key=api_key)

        logger.info(f"Gemini extraction service initialized with {self.model_name}")

    @classmethod
    def from_config(cls) -> 'GeminiExtractionService':
        """
        Build the service from configuration and the environment.

        Raises:
            ExtractionServiceError: The API key variable is not set.
        """
        key_env = get_config("extraction.api_key_env", "GEMINI_API_KEY")
        return cls(os.environ.get(key_env, ""), get_config("extraction.model"))

    def _build_contents(self, request: ExtractionRequest) -> list:
        if request.is_document:
            document = request.document
            return [
                types.Part.from_bytes(data=document.data, mime_type=document.media_type),
                request.instructions or "",
            ]
        return [request.text or ""]

    def _build_config(self, request: ExtractionRequest) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type="application/json" if request.json_only else None,
            response_schema=to_genai_schema(request.schema),
            temperature=0.0,
        )

    async def generate(self, request: ExtractionRequest) -> str:
        kind = "document" if request.is_document else "text"
        logger.debug(f"Sending {kind} extraction request to {self.model_name}")

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=self._build_contents(request),
                config=self._build_config(request),
            )
        except Exception as e:
            logger.warning(f"Gemini request failed: {e}")
            raise ExtractionServiceError(str(e)) from e

        text = response.text
        if not text:
            raise ExtractionServiceError("No response text from extraction service")
        return text


__all__ = [
    'DocumentPayload',
    'ExtractionRequest',
    'ExtractionService',
    'GeminiExtractionService',
    'to_genai_schema',
]
