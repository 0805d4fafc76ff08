"""
Extraction Orchestrator Module.

This module provides the ExtractionOrchestrator class that turns raw
invoice input into candidate transaction fields.

Approach:
    The input (pasted text, or a document such as a PDF or photo) is
    sent to a structured-output extraction service together with a fixed
    output schema. The JSON response is validated and normalized. When
    the service fails for text input, the rule-based fallback parser is
    used instead; document input has no fallback.

States:
    IDLE -> EXTRACTING -> SUCCEEDED | FAILED

    A second extraction requested while one is in flight is rejected
    with ExtractionBusyError.

Author: ML Engineering Team
"""

import time
from datetime import date
from enum import Enum
from typing import Optional

from config import get_config
from src.utils.logger import get_logger
from src.utils.exceptions import ExtractionBusyError, ExtractionError, ExtractionServiceError
from src.postprocessor.fallback_parser import FallbackTextParser
from src.postprocessor.processor import PostProcessor
from .extraction_result import ExtractionResult
from .service import DocumentPayload, ExtractionRequest, ExtractionService, GeminiExtractionService

# Initialize module logger
logger = get_logger(__name__)

DEFAULT_TEXT_PROMPT = (
    "Extract invoice details from this text. Purchase or Sale? Party Name? "
    "Date? Total Grams? Rate? GST Rate? Text:"
)

DEFAULT_DOCUMENT_INSTRUCTIONS = (
    "Analyze this invoice document. Extract the following details: Date, "
    "Party Name, Transaction Type (Sale/Purchase), Quantity (Grams), Rate "
    "(Price/Gram), and GST %. If there are multiple items, sum the gold "
    "quantity. If Rate is not explicit, calculate it as TaxableValue / Quantity."
)


class ExtractionState(str, Enum):
    """Lifecycle of the orchestrator."""

    IDLE = "IDLE"
    EXTRACTING = "EXTRACTING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class ExtractionOrchestrator:
    """
    Coordinates service extraction, response normalization and fallback.

    Attributes:
        service: ExtractionService, or None when none is configured
        post_processor: PostProcessor for service responses
        fallback_parser: FallbackTextParser for text input
        text_prompt: Prompt prepended to pasted text
        document_instructions: Instructions sent alongside a document

    Example:
        >>> orchestrator = ExtractionOrchestrator()
        >>> result = await orchestrator.extract(text="Sold 5g to XYZ Jewellers at Rs 6500 per gram")
        >>> result.transaction_type, result.quantity_grams
        (<TransactionType.SALE: 'SALE'>, 5.0)
    """

    def __init__(
        self,
        service: Optional[ExtractionService] = None,
        fallback_parser: Optional[FallbackTextParser] = None,
        post_processor: Optional[PostProcessor] = None,
        use_configured_service: bool = True
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            service: Extraction service. If None and use_configured_service
                    is set, a Gemini service is built from configuration.
            fallback_parser: Parser used when the service fails on text.
            post_processor: Response post-processor.
            use_configured_service: Build a service from configuration
                    when none is given.
        """
        if service is None and use_configured_service:
            service = self._service_from_config()

        self.service = service
        self.post_processor = post_processor or PostProcessor()
        self.fallback_parser = fallback_parser or FallbackTextParser()

        self.text_prompt = get_config("extraction.text_prompt", DEFAULT_TEXT_PROMPT)
        self.document_instructions = get_config(
            "extraction.document_instructions",
            DEFAULT_DOCUMENT_INSTRUCTIONS
        )

        self._state = ExtractionState.IDLE

        logger.info(
            f"ExtractionOrchestrator initialized "
            f"(service: {self.service.name if self.service else 'none'})"
        )

    @staticmethod
    def _service_from_config() -> Optional[ExtractionService]:
        try:
            return GeminiExtractionService.from_config()
        except ExtractionServiceError as e:
            logger.warning(f"Extraction service unavailable: {e}")
            return None

    @property
    def state(self) -> ExtractionState:
        return self._state

    @property
    def busy(self) -> bool:
        """True while an extraction is in flight."""
        return self._state is ExtractionState.EXTRACTING

    async def extract(
        self,
        text: Optional[str] = None,
        document: Optional[DocumentPayload] = None,
        today: Optional[date] = None
    ) -> ExtractionResult:
        """
        Extract transaction fields from text or a document.

        A document always takes precedence; text given alongside it is
        ignored.

        Args:
            text: Pasted invoice text.
            document: Loaded invoice document.
            today: Date used when the input carries none.

        Returns:
            ExtractionResult. On failure success is False and
            failure_reason holds a displayable message.

        Raises:
            ExtractionBusyError: Another extraction is in flight.
        """
        if self.busy:
            raise ExtractionBusyError()

        if document is None and not (text and text.strip()):
            return ExtractionResult.failure("Nothing to extract: provide text or a document")

        # Set before the first await so a concurrent call sees it
        self._state = ExtractionState.EXTRACTING
        today = today or date.today()
        start_time = time.time()

        try:
            if document is not None:
                if text:
                    logger.debug("Document provided; ignoring staged text")
                result = await self._extract_document(document, today)
            else:
                result = await self._extract_text(text, today)
        finally:
            if self._state is ExtractionState.EXTRACTING:
                self._state = ExtractionState.FAILED

        result.processing_time = time.time() - start_time
        self._state = ExtractionState.SUCCEEDED if result.success else ExtractionState.FAILED

        logger.info(
            f"Extraction {self._state.value.lower()} via {result.source} "
            f"in {result.processing_time:.2f}s"
        )
        return result

    async def _extract_document(self, document: DocumentPayload, today: date) -> ExtractionResult:
        request = ExtractionRequest(
            document=document,
            instructions=self.document_instructions
        )
        try:
            return await self._run_service(request, today)
        except ExtractionError as e:
            logger.warning(f"Document extraction failed: {e}")
            return ExtractionResult.failure(
                f"Processing failed: {e}. Try manual entry.",
                source="model"
            )

    async def _extract_text(self, text: str, today: date) -> ExtractionResult:
        request = ExtractionRequest(text=f"{self.text_prompt} {text}")
        try:
            return await self._run_service(request, today)
        except ExtractionError as e:
            logger.warning(f"Service extraction failed, using fallback parser: {e}")
            result = self.fallback_parser.parse(text)
            result.add_warning(f"Service extraction failed: {e}")
            return result

    async def _run_service(self, request: ExtractionRequest, today: date) -> ExtractionResult:
        """
        Call the service and post-process its response.

        Raises:
            ExtractionServiceError: No service, failed call or bad response.
            ExtractionAmbiguousError: Response lacks party and quantity.
        """
        if self.service is None:
            raise ExtractionServiceError("No extraction service configured")

        try:
            raw_text = await self.service.generate(request)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionServiceError(str(e) or type(e).__name__) from e

        try:
            result = self.post_processor.process_raw(raw_text, today)
        except ExtractionError:
            raise
        except Exception as e:
            logger.debug(f"Could not post-process service response: {e!r}")
            raise ExtractionServiceError(f"Unusable response: {e}") from e
        result.model_name = self.service.model_name
        return result
