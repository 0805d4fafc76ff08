"""
Transaction Entry Session Module.

This module provides the TransactionEntrySession class that owns the
single in-progress draft: it feeds raw input through the extraction
orchestrator, applies the result to the draft, and submits the draft
through the validation gate.

Author: ML Engineering Team
"""

from datetime import date
from typing import Callable, Optional, Union

from src.model_inference.extractor import ExtractionOrchestrator
from src.model_inference.extraction_result import ExtractionResult
from src.model_inference.service import DocumentPayload
from src.utils.exceptions import ConfigurationError, ValidationError
from src.utils.logger import get_logger
from .models import Transaction, TransactionDraft
from .validators import ValidationGate

# Initialize module logger
logger = get_logger(__name__)


class TransactionEntrySession:
    """
    Single-draft transaction entry workflow.

    Attributes:
        on_add: Callback invoked once per accepted transaction
        orchestrator: ExtractionOrchestrator used for raw input
        gate: ValidationGate used on submission
        draft: Current TransactionDraft
        error: Last displayable error, or None

    Example:
        >>> session = TransactionEntrySession(on_add=ledger.append)
        >>> await session.process_input(text="Sold 5g to XYZ Jewellers at Rs 6500 per gram")
        >>> session.submit(current_stock=120.0)
    """

    def __init__(
        self,
        on_add: Callable[[Transaction], None],
        orchestrator: Optional[ExtractionOrchestrator] = None,
        gate: Optional[ValidationGate] = None,
        today: Optional[Callable[[], date]] = None
    ) -> None:
        """
        Initialize the session.

        Args:
            on_add: Receives each accepted transaction.
            orchestrator: Extraction orchestrator; built from configuration if None.
            gate: Validation gate; a default gate if None.
            today: Callable returning the current date.
        """
        self.on_add = on_add
        self.orchestrator = orchestrator or ExtractionOrchestrator()
        self.gate = gate or ValidationGate()
        self._today = today or date.today

        self.draft = TransactionDraft.default(self._today())
        self.error: Optional[str] = None
        # Bumped on reset so results of extractions started earlier are dropped
        self._generation = 0

    @property
    def busy(self) -> bool:
        return self.orchestrator.busy

    def reset(self) -> None:
        """Discard the draft and any error; pending results are dropped."""
        self._generation += 1
        self.draft = TransactionDraft.default(self._today())
        self.error = None
        logger.debug("Session reset")

    async def process_input(
        self,
        text: Optional[str] = None,
        document: Optional[DocumentPayload] = None
    ) -> Optional[ExtractionResult]:
        """
        Extract fields from raw input and apply them to the draft.

        Args:
            text: Pasted invoice text.
            document: Loaded invoice document; takes precedence over text.

        Returns:
            The extraction result, or None if the session was reset
            while the extraction was pending.

        Raises:
            ExtractionBusyError: Another extraction is in flight.
        """
        generation = self._generation

        result = await self.orchestrator.extract(
            text=text,
            document=document,
            today=self._today()
        )

        if generation != self._generation:
            logger.info("Discarding extraction result: session was reset")
            return None

        self.error = None
        if result.success:
            self.draft.apply_extraction(result)
        else:
            self.error = result.failure_reason
        return result

    def submit(
        self,
        current_stock: float,
        lock_date: Union[str, date, None] = None
    ) -> Optional[Transaction]:
        """
        Validate and finalize the current draft.

        On success on_add is called with the transaction and the draft
        is reset. On rejection, or when the lock date is unusable, the
        reason is stored in error and the draft is left as it is.

        Args:
            current_stock: Gold currently available, in grams.
            lock_date: Optional period lock date.

        Returns:
            The accepted Transaction, or None when rejected.
        """
        try:
            transaction = self.gate.accept(self.draft, current_stock, lock_date)
        except ValidationError as e:
            logger.info(f"Transaction rejected: {e.message}")
            self.error = e.message
            return None
        except ConfigurationError as e:
            logger.warning(f"Transaction not checked: {e.message}")
            self.error = e.message
            return None

        self.on_add(transaction)
        self.reset()
        return transaction
