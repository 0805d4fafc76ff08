"""
Transaction Validation Gate.

This module decides whether a draft may become a finalized transaction.
Rules are evaluated in a fixed order and the first failure wins, so the
operator always sees a single, specific reason:

    1. Period lock        draft date on or before the lock date
    2. Completeness       party, quantity and rate present and numeric
    3. Inventory          a sale may not exceed the available stock

Author: ML Engineering Team
"""

from datetime import date
from typing import Callable, List, Optional, Union

from src.computation import Valid
from src.utils.exceptions import (
    ConfigurationError,
    InsufficientInventoryError,
    MissingFieldsError,
    PeriodLockedError
)
from src.utils.helpers import generate_identifier, parse_iso_date
from src.utils.logger import get_logger
from .models import Transaction, TransactionDraft, TransactionType

# Initialize module logger
logger = get_logger(__name__)


class ValidationGate:
    """
    Business-rule gate between a draft and a finalized Transaction.

    Attributes:
        id_generator: Callable producing a unique identifier per transaction

    Example:
        >>> gate = ValidationGate()
        >>> transaction = gate.accept(draft, current_stock=120.0, lock_date="2026-03-31")
    """

    def __init__(self, id_generator: Optional[Callable[[], str]] = None) -> None:
        self.id_generator = id_generator or generate_identifier

    def check(
        self,
        draft: TransactionDraft,
        current_stock: float,
        lock_date: Union[str, date, None] = None
    ) -> None:
        """
        Apply every rule to the draft.

        Args:
            draft: Draft to validate.
            current_stock: Gold currently available, in grams.
            lock_date: Optional period lock; absent means no lock.

        Raises:
            PeriodLockedError: Draft date is on or before the lock date.
            MissingFieldsError: Party, quantity, rate or date missing.
            InsufficientInventoryError: Sale exceeds available stock.
            ConfigurationError: The lock date is not a YYYY-MM-DD date.
        """
        self._check_period_lock(draft, lock_date)
        self._check_completeness(draft)
        self._check_inventory(draft, current_stock)

    def accept(
        self,
        draft: TransactionDraft,
        current_stock: float,
        lock_date: Union[str, date, None] = None
    ) -> Transaction:
        """
        Validate the draft and build the finalized transaction.

        Args:
            draft: Draft to finalize.
            current_stock: Gold currently available, in grams.
            lock_date: Optional period lock.

        Returns:
            Transaction carrying a fresh identifier and the draft's totals.

        Raises:
            ValidationError: The first rule the draft violates.
        """
        self.check(draft, current_stock, lock_date)

        totals = draft.totals
        transaction = Transaction(
            identifier=self.id_generator(),
            date=draft.date,
            type=draft.type,
            party_name=draft.party_name.strip(),
            quantity_grams=draft.quantity_grams.as_float(),
            rate_per_gram=draft.rate_per_gram.as_float(),
            gst_rate_percent=draft.gst_rate_percent.as_float(),
            gst_amount=totals.gst_amount,
            taxable_amount=totals.taxable_amount,
            total_amount=totals.total_amount
        )

        logger.info(
            f"Accepted {transaction.type.value} {transaction.identifier}: "
            f"{transaction.quantity_grams}g from/to '{transaction.party_name}', "
            f"total {transaction.total_amount:.2f}"
        )
        return transaction

    def _check_period_lock(
        self,
        draft: TransactionDraft,
        lock_date: Union[str, date, None]
    ) -> None:
        if not lock_date:
            return

        locked_until = parse_iso_date(lock_date)
        draft_date = parse_iso_date(draft.date)

        if locked_until is None:
            raise ConfigurationError(
                f"Invalid lock date: {lock_date!r}",
                {"expected_format": "YYYY-MM-DD"}
            )

        # An unparseable draft date is reported by the completeness rule
        if draft_date is not None and draft_date <= locked_until:
            raise PeriodLockedError(locked_until.isoformat())

    def _check_completeness(self, draft: TransactionDraft) -> None:
        missing: List[str] = []

        if parse_iso_date(draft.date) is None:
            missing.append("date")
        if not draft.party_name or not draft.party_name.strip():
            missing.append("party_name")
        if not isinstance(draft.quantity_grams, Valid):
            missing.append("quantity_grams")
        if not isinstance(draft.rate_per_gram, Valid):
            missing.append("rate_per_gram")

        if missing:
            raise MissingFieldsError(missing)

    def _check_inventory(self, draft: TransactionDraft, current_stock: float) -> None:
        if draft.type is not TransactionType.SALE:
            return

        quantity = draft.quantity_grams.as_float()
        if quantity > current_stock:
            raise InsufficientInventoryError(quantity, current_stock)
