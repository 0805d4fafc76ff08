"""
Transaction Module for Gold Invoice Entry.

This module provides the transaction data model and the validation gate
that turns a draft into a finalized transaction.

The entry session lives in src.transaction.session and is imported from
there; it depends on the extraction orchestrator.

Author: ML Engineering Team
"""

from .models import Transaction, TransactionDraft, TransactionType
from .validators import ValidationGate

__all__ = ['Transaction', 'TransactionDraft', 'TransactionType', 'ValidationGate']
