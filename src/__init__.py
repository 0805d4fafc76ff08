"""
Gold Invoice Entry - Source Package.

This package contains all core modules for turning gold purchase and
sale invoices into validated inventory transactions. Each module has a
single responsibility.

Modules:
    - computation: Taxable, GST and total amount derivation
    - input_handler: Invoice document loading
    - model_inference: Extraction service and orchestration
    - postprocessor: Normalization and rule-based fallback parsing
    - transaction: Draft, validation gate and entry session
    - utils: Logging, exceptions and helpers

Architecture:
    Input → Extraction (service | fallback) → Draft → Computation
                                                    ↓
                                             Validation Gate → Transaction
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'computation',
    'input_handler',
    'model_inference',
    'postprocessor',
    'transaction',
    'utils'
]
