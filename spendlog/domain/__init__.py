"""Domain models and types for spendlog.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from storage and network access
"""

from spendlog.domain.models import Amount, CurrencyCode, IsoDate, TransactionId, TransactionType

__all__ = ["Amount", "CurrencyCode", "IsoDate", "TransactionId", "TransactionType"]
