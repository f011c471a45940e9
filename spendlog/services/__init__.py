"""Service layer - orchestration over the store and the domain core."""

from spendlog.services.exchange import CacheStatus, ExchangeRateService
from spendlog.services.transactions import (
    ServiceResult,
    TransactionFilters,
    TransactionMatch,
    TransactionService,
)

__all__ = [
    "CacheStatus",
    "ExchangeRateService",
    "ServiceResult",
    "TransactionFilters",
    "TransactionMatch",
    "TransactionService",
]
