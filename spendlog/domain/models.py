"""Domain type definitions and shared constants for spendlog.

These NewTypes provide semantic clarity and help with type checking:
- Amount: Positive transaction amount with at most 2 decimal places
- IsoDate: Calendar date in YYYY-MM-DD format
- CurrencyCode: ISO-like currency code (e.g., "USD")
- TransactionId: Opaque unique identifier of a stored record
"""

from typing import Final, Literal, NewType

# Amounts are kept as floats rounded to 2 decimal places
Amount = NewType("Amount", float)

# Dates are always stored in YYYY-MM-DD format (e.g., "2025-01-15")
IsoDate = NewType("IsoDate", str)

CurrencyCode = NewType("CurrencyCode", str)

TransactionId = NewType("TransactionId", str)

TransactionType = Literal["expense", "income"]

EXPENSE: Final = "expense"
INCOME: Final = "income"

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Transport",
    "Utilities",
    "Entertainment",
    "Healthcare",
    "Shopping",
    "Education",
    "Other",
)

INCOME_SOURCES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investment",
    "Gift",
    "Business",
    "Other",
)

MAX_AMOUNT = 999_999_999
MAX_DESCRIPTION_LENGTH = 500

DEFAULT_CURRENCY = "$"
