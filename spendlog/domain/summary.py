"""Pure functions for summary calculations and aggregations.

This module contains the functional core for summaries:
- No I/O operations
- No side effects
- Pure data transformations
- Easy to test

Amounts are aggregated as stored unless a converter is supplied, in which
case every amount is first converted from its own currency to the target.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from spendlog.domain.models import DEFAULT_CURRENCY, EXPENSE

Converter = Callable[[float, str, str], float]


@dataclass(frozen=True)
class Summary:
    """Immutable summary of a set of transactions."""

    total_income: float = 0.0
    total_expenses: float = 0.0
    balance: float = 0.0
    by_category: dict[str, float] = field(default_factory=dict)
    by_source: dict[str, float] = field(default_factory=dict)
    transaction_count: int = 0
    expense_count: int = 0
    income_count: int = 0
    currency: str | None = None


def stored_amount(txn: dict[str, Any]) -> float | None:
    """Read a record's amount as a finite float, or None if it is missing or not a number."""
    amount = txn.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return None
    try:
        value = float(amount)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def _add(bucket: dict[str, float], key: str, amount: float) -> None:
    bucket[key] = bucket.get(key, 0.0) + amount


def summarize(
    transactions: Iterable[dict[str, Any]],
    converter: Converter | None = None,
    target_currency: str | None = None,
) -> Summary:
    """Reduce tagged transactions to totals and per-category/source breakdowns.

    Args:
        transactions: Transaction dicts carrying a ``type`` field.
        converter: Optional function (amount, from, to) -> converted amount.
        target_currency: Currency to convert into. Only used with a converter.

    Returns:
        Summary with totals rounded to 2 decimal places.
    """
    total_income = 0.0
    total_expenses = 0.0
    expense_count = 0
    income_count = 0
    by_category: dict[str, float] = {}
    by_source: dict[str, float] = {}

    for txn in transactions:
        amount = stored_amount(txn)
        if amount is None:
            continue
        if converter is not None and target_currency is not None:
            amount = converter(amount, txn.get("currency") or DEFAULT_CURRENCY, target_currency)

        if txn.get("type") == EXPENSE:
            total_expenses += amount
            expense_count += 1
            _add(by_category, txn.get("category") or "Other", amount)
        else:
            total_income += amount
            income_count += 1
            _add(by_source, txn.get("source") or "Other", amount)

    return Summary(
        total_income=round(total_income, 2),
        total_expenses=round(total_expenses, 2),
        balance=round(total_income - total_expenses, 2),
        by_category={k: round(v, 2) for k, v in by_category.items()},
        by_source={k: round(v, 2) for k, v in by_source.items()},
        transaction_count=expense_count + income_count,
        expense_count=expense_count,
        income_count=income_count,
        currency=target_currency if converter is not None else None,
    )


def sort_breakdown(breakdown: dict[str, float], sort_by: str = "value") -> list[tuple[str, float]]:
    """Sort a category or source breakdown.

    Args:
        breakdown: Mapping of category/source to total.
        sort_by: "value" (largest first) or "alpha".

    Returns:
        Sorted list of (name, amount) tuples.
    """
    if sort_by == "alpha":
        return sorted(breakdown.items(), key=lambda item: item[0].lower())
    return sorted(breakdown.items(), key=lambda item: item[1], reverse=True)


def share_of_total(amount: float, total: float) -> float:
    """Percentage of total (0.0 when total is not positive)."""
    if total <= 0:
        return 0.0
    return (amount / total) * 100
