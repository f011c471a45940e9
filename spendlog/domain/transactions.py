"""Pure functions for building, validating and serialising transactions.

This module contains the functional core for transaction records:
- No I/O operations (no files, no console, no network)
- No side effects
- Pure data transformations
- Easy to test

A transaction is either an expense (carries a category) or an income
(carries a source). The ``type`` field selects the variant.
"""

import math
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Any

from spendlog.dates import format_date_iso, is_future_date, parse_date
from spendlog.domain.models import (
    DEFAULT_CURRENCY,
    EXPENSE,
    EXPENSE_CATEGORIES,
    INCOME,
    INCOME_SOURCES,
    MAX_AMOUNT,
    MAX_DESCRIPTION_LENGTH,
    Amount,
    TransactionId,
)


@dataclass(frozen=True)
class Transaction:
    """Immutable expense or income record."""

    id: TransactionId
    type: str
    amount: Any
    date: str
    description: Any = ""
    currency: str = DEFAULT_CURRENCY
    created_at: str = ""
    category: Any = None
    source: Any = None

    @property
    def label(self) -> Any:
        """Category for expenses, source for income."""
        return self.category if self.type == EXPENSE else self.source


def _generate_id() -> TransactionId:
    return TransactionId(str(uuid.uuid4()))


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _normalize_amount(amount: Any) -> Any:
    # Non-numeric values are kept as-is so validation can report them
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return amount
    try:
        value = float(amount)
    except OverflowError:
        return amount
    if not math.isfinite(value):
        return amount
    return Amount(round(value, 2))


def _new_transaction(
    tx_type: str,
    amount: Any,
    tx_date: Any,
    label: Any,
    description: Any,
    currency: str,
    id: str | None,
    created_at: str | None,
) -> Transaction:
    return Transaction(
        id=TransactionId(id) if id else _generate_id(),
        type=tx_type,
        amount=_normalize_amount(amount),
        date=format_date_iso(tx_date),
        description="" if description is None else description,
        currency=currency or DEFAULT_CURRENCY,
        created_at=created_at or _now_iso(),
        category=label if tx_type == EXPENSE else None,
        source=label if tx_type == INCOME else None,
    )


def new_expense(
    amount: Any,
    tx_date: Any,
    category: Any,
    description: Any = "",
    currency: str = DEFAULT_CURRENCY,
    id: str | None = None,
    created_at: str | None = None,
) -> Transaction:
    """Build an expense, normalising the date and assigning an id if missing.

    Args:
        amount: Positive amount.
        tx_date: Date string (DD/MM/YYYY or YYYY-MM-DD), date or datetime.
        category: Expense category.
        description: Optional free text.
        currency: Currency symbol or code.
        id: Existing id to preserve (generated when None).
        created_at: Existing creation timestamp to preserve.

    Returns:
        Unvalidated expense transaction.
    """
    return _new_transaction(EXPENSE, amount, tx_date, category, description, currency, id, created_at)


def new_income(
    amount: Any,
    tx_date: Any,
    source: Any,
    description: Any = "",
    currency: str = DEFAULT_CURRENCY,
    id: str | None = None,
    created_at: str | None = None,
) -> Transaction:
    """Build an income, normalising the date and assigning an id if missing."""
    return _new_transaction(INCOME, amount, tx_date, source, description, currency, id, created_at)


def _validate_amount(amount: Any) -> str | None:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return "Amount must be a number"
    try:
        value = float(amount)
    except OverflowError:
        return "Amount must be finite"
    if math.isnan(value):
        return "Amount cannot be NaN"
    if not math.isfinite(value):
        return "Amount must be finite"
    if value <= 0:
        return "Amount must be a positive number"
    if value > MAX_AMOUNT:
        return f"Amount is too large (max {MAX_AMOUNT:,})"
    return None


def _validate_date(value: str, today: date | None) -> str | None:
    if not value:
        return "Date is required"
    parsed = parse_date(value)
    if parsed is None:
        return "Date must be a valid date"
    if is_future_date(parsed, today):
        return "Date cannot be in the future"
    return None


def _validate_member(value: Any, allowed: tuple[str, ...], field: str) -> str | None:
    if not value:
        return f"{field} is required"
    if not isinstance(value, str):
        return f"{field} must be a string"
    if value not in allowed:
        return f"Invalid {field.lower()}. Must be one of: {', '.join(allowed)}"
    return None


def validate_transaction(tx: Transaction, today: date | None = None) -> list[str]:
    """Validate a transaction.

    Args:
        tx: Transaction to validate.
        today: Reference date for the future-date rule (defaults to today).

    Returns:
        Ordered list of violation messages. Empty if the transaction is valid.
    """
    errors: list[str] = []

    amount_error = _validate_amount(tx.amount)
    if amount_error:
        errors.append(amount_error)

    date_error = _validate_date(tx.date, today)
    if date_error:
        errors.append(date_error)

    if tx.description is not None and not isinstance(tx.description, str):
        errors.append("Description must be a string")
    elif tx.description and len(tx.description) > MAX_DESCRIPTION_LENGTH:
        errors.append(f"Description is too long (max {MAX_DESCRIPTION_LENGTH} characters)")

    if tx.type == EXPENSE:
        label_error = _validate_member(tx.category, EXPENSE_CATEGORIES, "Category")
    elif tx.type == INCOME:
        label_error = _validate_member(tx.source, INCOME_SOURCES, "Source")
    else:
        label_error = f"Unknown transaction type: {tx.type!r}"
    if label_error:
        errors.append(label_error)

    return errors


def transaction_to_dict(tx: Transaction) -> dict[str, Any]:
    """Serialise a transaction to its stored item shape.

    Args:
        tx: Transaction to serialise.

    Returns:
        Dictionary with camelCase ``createdAt`` and either ``category`` or ``source``.
    """
    item: dict[str, Any] = {
        "id": tx.id,
        "amount": tx.amount,
        "date": tx.date,
        "description": tx.description,
        "currency": tx.currency,
        "createdAt": tx.created_at,
    }
    if tx.type == EXPENSE:
        item["category"] = tx.category
    else:
        item["source"] = tx.source
    item["type"] = tx.type
    return item


def transaction_from_dict(item: dict[str, Any], tx_type: str | None = None) -> Transaction:
    """Rebuild a transaction from a stored item.

    Args:
        item: Stored item dictionary.
        tx_type: Variant to build. Defaults to the item's own ``type`` field.

    Returns:
        Transaction preserving the stored id and creation timestamp.

    Raises:
        ValueError: If the variant cannot be determined.
    """
    kind = tx_type or item.get("type")
    if kind == EXPENSE:
        build = new_expense
        label = item.get("category")
    elif kind == INCOME:
        build = new_income
        label = item.get("source")
    else:
        raise ValueError(f"Unknown transaction type: {kind!r}")

    return build(
        item.get("amount"),
        item.get("date"),
        label,
        item.get("description") or "",
        item.get("currency") or DEFAULT_CURRENCY,
        id=item.get("id"),
        created_at=item.get("createdAt"),
    )


def apply_updates(tx: Transaction, updates: dict[str, Any]) -> Transaction:
    """Build a new transaction from an existing one plus partial updates.

    Only keys present in ``updates`` change; id and creation time are kept.
    The variant field that does not belong to the transaction's type is ignored.

    Args:
        tx: Current transaction.
        updates: Partial field overrides.

    Returns:
        New, unvalidated transaction.
    """
    changes: dict[str, Any] = {}
    if "amount" in updates:
        changes["amount"] = _normalize_amount(updates["amount"])
    if "date" in updates:
        changes["date"] = format_date_iso(updates["date"])
    if "description" in updates:
        changes["description"] = "" if updates["description"] is None else updates["description"]
    if "currency" in updates:
        changes["currency"] = updates["currency"] or DEFAULT_CURRENCY
    if tx.type == EXPENSE and "category" in updates:
        changes["category"] = updates["category"]
    if tx.type == INCOME and "source" in updates:
        changes["source"] = updates["source"]
    return replace(tx, **changes)
