"""Record and settings operations over the transactions document.

Each function is a full read-modify-write cycle. Updates and deletes match
by exact id and report whether a record was found instead of raising.
"""

from pathlib import Path
from typing import Any

from spendlog.store.document import read_document, write_document


def get_settings(data_path: Path | None = None) -> dict[str, Any]:
    """Get user settings.

    Args:
        data_path: Path to the transactions file. If None, uses default location.

    Returns:
        Settings dictionary (empty if none saved).
    """
    return read_document(data_path)["settings"]


def save_settings(settings: dict[str, Any], data_path: Path | None = None) -> bool:
    """Merge settings into the stored settings (new keys override).

    Args:
        settings: Settings to save.
        data_path: Path to the transactions file. If None, uses default location.

    Returns:
        True once saved.

    Raises:
        StorageError: If the document cannot be written.
    """
    document = read_document(data_path)
    document["settings"] = {**document["settings"], **settings}
    write_document(document, data_path)
    return True


def get_expenses(data_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all stored expenses in storage order."""
    return read_document(data_path)["expenses"]


def get_income(data_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all stored income in storage order."""
    return read_document(data_path)["income"]


def _append(collection: str, item: dict[str, Any], data_path: Path | None) -> None:
    document = read_document(data_path)
    document[collection].append(item)
    write_document(document, data_path)


def _replace(collection: str, item_id: str, item: dict[str, Any], data_path: Path | None) -> bool:
    document = read_document(data_path)
    items: list[dict[str, Any]] = document[collection]

    for i, existing in enumerate(items):
        if isinstance(existing, dict) and existing.get("id") == item_id:
            items[i] = item
            break
    else:
        return False

    write_document(document, data_path)
    return True


def _remove(collection: str, item_id: str, data_path: Path | None) -> bool:
    document = read_document(data_path)
    items: list[dict[str, Any]] = document[collection]

    remaining = [e for e in items if not (isinstance(e, dict) and e.get("id") == item_id)]
    if len(remaining) == len(items):
        return False

    document[collection] = remaining
    write_document(document, data_path)
    return True


def add_expense(expense: dict[str, Any], data_path: Path | None = None) -> None:
    """Append an expense.

    Args:
        expense: Serialized expense.
        data_path: Path to the transactions file. If None, uses default location.

    Raises:
        StorageError: If the document cannot be read or written.
    """
    _append("expenses", expense, data_path)


def add_income(income: dict[str, Any], data_path: Path | None = None) -> None:
    """Append an income."""
    _append("income", income, data_path)


def update_expense(expense_id: str, expense: dict[str, Any], data_path: Path | None = None) -> bool:
    """Replace the expense with the given id.

    Args:
        expense_id: Exact expense id.
        expense: Replacement serialized expense.
        data_path: Path to the transactions file. If None, uses default location.

    Returns:
        True if updated, False if no expense has that id.
    """
    return _replace("expenses", expense_id, expense, data_path)


def update_income(income_id: str, income: dict[str, Any], data_path: Path | None = None) -> bool:
    """Replace the income with the given id. Returns False if not found."""
    return _replace("income", income_id, income, data_path)


def delete_expense(expense_id: str, data_path: Path | None = None) -> bool:
    """Delete the expense with the given id.

    Args:
        expense_id: Exact expense id.
        data_path: Path to the transactions file. If None, uses default location.

    Returns:
        True if deleted, False if no expense has that id.
    """
    return _remove("expenses", expense_id, data_path)


def delete_income(income_id: str, data_path: Path | None = None) -> bool:
    """Delete the income with the given id. Returns False if not found."""
    return _remove("income", income_id, data_path)
