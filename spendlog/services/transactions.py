"""Transaction service: CRUD, filtering and summaries over the record store.

Business failures (validation errors, unknown ids) are returned as
``ServiceResult(success=False, ...)``. Storage failures raise ``StorageError``
and propagate to the caller.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypedDict

from spendlog import store
from spendlog.dates import is_date_in_range
from spendlog.domain.currency import is_supported_currency
from spendlog.domain.models import DEFAULT_CURRENCY, EXPENSE, INCOME, TransactionType
from spendlog.domain.summary import Converter, Summary, summarize
from spendlog.domain.transactions import (
    Transaction,
    apply_updates,
    new_expense,
    new_income,
    transaction_from_dict,
    transaction_to_dict,
    validate_transaction,
)
from spendlog.logging_setup import get_logger

logger = get_logger("spendlog.services.transactions")


class TransactionFilters(TypedDict, total=False):
    """Optional filters for listing transactions."""

    type: str
    start_date: str
    end_date: str
    category: str
    source: str


@dataclass(frozen=True)
class ServiceResult:
    """Uniform result of a service operation."""

    success: bool
    message: str = ""
    data: dict[str, Any] | None = None


@dataclass(frozen=True)
class TransactionMatch:
    """Result of a prefix id lookup."""

    type: TransactionType
    transaction: dict[str, Any]


class TransactionService:
    """Facade over the record store and the transaction domain model.

    Holds no state besides the data file location and the fallback display
    currency.

    Args:
        data_path: Path to the transactions file. If None, uses default location.
        default_currency: Display currency used when none is saved in settings.
    """

    def __init__(self, data_path: Path | None = None, default_currency: str = DEFAULT_CURRENCY) -> None:
        self.data_path = data_path
        self.default_currency = default_currency or DEFAULT_CURRENCY

    # --- Adding ---

    def _add(self, tx: Transaction) -> ServiceResult:
        errors = validate_transaction(tx)
        if errors:
            return ServiceResult(False, ", ".join(errors))

        item = transaction_to_dict(tx)
        if tx.type == EXPENSE:
            store.add_expense(item, self.data_path)
        else:
            store.add_income(item, self.data_path)

        logger.debug("Added %s %s", tx.type, tx.id)
        return ServiceResult(True, f"{tx.type.capitalize()} added successfully", item)

    def add_expense(
        self,
        amount: Any,
        date: Any,
        category: Any,
        description: Any = "",
        currency: str = DEFAULT_CURRENCY,
    ) -> ServiceResult:
        """Validate and store a new expense.

        Args:
            amount: Positive amount.
            date: Date string (DD/MM/YYYY or YYYY-MM-DD) or date.
            category: Expense category.
            description: Optional description.
            currency: Currency symbol or code.

        Returns:
            ServiceResult with the stored expense on success, or the joined
            validation messages on failure.

        Raises:
            StorageError: If the record store cannot be read or written.
        """
        try:
            expense = new_expense(amount, date, category, description, currency)
        except (TypeError, ValueError) as e:
            return ServiceResult(False, f"Failed to add expense: {e}")
        return self._add(expense)

    def add_income(
        self,
        amount: Any,
        date: Any,
        source: Any,
        description: Any = "",
        currency: str = DEFAULT_CURRENCY,
    ) -> ServiceResult:
        """Validate and store a new income. See ``add_expense``."""
        try:
            income = new_income(amount, date, source, description, currency)
        except (TypeError, ValueError) as e:
            return ServiceResult(False, f"Failed to add income: {e}")
        return self._add(income)

    # --- Querying ---

    def get_transactions(self, filters: TransactionFilters | None = None) -> list[dict[str, Any]]:
        """List transactions, newest first.

        Filters apply in order: type, date range (inclusive), category (only
        together with type "expense"), source (only together with type
        "income").

        Args:
            filters: Optional filters.

        Returns:
            Transaction dicts tagged with ``type``, sorted by date descending.
        """
        filters = filters or {}
        document = store.read_document(self.data_path)

        transactions = [{**e, "type": EXPENSE} for e in document["expenses"] if isinstance(e, dict)]
        transactions += [{**i, "type": INCOME} for i in document["income"] if isinstance(i, dict)]

        tx_type = filters.get("type")
        if tx_type in (EXPENSE, INCOME):
            transactions = [t for t in transactions if t["type"] == tx_type]

        start_date = filters.get("start_date")
        end_date = filters.get("end_date")
        if start_date or end_date:
            transactions = [t for t in transactions if is_date_in_range(t.get("date"), start_date, end_date)]

        category = filters.get("category")
        if category and tx_type == EXPENSE:
            transactions = [t for t in transactions if t.get("category") == category]

        source = filters.get("source")
        if source and tx_type == INCOME:
            transactions = [t for t in transactions if t.get("source") == source]

        # Stable sort keeps storage order for equal dates
        return sorted(transactions, key=lambda t: str(t.get("date") or ""), reverse=True)

    def get_summary(
        self,
        filters: TransactionFilters | None = None,
        target_currency: str | None = None,
        converter: Converter | None = None,
    ) -> Summary:
        """Summarize the filtered transactions.

        Amounts are aggregated as stored unless both a target currency and a
        converter (e.g. ``ExchangeRateService.convert_static``) are given.

        Args:
            filters: Optional filters, as for ``get_transactions``.
            target_currency: Currency to express totals in.
            converter: Function (amount, from, to) -> converted amount.

        Returns:
            Summary of totals, breakdowns and counts.
        """
        return summarize(self.get_transactions(filters), converter, target_currency)

    def get_expense_by_id(self, expense_id: str) -> dict[str, Any] | None:
        """Get an expense by exact id."""
        for expense in store.get_expenses(self.data_path):
            if isinstance(expense, dict) and expense.get("id") == expense_id:
                return expense
        return None

    def get_income_by_id(self, income_id: str) -> dict[str, Any] | None:
        """Get an income by exact id."""
        for income in store.get_income(self.data_path):
            if isinstance(income, dict) and income.get("id") == income_id:
                return income
        return None

    def get_transaction_by_id(self, transaction_id: str) -> dict[str, Any] | None:
        """Get an expense or income by exact id, tagged with its type."""
        expense = self.get_expense_by_id(transaction_id)
        if expense:
            return {**expense, "type": EXPENSE}

        income = self.get_income_by_id(transaction_id)
        if income:
            return {**income, "type": INCOME}

        return None

    def find_transaction_by_id(self, partial_id: str) -> TransactionMatch | None:
        """Find the first transaction whose id starts with ``partial_id``.

        Expenses are searched before income, each in storage order. Several
        records sharing the prefix are not reported; the first match wins.

        Args:
            partial_id: Id prefix typed by the user.

        Returns:
            The match, or None if nothing matches.
        """
        if not partial_id:
            return None

        document = store.read_document(self.data_path)
        for tx_type, items in ((EXPENSE, document["expenses"]), (INCOME, document["income"])):
            for item in items:
                item_id = item.get("id") if isinstance(item, dict) else None
                if isinstance(item_id, str) and item_id.startswith(partial_id):
                    return TransactionMatch(type=tx_type, transaction=item)

        return None

    # --- Updating ---

    def _update(self, tx_type: str, item_id: str, updates: dict[str, Any]) -> ServiceResult:
        label = tx_type.capitalize()
        current = self.get_expense_by_id(item_id) if tx_type == EXPENSE else self.get_income_by_id(item_id)
        if not current:
            return ServiceResult(False, f"{label} not found")

        try:
            updated = apply_updates(transaction_from_dict(current, tx_type), updates)
        except (TypeError, ValueError) as e:
            return ServiceResult(False, f"Failed to update {tx_type}: {e}")

        errors = validate_transaction(updated)
        if errors:
            return ServiceResult(False, ", ".join(errors))

        item = transaction_to_dict(updated)
        if tx_type == EXPENSE:
            found = store.update_expense(item_id, item, self.data_path)
        else:
            found = store.update_income(item_id, item, self.data_path)
        if not found:
            return ServiceResult(False, f"{label} not found")

        return ServiceResult(True, f"{label} updated successfully", item)

    def update_expense(self, expense_id: str, updates: dict[str, Any]) -> ServiceResult:
        """Update an expense with the fields present in ``updates``.

        The merged expense is fully re-validated and only stored if valid.

        Args:
            expense_id: Exact expense id.
            updates: Any of amount, date, category, description, currency.

        Returns:
            ServiceResult with the updated expense on success.
        """
        return self._update(EXPENSE, expense_id, updates)

    def update_income(self, income_id: str, updates: dict[str, Any]) -> ServiceResult:
        """Update an income with the fields present in ``updates``."""
        return self._update(INCOME, income_id, updates)

    def update_transaction(self, transaction_id: str, updates: dict[str, Any]) -> ServiceResult:
        """Update an expense or income, whichever has the id."""
        transaction = self.get_transaction_by_id(transaction_id)
        if not transaction:
            return ServiceResult(False, "Transaction not found")
        return self._update(transaction["type"], transaction_id, updates)

    # --- Deleting ---

    def delete_expense(self, expense_id: str) -> ServiceResult:
        """Delete an expense by exact id."""
        if not store.delete_expense(expense_id, self.data_path):
            return ServiceResult(False, "Expense not found")
        return ServiceResult(True, "Expense deleted successfully")

    def delete_income(self, income_id: str) -> ServiceResult:
        """Delete an income by exact id."""
        if not store.delete_income(income_id, self.data_path):
            return ServiceResult(False, "Income not found")
        return ServiceResult(True, "Income deleted successfully")

    def delete_transaction(self, transaction_id: str) -> ServiceResult:
        """Delete an expense or income, whichever has the id."""
        transaction = self.get_transaction_by_id(transaction_id)
        if not transaction:
            return ServiceResult(False, "Transaction not found")

        if transaction["type"] == EXPENSE:
            return self.delete_expense(transaction_id)
        return self.delete_income(transaction_id)

    # --- Settings ---

    def get_display_currency(self) -> str:
        """Get the user's display currency, or the configured default if unset."""
        currency = store.get_settings(self.data_path).get("currency")
        if isinstance(currency, str) and currency:
            return currency
        return self.default_currency

    def set_display_currency(self, currency: str) -> ServiceResult:
        """Save the user's display currency.

        Args:
            currency: Supported currency symbol or code.

        Returns:
            ServiceResult, failed if the currency is not supported.
        """
        if not is_supported_currency(currency):
            return ServiceResult(False, f"Unsupported currency: {currency}")
        store.save_settings({"currency": currency}, self.data_path)
        return ServiceResult(True, f"Display currency set to {currency}", {"currency": currency})
