"""Tests for spendlog.services.transactions."""

from datetime import date, timedelta
from pathlib import Path

import pytest

from spendlog import store
from spendlog.services import TransactionService
from spendlog.store import get_expenses


@pytest.fixture
def service(tmp_path: Path) -> TransactionService:
    return TransactionService(tmp_path / "transactions.json")


@pytest.fixture
def populated(service: TransactionService) -> TransactionService:
    service.add_expense(10, "2025-01-10", "Food", "Lunch")
    service.add_expense(25, "2025-01-20", "Transport", "Train", "€")
    service.add_expense(5, "2025-02-01", "Food")
    service.add_income(1000, "2025-01-31", "Salary")
    service.add_income(200, "15/02/2025", "Gift")
    return service


class TestAdd:
    """Tests for add_expense and add_income."""

    def test_add_expense(self, service: TransactionService) -> None:
        """Should store a valid expense and return it."""
        result = service.add_expense(12.5, "15/01/2025", "Food", "Lunch", "€")

        assert result.success
        assert result.message == "Expense added successfully"
        assert result.data["date"] == "2025-01-15"
        assert result.data["type"] == "expense"
        assert service.get_expense_by_id(result.data["id"])["amount"] == 12.5

    def test_add_income(self, service: TransactionService) -> None:
        """Should store a valid income."""
        result = service.add_income(1000, "2025-01-01", "Salary")

        assert result.success
        assert result.message == "Income added successfully"
        assert service.get_income_by_id(result.data["id"])["source"] == "Salary"

    def test_invalid_expense_is_not_stored(self, service: TransactionService) -> None:
        """Should return every validation message and write nothing."""
        result = service.add_expense(-5, "2025-01-15", "Rent")

        assert not result.success
        assert "Amount must be a positive number" in result.message
        assert "Invalid category" in result.message
        assert get_expenses(service.data_path) == []

    def test_future_date_rejected(self, service: TransactionService) -> None:
        """Should reject a date after today."""
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        result = service.add_income(10, tomorrow, "Gift")

        assert not result.success
        assert result.message == "Date cannot be in the future"

    def test_income_rejects_expense_category(self, service: TransactionService) -> None:
        """Should validate income against sources."""
        assert not service.add_income(10, "2025-01-15", "Food").success


class TestGetTransactions:
    """Tests for get_transactions filtering and ordering."""

    def test_newest_first(self, populated: TransactionService) -> None:
        """Should sort by date descending across both types."""
        dates = [t["date"] for t in populated.get_transactions()]
        assert dates == sorted(dates, reverse=True)
        assert len(dates) == 5

    def test_filter_by_type(self, populated: TransactionService) -> None:
        """Should keep only the requested type."""
        income = populated.get_transactions({"type": "income"})
        assert {t["type"] for t in income} == {"income"}
        assert len(income) == 2

    def test_filter_by_date_range_inclusive(self, populated: TransactionService) -> None:
        """Should include both ends of the range."""
        result = populated.get_transactions({"start_date": "2025-01-20", "end_date": "31/01/2025"})
        assert [t["date"] for t in result] == ["2025-01-31", "2025-01-20"]

    def test_category_needs_expense_type(self, populated: TransactionService) -> None:
        """Should apply the category filter only together with type expense."""
        food = populated.get_transactions({"type": "expense", "category": "Food"})
        assert [t["amount"] for t in food] == [5, 10]

        assert len(populated.get_transactions({"category": "Food"})) == 5

    def test_source_needs_income_type(self, populated: TransactionService) -> None:
        """Should apply the source filter only together with type income."""
        gifts = populated.get_transactions({"type": "income", "source": "Gift"})
        assert [t["amount"] for t in gifts] == [200]

        assert len(populated.get_transactions({"type": "expense", "source": "Gift"})) == 3

    def test_filters_compose(self, populated: TransactionService) -> None:
        """Should apply type, date and category together."""
        result = populated.get_transactions(
            {"type": "expense", "category": "Food", "start_date": "2025-01-15"}
        )
        assert [t["date"] for t in result] == ["2025-02-01"]

    def test_empty_store(self, service: TransactionService) -> None:
        """Should return nothing when no data file exists."""
        assert service.get_transactions() == []


class TestSummary:
    """Tests for get_summary."""

    def test_summary_as_stored(self, populated: TransactionService) -> None:
        """Should add stored amounts without conversion."""
        summary = populated.get_summary()

        assert summary.total_expenses == 40.0
        assert summary.total_income == 1200.0
        assert summary.balance == 1160.0
        assert summary.by_category == {"Food": 15.0, "Transport": 25.0}

    def test_summary_with_converter(self, populated: TransactionService) -> None:
        """Should convert each amount to the target currency."""

        def euros_are_double(amount: float, from_currency: str, to_currency: str) -> float:
            return amount * 2 if from_currency == "€" else amount

        summary = populated.get_summary({"type": "expense"}, "$", euros_are_double)

        assert summary.total_expenses == 65.0
        assert summary.income_count == 0
        assert summary.currency == "$"


class TestLookup:
    """Tests for id lookups."""

    def test_exact_lookup_tags_type(self, populated: TransactionService) -> None:
        """Should find either type by exact id and tag it."""
        income_id = populated.get_transactions({"type": "income"})[0]["id"]

        found = populated.get_transaction_by_id(income_id)
        assert found["type"] == "income"
        assert populated.get_transaction_by_id("missing") is None

    def test_prefix_lookup(self, populated: TransactionService) -> None:
        """Should find a record by the start of its id."""
        expense = populated.get_transactions({"type": "expense"})[0]

        match = populated.find_transaction_by_id(expense["id"][:8])
        assert match is not None
        assert match.type == "expense"
        assert match.transaction["id"] == expense["id"]

    def test_prefix_prefers_expenses(self, service: TransactionService) -> None:
        """Should return an expense before an income sharing the prefix."""
        store.add_income({"id": "abc-income", "amount": 1, "date": "2025-01-15", "source": "Gift"}, service.data_path)
        store.add_expense({"id": "abc-expense", "amount": 1, "date": "2025-01-15", "category": "Food"}, service.data_path)

        match = service.find_transaction_by_id("abc")

        assert match is not None
        assert match.type == "expense"
        assert match.transaction["id"] == "abc-expense"

    def test_prefix_no_match(self, populated: TransactionService) -> None:
        """Should return None for an unknown or empty prefix."""
        assert populated.find_transaction_by_id("zzzz") is None
        assert populated.find_transaction_by_id("") is None


class TestUpdate:
    """Tests for update_expense, update_income and update_transaction."""

    def test_partial_update(self, service: TransactionService) -> None:
        """Should change only the given fields and keep identity."""
        created = service.add_expense(10, "2025-01-15", "Food", "Lunch").data

        result = service.update_expense(created["id"], {"amount": 15, "description": "Dinner"})

        assert result.success
        assert result.message == "Expense updated successfully"
        stored = service.get_expense_by_id(created["id"])
        assert stored["amount"] == 15
        assert stored["description"] == "Dinner"
        assert stored["category"] == "Food"
        assert stored["createdAt"] == created["createdAt"]

    def test_invalid_update_leaves_record(self, service: TransactionService) -> None:
        """Should re-validate the merged record and keep the old one on failure."""
        created = service.add_income(100, "2025-01-15", "Salary").data

        result = service.update_income(created["id"], {"amount": -1, "source": "Lottery"})

        assert not result.success
        assert "Amount must be a positive number" in result.message
        assert "Invalid source" in result.message
        assert service.get_income_by_id(created["id"])["amount"] == 100

    def test_update_missing(self, service: TransactionService) -> None:
        """Should report unknown ids."""
        assert service.update_expense("nope", {"amount": 1}).message == "Expense not found"
        assert service.update_income("nope", {"amount": 1}).message == "Income not found"
        assert service.update_transaction("nope", {"amount": 1}).message == "Transaction not found"

    def test_update_transaction_dispatches(self, service: TransactionService) -> None:
        """Should update whichever type owns the id."""
        created = service.add_income(100, "2025-01-15", "Salary").data

        assert service.update_transaction(created["id"], {"source": "Bonus"}).success is False
        assert service.update_transaction(created["id"], {"source": "Gift"}).success
        assert service.get_income_by_id(created["id"])["source"] == "Gift"


class TestDelete:
    """Tests for deleting."""

    def test_delete_by_type(self, service: TransactionService) -> None:
        """Should delete and then report the record as gone."""
        expense_id = service.add_expense(10, "2025-01-15", "Food").data["id"]

        assert service.delete_expense(expense_id).message == "Expense deleted successfully"
        assert service.delete_expense(expense_id).message == "Expense not found"
        assert service.delete_income(expense_id).message == "Income not found"

    def test_delete_transaction(self, service: TransactionService) -> None:
        """Should delete either type by id."""
        income_id = service.add_income(10, "2025-01-15", "Gift").data["id"]

        assert service.delete_transaction(income_id).success
        assert service.get_transactions() == []
        assert service.delete_transaction(income_id).message == "Transaction not found"


class TestDisplayCurrency:
    """Tests for the display currency setting."""

    def test_default(self, service: TransactionService) -> None:
        """Should default to dollars."""
        assert service.get_display_currency() == "$"

    def test_set_and_get(self, service: TransactionService) -> None:
        """Should persist a supported currency."""
        assert service.set_display_currency("€").success
        assert service.get_display_currency() == "€"

    def test_rejects_unknown(self, service: TransactionService) -> None:
        """Should refuse unsupported currencies."""
        result = service.set_display_currency("XYZ")

        assert not result.success
        assert service.get_display_currency() == "$"


class TestOversizedAmounts:
    """Tests for amounts too large to represent as a float."""

    def test_add_reports_failure(self, service: TransactionService) -> None:
        """Should return a failed result instead of raising."""
        result = service.add_expense(10**400, "2024-01-01", "Food")

        assert not result.success
        assert result.message == "Amount must be finite"
        assert get_expenses(service.data_path) == []

    def test_update_reports_failure(self, service: TransactionService) -> None:
        """Should reject the update and keep the stored amount."""
        created = service.add_income(100, "2025-01-15", "Salary").data

        result = service.update_income(created["id"], {"amount": 10**400})

        assert not result.success
        assert result.message == "Amount must be finite"
        assert service.get_income_by_id(created["id"])["amount"] == 100


class TestConfiguredDefaultCurrency:
    """Tests for the fallback display currency."""

    def test_configured_default_is_used(self, tmp_path: Path) -> None:
        """Should fall back to the configured currency when none is saved."""
        service = TransactionService(tmp_path / "transactions.json", default_currency="€")

        assert service.get_display_currency() == "€"

    def test_saved_setting_wins(self, tmp_path: Path) -> None:
        """Should prefer the saved display currency over the configured one."""
        service = TransactionService(tmp_path / "transactions.json", default_currency="€")
        service.set_display_currency("£")

        assert service.get_display_currency() == "£"


class TestMalformedRecords:
    """Tests for stored records without a usable amount."""

    def test_summary_skips_records_without_amount(self, service: TransactionService) -> None:
        """Should leave out records whose amount is missing or not a number."""
        service.add_expense(10, "2025-01-15", "Food")
        store.add_expense({"id": "broken", "date": "2025-01-16", "category": "Food"}, service.data_path)
        store.add_income({"id": "text", "amount": "12", "date": "2025-01-16", "source": "Gift"}, service.data_path)

        summary = service.get_summary()

        assert summary.total_expenses == 10.0
        assert summary.total_income == 0.0
        assert summary.transaction_count == 1
