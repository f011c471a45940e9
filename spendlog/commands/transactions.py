"""Transaction management commands (add, edit, delete)."""

import sys
from typing import Any

import typer

from spendlog.commands.common import console, format_amount, get_transaction_service, normalize_date, short_id
from spendlog.dates import format_date_display
from spendlog.domain.models import DEFAULT_CURRENCY, EXPENSE, EXPENSE_CATEGORIES, INCOME_SOURCES
from spendlog.domain.summary import stored_amount
from spendlog.store import StorageError


def _match_choice(value: str, choices: tuple[str, ...]) -> str:
    """Match a category or source case-insensitively (unchanged if no match)."""
    for choice in choices:
        if choice.lower() == value.strip().lower():
            return choice
    return value.strip()


def _print_transaction(txn: dict[str, Any]) -> None:
    label = txn.get("category") if txn.get("type") == EXPENSE else txn.get("source")
    amount = stored_amount(txn)
    console.print(f"  ID: {short_id(str(txn.get('id', '')))}")
    console.print(f"  Date: {format_date_display(txn.get('date'))}")
    if amount is not None:
        currency = txn.get("currency") or DEFAULT_CURRENCY
        console.print(f"  Amount: {format_amount(amount, currency, txn.get('type'))}")
    console.print(f"  {'Category' if txn.get('type') == EXPENSE else 'Source'}: {label}")
    if txn.get("description"):
        console.print(f"  Description: {txn['description']}")


def add_command(
    tx_type: str,
    amount: float,
    label: str,
    date: str | None = None,
    description: str = "",
    currency: str | None = None,
) -> None:
    """Add an expense or income.

    Args:
        tx_type: "expense" or "income".
        amount: Positive amount.
        label: Category (expense) or source (income).
        date: Date (DD/MM/YYYY, YYYY-MM-DD or other day-first formats). Defaults to today.
        description: Optional description.
        currency: Currency symbol. Defaults to the display currency.
    """
    service = get_transaction_service()

    try:
        normalized_date = normalize_date(date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Accepted formats: DD/MM/YYYY, YYYY-MM-DD[/dim]")
        sys.exit(1)

    try:
        currency = currency or service.get_display_currency()
        if tx_type == EXPENSE:
            result = service.add_expense(
                amount, normalized_date, _match_choice(label, EXPENSE_CATEGORIES), description.strip(), currency
            )
        else:
            result = service.add_income(
                amount, normalized_date, _match_choice(label, INCOME_SOURCES), description.strip(), currency
            )
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] {result.message}:")
    _print_transaction(result.data or {})


def edit_command(
    id_prefix: str,
    amount: float | None = None,
    date: str | None = None,
    category: str | None = None,
    source: str | None = None,
    description: str | None = None,
    currency: str | None = None,
) -> None:
    """Edit a transaction found by id prefix. Only given fields change."""
    service = get_transaction_service()

    try:
        match = service.find_transaction_by_id(id_prefix.strip())
        if match is None:
            console.print(f"[red]No transaction found with ID starting '{id_prefix}'[/red]")
            sys.exit(1)

        updates: dict[str, Any] = {}
        if amount is not None:
            updates["amount"] = amount
        if date is not None:
            try:
                updates["date"] = normalize_date(date)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                sys.exit(1)
        if category is not None:
            updates["category"] = _match_choice(category, EXPENSE_CATEGORIES)
        if source is not None:
            updates["source"] = _match_choice(source, INCOME_SOURCES)
        if description is not None:
            updates["description"] = description.strip()
        if currency is not None:
            updates["currency"] = currency

        if not updates:
            console.print("[yellow]Nothing to update[/yellow]")
            return

        transaction_id = match.transaction["id"]
        if match.type == EXPENSE:
            result = service.update_expense(transaction_id, updates)
        else:
            result = service.update_income(transaction_id, updates)
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] {result.message}:")
    _print_transaction(result.data or {})


def delete_command(id_prefix: str, yes: bool = False) -> None:
    """Delete a transaction found by id prefix, after confirmation."""
    service = get_transaction_service()

    try:
        match = service.find_transaction_by_id(id_prefix.strip())
        if match is None:
            console.print(f"[red]No transaction found with ID starting '{id_prefix}'[/red]")
            sys.exit(1)

        _print_transaction({**match.transaction, "type": match.type})
        if not yes and not typer.confirm("Are you sure you want to delete this record?", default=False):
            console.print("[yellow]Operation cancelled.[/yellow]")
            return

        result = service.delete_transaction(match.transaction["id"])
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] {result.message}")
