"""List and summary commands for viewing transaction data."""

import sys

from rich.table import Table

from spendlog.commands.common import (
    console,
    format_amount,
    get_rate_service,
    get_transaction_service,
    normalize_date,
    short_id,
)
from spendlog.config import load_config
from spendlog.dates import format_date_display
from spendlog.domain.models import DEFAULT_CURRENCY, EXPENSE
from spendlog.domain.summary import share_of_total, sort_breakdown, stored_amount
from spendlog.services import TransactionFilters
from spendlog.store import StorageError


def build_filters(
    tx_type: str | None,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    source: str | None,
) -> TransactionFilters:
    """Build service filters from command options.

    Raises:
        ValueError: If a date bound cannot be parsed.
    """
    filters = TransactionFilters()
    if tx_type:
        filters["type"] = tx_type.lower()
    if start_date:
        filters["start_date"] = normalize_date(start_date)
    if end_date:
        filters["end_date"] = normalize_date(end_date)
    if category:
        filters["category"] = category
    if source:
        filters["source"] = source
    return filters


def list_command(
    tx_type: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    category: str | None = None,
    source: str | None = None,
    limit: int = 20,
    offline: bool = False,
) -> None:
    """List transactions, converted to the display currency."""
    config = load_config()
    service = get_transaction_service(config)

    try:
        filters = build_filters(tx_type, start_date, end_date, category, source)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        transactions = service.get_transactions(filters)
        display_currency = service.get_display_currency()
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if not transactions:
        console.print("[yellow]No records found.[/yellow]")
        return

    rates = get_rate_service(config, offline)
    shown = transactions[:limit] if limit > 0 else transactions

    table = Table(title=f"Transactions (showing {len(shown)} of {len(transactions)})")
    table.add_column("ID", style="dim")
    table.add_column("Type")
    table.add_column("Amount", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Category/Source", style="magenta")
    table.add_column("Description", style="white")

    for txn in shown:
        amount = stored_amount(txn)
        if amount is None:
            amount_cell = "[dim]-[/dim]"
        else:
            converted = rates.convert_static(amount, txn.get("currency") or DEFAULT_CURRENCY, display_currency)
            amount_cell = format_amount(converted, display_currency, txn["type"])
        type_label = "[red]Expense[/red]" if txn["type"] == EXPENSE else "[green]Income[/green]"
        table.add_row(
            short_id(str(txn.get("id", ""))),
            type_label,
            amount_cell,
            format_date_display(txn.get("date")),
            txn.get("category") or txn.get("source") or "-",
            txn.get("description") or "[dim]-[/dim]",
        )

    console.print(table)
    if len(shown) < len(transactions):
        console.print(f"[dim]... and {len(transactions) - len(shown)} more records[/dim]")


def _breakdown_table(title: str, breakdown: dict[str, float], total: float, currency: str, style: str) -> Table:
    table = Table(title=title)
    table.add_column("Name", style=style)
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right", style="dim")
    for name, amount in sort_breakdown(breakdown):
        table.add_row(name, format_amount(amount, currency), f"{share_of_total(amount, total):.1f}%")
    return table


def summary_command(
    tx_type: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    category: str | None = None,
    source: str | None = None,
    offline: bool = False,
) -> None:
    """Show income, expenses and balance in the display currency."""
    config = load_config()
    service = get_transaction_service(config)

    try:
        filters = build_filters(tx_type, start_date, end_date, category, source)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        display_currency = service.get_display_currency()
        rates = get_rate_service(config, offline)
        summary = service.get_summary(filters, display_currency, rates.convert_static)
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if summary.transaction_count == 0:
        console.print("[yellow]No records found.[/yellow]")
        return

    console.print("\n[bold cyan]Summary[/bold cyan]")
    console.print(f"  Income:   [green]{format_amount(summary.total_income, display_currency)}[/green]")
    console.print(f"  Expenses: [red]{format_amount(summary.total_expenses, display_currency)}[/red]")
    balance_style = "green" if summary.balance >= 0 else "red"
    console.print(
        f"  Balance:  [{balance_style}]{format_amount(summary.balance, display_currency)}[/{balance_style}]"
    )
    console.print(f"  [dim]{summary.income_count} income, {summary.expense_count} expenses[/dim]\n")

    if summary.by_category:
        console.print(
            _breakdown_table(
                "Expenses by Category", summary.by_category, summary.total_expenses, display_currency, "red"
            )
        )
    if summary.by_source:
        console.print(
            _breakdown_table("Income by Source", summary.by_source, summary.total_income, display_currency, "green")
        )
