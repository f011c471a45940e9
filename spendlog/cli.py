"""CLI entry point for spendlog."""

import typer

from spendlog.commands.admin import currency_command, init_command, rates_command
from spendlog.commands.report import list_command, summary_command
from spendlog.commands.transactions import add_command, delete_command, edit_command
from spendlog.config import load_config
from spendlog.domain.models import EXPENSE, INCOME
from spendlog.logging_setup import configure_logging

app = typer.Typer(
    name="spendlog",
    help="Spendlog - track your expenses and income",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Spendlog - track your expenses and income."""
    configure_logging("DEBUG" if verbose else load_config().get("log_level"))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config and data file"),
) -> None:
    """Initialize spendlog configuration and data file."""
    init_command(force)


@app.command(name="add-expense")
def add_expense(
    amount: float,
    category: str,
    date: str = typer.Option(None, "--date", "-d", help="Date (DD/MM/YYYY or YYYY-MM-DD, default: today)"),
    description: str = typer.Option("", "--description", "-m", help="Optional description"),
    currency: str = typer.Option(None, "--currency", "-c", help="Currency symbol (default: display currency)"),
) -> None:
    """Add an expense."""
    add_command(EXPENSE, amount, category, date, description, currency)


@app.command(name="add-income")
def add_income(
    amount: float,
    source: str,
    date: str = typer.Option(None, "--date", "-d", help="Date (DD/MM/YYYY or YYYY-MM-DD, default: today)"),
    description: str = typer.Option("", "--description", "-m", help="Optional description"),
    currency: str = typer.Option(None, "--currency", "-c", help="Currency symbol (default: display currency)"),
) -> None:
    """Add an income."""
    add_command(INCOME, amount, source, date, description, currency)


@app.command(name="list")
def list_transactions(
    type: str = typer.Option(None, "--type", "-t", help="Only 'expense' or 'income'"),
    start_date: str = typer.Option(None, "--from", help="Start date (inclusive)"),
    end_date: str = typer.Option(None, "--to", help="End date (inclusive)"),
    category: str = typer.Option(None, "--category", help="Expense category (with --type expense)"),
    source: str = typer.Option(None, "--source", help="Income source (with --type income)"),
    limit: int = typer.Option(20, help="Maximum records to show (0 for all)"),
    offline: bool = typer.Option(False, "--offline", help="Use offline exchange rates"),
) -> None:
    """List your transactions, newest first."""
    list_command(type, start_date, end_date, category, source, limit, offline)


@app.command()
def summary(
    type: str = typer.Option(None, "--type", "-t", help="Only 'expense' or 'income'"),
    start_date: str = typer.Option(None, "--from", help="Start date (inclusive)"),
    end_date: str = typer.Option(None, "--to", help="End date (inclusive)"),
    category: str = typer.Option(None, "--category", help="Expense category (with --type expense)"),
    source: str = typer.Option(None, "--source", help="Income source (with --type income)"),
    offline: bool = typer.Option(False, "--offline", help="Use offline exchange rates"),
) -> None:
    """Show your income, expenses and balance."""
    summary_command(type, start_date, end_date, category, source, offline)


@app.command()
def edit(
    id_prefix: str,
    amount: float = typer.Option(None, "--amount", help="New amount"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    category: str = typer.Option(None, "--category", help="New category (expenses)"),
    source: str = typer.Option(None, "--source", help="New source (income)"),
    description: str = typer.Option(None, "--description", "-m", help="New description"),
    currency: str = typer.Option(None, "--currency", "-c", help="New currency symbol"),
) -> None:
    """Edit a transaction by ID (the first characters are enough)."""
    edit_command(id_prefix, amount, date, category, source, description, currency)


@app.command()
def delete(
    id_prefix: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction by ID (the first characters are enough)."""
    delete_command(id_prefix, yes)


@app.command()
def currency(
    symbol: str = typer.Argument(None, help="Currency symbol to display amounts in"),
) -> None:
    """Show or set your display currency."""
    currency_command(symbol)


@app.command()
def rates(
    amount: float = typer.Option(1.0, "--amount", help="Amount to convert"),
    offline: bool = typer.Option(False, "--offline", help="Use offline exchange rates"),
) -> None:
    """Show exchange rates for your display currency."""
    rates_command(amount, offline)


if __name__ == "__main__":
    app()
