"""Helpers shared by the CLI commands."""

import asyncio
from datetime import date
from typing import Any

import pandas as pd
from rich.console import Console

from spendlog.config import get_data_path, load_config
from spendlog.dates import parse_date
from spendlog.domain.currency import to_symbol
from spendlog.domain.models import DEFAULT_CURRENCY, EXPENSE
from spendlog.services import ExchangeRateService, TransactionService

console = Console()


def get_transaction_service(config: dict[str, Any] | None = None) -> TransactionService:
    """Build the transaction service for the configured data file."""
    if config is None:
        config = load_config()
    return TransactionService(get_data_path(config), config.get("default_currency") or DEFAULT_CURRENCY)


def get_rate_service(config: dict[str, Any] | None = None, offline: bool = False) -> ExchangeRateService:
    """Build the exchange rate service, preloading live rates unless offline.

    Args:
        config: Loaded configuration. If None, loads it from the default location.
        offline: Skip the network preload and use static rates.

    Returns:
        Exchange rate service.
    """
    if config is None:
        config = load_config()
    rates = config.get("rates", {})
    service = ExchangeRateService(api_url=rates["api_url"], timeout=float(rates["timeout"]))
    if not offline:
        if not asyncio.run(service.preload_rates()):
            console.print("[dim]Using offline exchange rates[/dim]")
    return service


def normalize_date(value: str | None) -> str:
    """Normalize a user-typed date to YYYY-MM-DD (today if empty).

    DD/MM/YYYY and YYYY-MM-DD are parsed strictly; anything else is handed to
    pandas with day-first parsing.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    if not value:
        return date.today().strftime("%Y-%m-%d")

    parsed = parse_date(value)
    if parsed is not None:
        return parsed.strftime("%Y-%m-%d")

    try:
        return pd.to_datetime(value, dayfirst=True).strftime("%Y-%m-%d")
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Invalid date format: {value}") from e


def format_amount(amount: float, currency: str, tx_type: str | None = None) -> str:
    """Format an amount for display, coloured by transaction type."""
    formatted = f"{to_symbol(currency)}{abs(amount):,.2f}"
    if tx_type == EXPENSE:
        return f"[red]-{formatted}[/red]"
    if tx_type is not None:
        return f"[green]+{formatted}[/green]"
    return f"-{formatted}" if amount < 0 else formatted


def short_id(transaction_id: str) -> str:
    """First 8 characters of an id, enough for prefix lookup."""
    return transaction_id[:8]
