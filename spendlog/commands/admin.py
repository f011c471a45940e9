"""Admin commands for init, display currency and exchange rates."""

import asyncio
import sys

from rich.table import Table

from spendlog.commands.common import console, format_amount, get_rate_service, get_transaction_service
from spendlog.config import create_default_config, get_config_path, get_data_path, load_config
from spendlog.domain.currency import CURRENCY_OPTIONS, to_code
from spendlog.store import StorageError, empty_document, list_backups, write_document


def init_command(force: bool = False) -> None:
    """Create the config file and an empty transactions file."""
    config_path = get_config_path()
    config_exists = config_path.exists()
    data_path = get_data_path(load_config(config_path))
    data_exists = data_path.exists()

    if not force and (config_exists or data_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        if data_exists:
            console.print(f"  Data file already exists: {data_path}")
        console.print("\n[yellow]Use 'spendlog init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print(f"[cyan]Initializing data file at {data_path}...[/cyan]")
        write_document(empty_document(), data_path)
        console.print("[green]✓[/green] Data file initialized")
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")
    if force and data_exists:
        console.print(f"[dim]Previous data kept in {len(list_backups(data_path))} backup(s)[/dim]")


def currency_command(symbol: str | None = None) -> None:
    """Show or set the display currency."""
    service = get_transaction_service()

    try:
        if symbol is None:
            current = service.get_display_currency()
            table = Table(title="Currencies")
            table.add_column("", justify="center")
            table.add_column("Symbol", style="cyan")
            table.add_column("Name")
            for option in CURRENCY_OPTIONS:
                marker = "✓" if current in (option.symbol, option.code) else ""
                table.add_row(marker, option.symbol, option.name)
            console.print(table)
            return

        result = service.set_display_currency(symbol)
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] {result.message}")


def rates_command(amount: float = 1.0, offline: bool = False) -> None:
    """Show exchange rate cache status and conversions from the display currency."""
    config = load_config()
    service = get_transaction_service(config)
    rates = get_rate_service(config, offline)

    try:
        display_currency = service.get_display_currency()
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    status = rates.get_cache_status()
    if status.cached:
        state = "[yellow]expired[/yellow]" if status.expired else "[green]fresh[/green]"
        console.print(f"Live rates ({status.base} base), {status.age_hours}h old, {state}")
    else:
        console.print("[dim]Using offline exchange rates[/dim]")

    table = Table(title=f"{format_amount(amount, display_currency)} in other currencies")
    table.add_column("Currency", style="cyan")
    table.add_column("Amount", justify="right")
    for option in CURRENCY_OPTIONS:
        if option.code == to_code(display_currency):
            continue
        if status.cached:
            converted = asyncio.run(rates.convert(amount, display_currency, option.code))
        else:
            converted = rates.convert_static(amount, display_currency, option.code)
        table.add_row(option.name, format_amount(converted, option.code))
    console.print(table)
