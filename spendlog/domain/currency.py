"""Currency tables and conversion arithmetic.

All rates are expressed relative to a single reference base currency, so a
cross rate between any two currencies is (amount / rate[from]) * rate[to].
"""

from typing import Mapping, NamedTuple

from spendlog.domain.models import CurrencyCode


class CurrencyOption(NamedTuple):
    symbol: str
    name: str
    code: str


CURRENCY_OPTIONS: tuple[CurrencyOption, ...] = (
    CurrencyOption("$", "US Dollar (USD)", "USD"),
    CurrencyOption("€", "Euro (EUR)", "EUR"),
    CurrencyOption("£", "British Pound (GBP)", "GBP"),
    CurrencyOption("₹", "Indian Rupee (INR)", "INR"),
    CurrencyOption("¥", "Japanese Yen (JPY)", "JPY"),
    CurrencyOption("¥", "Chinese Yuan (CNY)", "CNY"),
    CurrencyOption("C$", "Canadian Dollar (CAD)", "CAD"),
    CurrencyOption("A$", "Australian Dollar (AUD)", "AUD"),
    CurrencyOption("Fr", "Swiss Franc (CHF)", "CHF"),
    CurrencyOption("R$", "Brazilian Real (BRL)", "BRL"),
)

# "¥" is shared by JPY and CNY; the symbol resolves to JPY
SYMBOL_TO_CODE: dict[str, str] = {
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "₹": "INR",
    "¥": "JPY",
    "C$": "CAD",
    "A$": "AUD",
    "Fr": "CHF",
    "R$": "BRL",
}

REFERENCE_BASE = CurrencyCode("USD")

# Approximate USD-based rates used when no live rates are available
STATIC_RATES: dict[str, float] = {
    "USD": 1.00,
    "EUR": 0.92,
    "GBP": 0.79,
    "INR": 83.00,
    "JPY": 148.00,
    "CNY": 7.10,
    "CAD": 1.35,
    "AUD": 1.52,
    "CHF": 0.88,
    "BRL": 4.95,
}


def to_code(currency: str) -> CurrencyCode:
    """Map a currency symbol to its code. Codes and unknown values pass through."""
    return CurrencyCode(SYMBOL_TO_CODE.get(currency, currency))


def to_symbol(currency: str) -> str:
    """Map a currency code to its display symbol. Unknown values pass through."""
    for option in CURRENCY_OPTIONS:
        if option.code == currency:
            return option.symbol
    return currency


def is_supported_currency(currency: str) -> bool:
    """Check whether a symbol or code is one of the supported currencies."""
    return any(currency in (option.symbol, option.code) for option in CURRENCY_OPTIONS)


def cross_convert(
    amount: float,
    from_code: str,
    target_code: str,
    rates: Mapping[str, float],
) -> float | None:
    """Convert an amount between two currencies through the shared base.

    Args:
        amount: Amount in the source currency.
        from_code: Source currency code.
        target_code: Target currency code.
        rates: Base-relative rates.

    Returns:
        Converted amount, or None if either rate is missing or zero.
    """
    if from_code == target_code:
        return amount

    from_rate = rates.get(from_code)
    to_rate = rates.get(target_code)
    if not from_rate or not to_rate:
        return None

    return (amount / from_rate) * to_rate
