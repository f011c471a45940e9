"""Exchange rate API interactions."""

import math
from typing import Any

import requests

from spendlog.config import DEFAULT_RATES_API_URL, DEFAULT_RATES_TIMEOUT


class RateFetchError(Exception):
    """Rates could not be retrieved from the remote source."""


def _parse_rates(body: Any) -> dict[str, float]:
    if not isinstance(body, dict) or not isinstance(body.get("rates"), dict):
        raise RateFetchError("Response has no 'rates' object")

    rates: dict[str, float] = {}
    for code, value in body["rates"].items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        try:
            rate = float(value)
        except OverflowError:
            continue
        if math.isfinite(rate) and rate > 0:
            rates[str(code)] = rate

    if not rates:
        raise RateFetchError("Response contains no usable rates")
    return rates


def fetch_latest_rates(
    url: str = DEFAULT_RATES_API_URL,
    timeout: float = DEFAULT_RATES_TIMEOUT,
) -> dict[str, float]:
    """Fetch the latest USD-based exchange rates.

    Args:
        url: Rate endpoint returning a JSON body with a ``rates`` object.
        timeout: Request timeout in seconds.

    Returns:
        Mapping of currency code to rate relative to USD.

    Raises:
        RateFetchError: If the request fails, returns a non-success status or
            the body is malformed.
    """
    headers = {"Accept": "application/json"}
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
        body = response.json()
    except requests.RequestException as e:
        raise RateFetchError(f"Rate request failed: {e}") from e
    except ValueError as e:
        raise RateFetchError(f"Rate response is not JSON: {e}") from e

    return _parse_rates(body)
