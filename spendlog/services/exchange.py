"""Currency conversion with cached remote rates and a static fallback.

Rates are resolved in three tiers: a cache entry younger than 24 hours, a
fresh fetch from the remote endpoint, and finally the bundled static table.
Network failures are logged and never raised to the caller.
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

from spendlog.config import DEFAULT_RATES_API_URL, DEFAULT_RATES_TIMEOUT
from spendlog.domain.currency import REFERENCE_BASE, STATIC_RATES, cross_convert, to_code
from spendlog.exchange_api import RateFetchError, fetch_latest_rates
from spendlog.logging_setup import get_logger

logger = get_logger("spendlog.services.exchange")

CACHE_DURATION_SECONDS = 24 * 60 * 60

RateFetcher = Callable[[str, float], dict[str, float]]


@dataclass
class RateCache:
    """The single cache slot."""

    rates: dict[str, float] | None = None
    base_currency: str | None = None
    timestamp: float | None = None


@dataclass(frozen=True)
class CacheStatus:
    """Diagnostic view of the cache slot."""

    cached: bool
    age_hours: int | None = None
    base: str | None = None
    expired: bool | None = None


class ExchangeRateService:
    """Converts amounts between currencies.

    Each instance owns its own cache, so independent instances never share
    rates.

    Args:
        api_url: Remote endpoint returning USD-based rates.
        timeout: Request timeout in seconds.
        fetcher: Function (url, timeout) -> rates. Defaults to the HTTP client.
        clock: Function returning the current time in seconds.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_RATES_API_URL,
        timeout: float = DEFAULT_RATES_TIMEOUT,
        fetcher: RateFetcher | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._fetcher = fetcher or fetch_latest_rates
        self._clock = clock or time.time
        self._cache = RateCache()

    def _cached_rates(self, base_currency: str) -> dict[str, float] | None:
        cache = self._cache
        if not cache.rates or cache.timestamp is None or cache.base_currency != base_currency:
            return None
        if self._clock() - cache.timestamp > CACHE_DURATION_SECONDS:
            return None
        return cache.rates

    async def fetch_rates(self) -> dict[str, float] | None:
        """Fetch rates once and replace the cache on success.

        Returns:
            Fetched rates, or None if the fetch failed.
        """
        try:
            rates = await asyncio.to_thread(self._fetcher, self.api_url, self.timeout)
        except RateFetchError as e:
            logger.warning("Failed to fetch exchange rates: %s", e)
            return None

        self._cache = RateCache(rates=rates, base_currency=REFERENCE_BASE, timestamp=self._clock())
        logger.debug("Cached %d exchange rates", len(rates))
        return rates

    async def get_rates(self) -> dict[str, float]:
        """Get base-relative rates: fresh cache, then remote, then static table."""
        cached = self._cached_rates(REFERENCE_BASE)
        if cached:
            return cached

        fetched = await self.fetch_rates()
        if fetched:
            return fetched

        logger.info("Using static fallback rates")
        return dict(STATIC_RATES)

    def _convert_with(self, amount: float, from_code: str, target_code: str, rates: dict[str, float]) -> float:
        converted = cross_convert(amount, from_code, target_code, rates)
        if converted is None:
            logger.warning("No rate found for %s or %s, using 1:1", from_code, target_code)
            return amount
        return converted

    async def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        """Convert an amount, refreshing rates over the network if needed.

        Args:
            amount: Amount in the source currency.
            from_currency: Source currency symbol or code.
            to_currency: Target currency symbol or code.

        Returns:
            Converted amount. Unchanged if either rate is unknown.
        """
        from_code = to_code(from_currency)
        target_code = to_code(to_currency)
        if from_code == target_code:
            return amount

        rates = await self.get_rates()
        return self._convert_with(amount, from_code, target_code, rates)

    def convert_static(self, amount: float, from_currency: str, to_currency: str) -> float:
        """Convert without network access.

        Uses whatever rates are already cached (even if stale), otherwise the
        static table.
        """
        from_code = to_code(from_currency)
        target_code = to_code(to_currency)
        if from_code == target_code:
            return amount

        rates = self._cache.rates or STATIC_RATES
        return self._convert_with(amount, from_code, target_code, rates)

    async def preload_rates(self) -> bool:
        """Try one fetch so later synchronous conversions use live rates.

        Returns:
            True if live rates were loaded.
        """
        rates = await self.fetch_rates()
        if rates is None:
            logger.warning("Could not preload rates, using static fallback")
            return False
        return True

    def get_cache_status(self) -> CacheStatus:
        """Report whether rates are cached, their age in whole hours and base."""
        cache = self._cache
        if cache.timestamp is None:
            return CacheStatus(cached=False)

        age = self._clock() - cache.timestamp
        return CacheStatus(
            cached=True,
            age_hours=int(age // 3600),
            base=cache.base_currency,
            expired=age > CACHE_DURATION_SECONDS,
        )

    def clear_cache(self) -> None:
        """Empty the cache slot."""
        self._cache = RateCache()
