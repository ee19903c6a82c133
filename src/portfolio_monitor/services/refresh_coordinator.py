"""Background refresh of cached market data."""

import dataclasses
import logging
import time
from datetime import datetime, timedelta
from typing import Callable, Optional

from portfolio_monitor.core.exceptions import FetchError
from portfolio_monitor.core.timezone import now_market
from portfolio_monitor.domain.models import CacheKind, RefreshStatus, cache_key
from portfolio_monitor.providers.market_data_provider import PriceFetcher, RatioFetcher
from portfolio_monitor.repositories.protocols import PortfolioSource
from portfolio_monitor.services.cache_store import TtlCacheStore

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RefreshSettings:
    """TTLs and pacing for one refresh cycle."""

    cmp_ttl_seconds: float = 30
    pe_ratio_ttl_seconds: float = 21600
    earnings_ttl_seconds: float = 86400
    interval_seconds: float = 15 * 60
    price_delay_seconds: float = 0.5
    ratio_delay_seconds: float = 2.0


class RefreshCoordinator:
    """
    Runs refresh cycles: fetch prices, then P/E and earnings, into the cache.

    At most one cycle runs at a time. A trigger that arrives while a cycle is
    in progress is dropped, not queued. Fetches within a cycle are sequential
    with a fixed delay between requests to stay under source rate limits.
    A failure for one symbol is logged and never stops the others.
    """

    def __init__(
        self,
        cache: TtlCacheStore,
        portfolio: PortfolioSource,
        price_fetcher: PriceFetcher,
        ratio_fetcher: RatioFetcher,
        settings: RefreshSettings = RefreshSettings(),
        clock: Callable[[], datetime] = now_market,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._cache = cache
        self._portfolio = portfolio
        self._price_fetcher = price_fetcher
        self._ratio_fetcher = ratio_fetcher
        self._settings = settings
        self._clock = clock
        self._sleep = sleep
        self._status = RefreshStatus()

    def try_run_cycle(self) -> bool:
        """
        Run one refresh cycle unless another is already running.

        Returns True if this call ran the cycle, False if it was skipped.
        Errors from the cycle body are recorded in status, never raised.
        """
        if not self._cache.try_lock_refresh():
            logger.info("Refresh already running, skipping this cycle")
            return False

        try:
            self._status.is_running = True
            self._status.last_run_at = self._clock()
            logger.info("Starting refresh cycle")
            self._run_cycle()
            self._status.last_error = None
            logger.info("Refresh cycle completed")
        except Exception as e:
            logger.exception("Refresh cycle failed")
            self._status.last_error = str(e) or type(e).__name__
        finally:
            self._status.is_running = False
            self._status.next_run_at = self._clock() + timedelta(
                seconds=self._settings.interval_seconds
            )
            self._cache.unlock_refresh()
        return True

    def get_status(self) -> RefreshStatus:
        """Return a copy of the current status for monitoring."""
        return dataclasses.replace(self._status)

    def _run_cycle(self) -> None:
        holdings = self._portfolio.get_holdings()
        if not holdings:
            logger.warning("No holdings in portfolio, nothing to refresh")
            return

        # symbol -> exchange of its first holding, in first-seen order
        targets: dict[str, str] = {}
        for holding in holdings:
            if holding.symbol:
                targets.setdefault(holding.symbol, holding.exchange)
        if not targets:
            logger.error("No symbols found in portfolio; check the symbol column")
            return
        logger.info("Refreshing %d symbols: %s", len(targets), ", ".join(targets))

        prices = self._fetch_all(
            self._price_fetcher.fetch_price, targets, self._settings.price_delay_seconds
        )
        for symbol, quote in prices.items():
            self._cache.put(cache_key(CacheKind.CMP, symbol), quote, self._settings.cmp_ttl_seconds)
        logger.info("Price refresh: %d of %d succeeded", len(prices), len(targets))
        if not prices:
            logger.warning("No prices were fetched this cycle")

        ratios = self._fetch_all(
            self._ratio_fetcher.fetch_ratio_and_earnings,
            targets,
            self._settings.ratio_delay_seconds,
        )
        for symbol, data in ratios.items():
            if data.pe_ratio is not None:
                self._cache.put(
                    cache_key(CacheKind.PE_RATIO, symbol),
                    data.pe_ratio,
                    self._settings.pe_ratio_ttl_seconds,
                )
            if data.latest_earnings is not None:
                self._cache.put(
                    cache_key(CacheKind.EARNINGS, symbol),
                    data.latest_earnings,
                    self._settings.earnings_ttl_seconds,
                )
        logger.info("P/E and earnings refresh: %d of %d succeeded", len(ratios), len(targets))

    def _fetch_all(self, fetch: Callable, targets: dict[str, str], delay: float) -> dict:
        """Fetch each symbol in turn, pausing `delay` seconds between requests."""
        results = {}
        for index, (symbol, exchange) in enumerate(targets.items()):
            if index:
                self._sleep(delay)
            result = self._fetch_one(fetch, symbol, exchange)
            if result is not None:
                results[symbol] = result
        return results

    @staticmethod
    def _fetch_one(fetch: Callable, symbol: str, exchange: str) -> Optional[object]:
        try:
            return fetch(symbol, exchange)
        except FetchError as e:
            logger.warning("%s", e.message)
        except Exception:
            logger.exception("Unexpected error fetching %s", symbol)
        return None
