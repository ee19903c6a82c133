"""Application context owning the long-lived service instances.

One context is built per process and shared by the HTTP layer and the
background scheduler. Nothing here is a module-level singleton; tests build
their own context with fakes.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from portfolio_monitor.config.settings import Settings, get_settings
from portfolio_monitor.core.timezone import now_market
from portfolio_monitor.providers import (
    GoogleFinanceRatioFetcher,
    PriceFetcher,
    RatioFetcher,
    StubMarketDataProvider,
    YahooPriceFetcher,
)
from portfolio_monitor.repositories import CsvPortfolioLoader, PortfolioSource
from portfolio_monitor.services import (
    RefreshCoordinator,
    RefreshScheduler,
    RefreshSettings,
    SnapshotAssembler,
    TtlCacheStore,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing access to all services.

    Wires one cache store, one refresh coordinator, one scheduler and one
    snapshot assembler around the configured portfolio source and fetchers.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        portfolio_source: Optional[PortfolioSource] = None,
        price_fetcher: Optional[PriceFetcher] = None,
        ratio_fetcher: Optional[RatioFetcher] = None,
        clock: Callable[[], datetime] = now_market,
    ):
        """
        Initialize application context.

        Args:
            settings: Settings to use. Defaults to the global settings.
            portfolio_source: Holdings source. Defaults to the CSV loader at
                settings.portfolio_file_path.
            price_fetcher: Price source. Defaults by settings.market_data_provider.
            ratio_fetcher: P/E and earnings source. Defaults likewise.
            clock: Time source shared by cache, coordinator and assembler.
        """
        self.settings = settings or get_settings()
        self.portfolio = portfolio_source or CsvPortfolioLoader(
            self.settings.portfolio_file_path,
            default_exchange=self.settings.default_exchange,
        )
        self.price_fetcher: PriceFetcher = price_fetcher or self._build_price_fetcher()
        self.ratio_fetcher: RatioFetcher = ratio_fetcher or self._build_ratio_fetcher()

        self.cache = TtlCacheStore(clock=clock)
        self.coordinator = RefreshCoordinator(
            cache=self.cache,
            portfolio=self.portfolio,
            price_fetcher=self.price_fetcher,
            ratio_fetcher=self.ratio_fetcher,
            settings=RefreshSettings(
                cmp_ttl_seconds=self.settings.cache_cmp_ttl,
                pe_ratio_ttl_seconds=self.settings.cache_pe_ratio_ttl,
                earnings_ttl_seconds=self.settings.cache_earnings_ttl,
                interval_seconds=self.settings.scraper_interval_seconds,
                price_delay_seconds=self.settings.price_request_delay_seconds,
                ratio_delay_seconds=self.settings.ratio_request_delay_seconds,
            ),
            clock=clock,
        )
        self.scheduler = RefreshScheduler(
            job=self.coordinator.try_run_cycle,
            interval_seconds=self.settings.scraper_interval_seconds,
            clock=clock,
        )
        self.snapshots = SnapshotAssembler(cache=self.cache, portfolio=self.portfolio, clock=clock)

    def _build_price_fetcher(self) -> PriceFetcher:
        if self.settings.market_data_provider == "stub":
            return StubMarketDataProvider()
        return YahooPriceFetcher(
            default_exchange=self.settings.default_exchange,
            timeout_seconds=self.settings.scraper_timeout_seconds,
        )

    def _build_ratio_fetcher(self) -> RatioFetcher:
        if self.settings.market_data_provider == "stub":
            return StubMarketDataProvider()
        return GoogleFinanceRatioFetcher(
            default_exchange=self.settings.default_exchange,
            timeout_seconds=self.settings.scraper_timeout_seconds,
        )

    def start(self) -> None:
        """
        Load the portfolio and start background refreshes.

        Raises PortfolioLoadError if the portfolio file cannot be loaded.
        The first refresh runs in the background, so this returns at once.
        """
        load = getattr(self.portfolio, "load", None)
        if load is not None:
            holdings = load()
            logger.info("Portfolio ready with %d holdings", len(holdings))

        if self.settings.scheduler_enabled:
            self.scheduler.start()
        else:
            logger.info("Background refresh disabled by configuration")

    def close(self) -> None:
        """Stop the scheduler and release fetcher resources."""
        self.scheduler.stop()
        self.price_fetcher.close()
        if self.ratio_fetcher is not self.price_fetcher:
            self.ratio_fetcher.close()
