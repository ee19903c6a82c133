"""
Pytest configuration and fixtures for portfolio monitor tests.

This module provides:
- A controllable clock in market time
- In-memory portfolio sources and holding factories
- Deterministic, failing and recording market data fetchers
- Service fixtures wired to the fakes
- A FastAPI test client backed by a test AppContext
"""

import threading
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from portfolio_monitor.app_context import AppContext
from portfolio_monitor.config.settings import Settings, reset_settings, set_settings
from portfolio_monitor.core.exceptions import FetchError
from portfolio_monitor.core.timezone import MARKET_TZ
from portfolio_monitor.domain.models import Holding
from portfolio_monitor.domain.views import PriceQuote, RatioAndEarnings
from portfolio_monitor.main import create_app
from portfolio_monitor.repositories.csv_portfolio import with_portfolio_percentages
from portfolio_monitor.services import (
    RefreshCoordinator,
    RefreshSettings,
    SnapshotAssembler,
    TtlCacheStore,
)


# =============================================================================
# TIME HELPERS
# =============================================================================


def market_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in the market timezone."""
    return MARKET_TZ.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Manually advanced clock; call it to read the current time."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return market_datetime(2024, 6, 14, 11, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    """Provide a clock that only moves when a test advances it."""
    return FakeClock(fixed_now)


# =============================================================================
# PORTFOLIO FIXTURES
# =============================================================================


def make_holding(
    symbol: str,
    quantity: str,
    purchase_price: str,
    sector: str = "Unknown",
    particulars: Optional[str] = None,
    exchange: str = "NSE",
) -> Holding:
    """Helper to create a Holding from string amounts."""
    return Holding(
        symbol=symbol,
        quantity=Decimal(quantity),
        purchase_price=Decimal(purchase_price),
        particulars=particulars or symbol,
        sector=sector,
        exchange=exchange,
    )


class StaticPortfolioSource:
    """Portfolio source serving a fixed list of holdings."""

    def __init__(self, holdings: Sequence[Holding] = ()):
        self.holdings = tuple(with_portfolio_percentages(list(holdings)))
        self.calls = 0

    def get_holdings(self) -> tuple[Holding, ...]:
        self.calls += 1
        return self.holdings


@pytest.fixture
def sample_holdings() -> list[Holding]:
    """Three holdings across two sectors."""
    return [
        make_holding("RELIANCE", "10", "2500.00", sector="Energy"),
        make_holding("TCS", "5", "3800.00", sector="Technology"),
        make_holding("INFY", "20", "1500.00", sector="Technology"),
    ]


@pytest.fixture
def portfolio_source(sample_holdings) -> StaticPortfolioSource:
    """Provide a portfolio source with the sample holdings."""
    return StaticPortfolioSource(sample_holdings)


@pytest.fixture
def empty_portfolio_source() -> StaticPortfolioSource:
    """Provide a portfolio source with no holdings."""
    return StaticPortfolioSource([])


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic price and ratio fetcher for testing.

    Known symbols return fixed data; unknown symbols raise FetchError.
    Every call is recorded in `calls` as (kind, symbol) and the exchange
    requested for each symbol in `exchanges`.
    """

    FIXED_PRICES = {
        "RELIANCE": Decimal("2945.60"),
        "TCS": Decimal("4102.35"),
        "INFY": Decimal("1893.15"),
    }
    FIXED_RATIOS = {
        "RELIANCE": (Decimal("28.41"), "Jan 16, 2025"),
        "TCS": (Decimal("31.07"), None),  # earnings date missing on page
        "INFY": (None, "Jan 16, 2025"),  # P/E missing on page
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or market_datetime(2024, 6, 14, 11, 0, 0)
        self.calls: list[tuple[str, str]] = []
        self.exchanges: dict[str, Optional[str]] = {}
        self.closed = False

    def fetch_price(self, symbol: str, exchange: Optional[str] = None) -> PriceQuote:
        self.calls.append(("price", symbol))
        self.exchanges[symbol] = exchange
        if symbol not in self.FIXED_PRICES:
            raise FetchError(symbol, "no price in response")
        return PriceQuote(symbol=symbol, price=self.FIXED_PRICES[symbol], as_of=self._as_of)

    def fetch_ratio_and_earnings(
        self, symbol: str, exchange: Optional[str] = None
    ) -> RatioAndEarnings:
        self.calls.append(("ratio", symbol))
        self.exchanges[symbol] = exchange
        if symbol not in self.FIXED_RATIOS:
            raise FetchError(symbol, "HTTP 404")
        pe_ratio, earnings = self.FIXED_RATIOS[symbol]
        return RatioAndEarnings(symbol=symbol, pe_ratio=pe_ratio, latest_earnings=earnings)

    def close(self) -> None:
        self.closed = True


class FailingMarketProvider:
    """Fetcher whose every request fails like a network outage."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def fetch_price(self, symbol: str, exchange: Optional[str] = None) -> PriceQuote:
        self.calls.append(("price", symbol))
        raise FetchError(symbol, "Network unavailable")

    def fetch_ratio_and_earnings(
        self, symbol: str, exchange: Optional[str] = None
    ) -> RatioAndEarnings:
        self.calls.append(("ratio", symbol))
        raise FetchError(symbol, "Network unavailable")

    def close(self) -> None:
        pass


class BlockingMarketProvider(DeterministicMarketProvider):
    """Fetcher that holds its first price request until released."""

    def __init__(self):
        super().__init__()
        self.started = threading.Event()
        self.release = threading.Event()

    def fetch_price(self, symbol: str, exchange: Optional[str] = None) -> PriceQuote:
        self.started.set()
        self.release.wait(timeout=5)
        return super().fetch_price(symbol, exchange)


class SleepRecorder:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def deterministic_provider() -> DeterministicMarketProvider:
    """Provide deterministic market data fetcher."""
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market data fetcher that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    """Provide a no-op sleep that records pacing delays."""
    return SleepRecorder()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def refresh_settings() -> RefreshSettings:
    """Refresh settings with the production TTLs and pacing."""
    return RefreshSettings(
        cmp_ttl_seconds=30,
        pe_ratio_ttl_seconds=21600,
        earnings_ttl_seconds=86400,
        interval_seconds=15 * 60,
        price_delay_seconds=0.5,
        ratio_delay_seconds=2.0,
    )


@pytest.fixture
def cache_store(clock) -> TtlCacheStore:
    """Provide an empty cache store on the test clock."""
    return TtlCacheStore(clock=clock)


@pytest.fixture
def coordinator_factory(
    cache_store,
    portfolio_source,
    deterministic_provider,
    refresh_settings,
    clock,
    sleep_recorder,
) -> Callable[..., RefreshCoordinator]:
    """Factory for coordinators; defaults to the deterministic provider."""

    def _create(portfolio=None, price_fetcher=None, ratio_fetcher=None) -> RefreshCoordinator:
        return RefreshCoordinator(
            cache=cache_store,
            portfolio=portfolio or portfolio_source,
            price_fetcher=price_fetcher or deterministic_provider,
            ratio_fetcher=ratio_fetcher or deterministic_provider,
            settings=refresh_settings,
            clock=clock,
            sleep=sleep_recorder,
        )

    return _create


@pytest.fixture
def coordinator(coordinator_factory) -> RefreshCoordinator:
    """Provide a coordinator over the sample portfolio."""
    return coordinator_factory()


@pytest.fixture
def assembler(cache_store, portfolio_source, clock) -> SnapshotAssembler:
    """Provide a snapshot assembler over the sample portfolio."""
    return SnapshotAssembler(cache=cache_store, portfolio=portfolio_source, clock=clock)


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings for in-process API tests: no scheduler, no network."""
    settings = Settings(
        scheduler_enabled=False,
        market_data_provider="stub",
        price_request_delay_seconds=0,
        ratio_request_delay_seconds=0,
    )
    set_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture
def app_context(test_settings, portfolio_source, deterministic_provider, clock) -> AppContext:
    """Provide an AppContext wired to test doubles."""
    return AppContext(
        settings=test_settings,
        portfolio_source=portfolio_source,
        price_fetcher=deterministic_provider,
        ratio_fetcher=deterministic_provider,
        clock=clock,
    )


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client over the test AppContext."""
    app = create_app(context=app_context)
    with TestClient(app) as c:
        yield c


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
