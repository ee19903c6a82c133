"""Market data providers module."""

from portfolio_monitor.providers.market_data_provider import PriceFetcher, RatioFetcher
from portfolio_monitor.providers.yahoo_provider import YahooPriceFetcher
from portfolio_monitor.providers.google_finance_provider import GoogleFinanceRatioFetcher
from portfolio_monitor.providers.stub_provider import StubMarketDataProvider

__all__ = [
    "PriceFetcher",
    "RatioFetcher",
    "YahooPriceFetcher",
    "GoogleFinanceRatioFetcher",
    "StubMarketDataProvider",
]
