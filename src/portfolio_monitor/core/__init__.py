"""Core utilities and shared functionality."""

from portfolio_monitor.core.timezone import (
    now_market,
    to_market,
    MARKET_TZ,
)
from portfolio_monitor.core.exceptions import (
    AppError,
    FetchError,
    PortfolioLoadError,
    PortfolioNotReadyError,
)

__all__ = [
    "now_market",
    "to_market",
    "MARKET_TZ",
    "AppError",
    "FetchError",
    "PortfolioLoadError",
    "PortfolioNotReadyError",
]
