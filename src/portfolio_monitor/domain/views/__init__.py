"""View models for service outputs."""

from portfolio_monitor.domain.views.market import PriceQuote, RatioAndEarnings
from portfolio_monitor.domain.views.portfolio import (
    HoldingView,
    SectorSummary,
    PortfolioSnapshot,
)
from portfolio_monitor.domain.views.cache_stats import CacheEntryStats, CacheStats

__all__ = [
    "PriceQuote",
    "RatioAndEarnings",
    "HoldingView",
    "SectorSummary",
    "PortfolioSnapshot",
    "CacheEntryStats",
    "CacheStats",
]
