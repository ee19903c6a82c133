"""Repository protocols."""

from portfolio_monitor.repositories.protocols.portfolio_source import PortfolioSource

__all__ = ["PortfolioSource"]
