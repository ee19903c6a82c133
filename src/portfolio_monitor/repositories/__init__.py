"""Repository layer - portfolio source abstractions and implementations."""

from portfolio_monitor.repositories.protocols import PortfolioSource
from portfolio_monitor.repositories.csv_portfolio import CsvPortfolioLoader

__all__ = [
    "PortfolioSource",
    "CsvPortfolioLoader",
]
