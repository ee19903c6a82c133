"""Portfolio source protocol."""

from typing import Protocol, Sequence

from portfolio_monitor.domain.models import Holding


class PortfolioSource(Protocol):
    """Read-only access to the static holding list."""

    def get_holdings(self) -> Sequence[Holding]:
        """Return holdings in source order. Empty until loaded."""
        ...
