"""Market data fetcher protocols."""

from typing import Optional, Protocol

from portfolio_monitor.domain.views import PriceQuote, RatioAndEarnings


class PriceFetcher(Protocol):
    """
    Protocol for current-price sources.

    `exchange` overrides the fetcher's default exchange for this symbol.
    One attempt per call, bounded by the implementation's own timeout.
    Implementations raise FetchError on network failure, timeout, or a
    response without a usable price.
    """

    def fetch_price(self, symbol: str, exchange: Optional[str] = None) -> PriceQuote:
        ...

    def close(self) -> None:
        """Release network resources."""
        ...


class RatioFetcher(Protocol):
    """
    Protocol for P/E ratio and earnings-date sources.

    `exchange` overrides the fetcher's default exchange for this symbol.
    A successful result may carry only one of the two fields.
    Implementations raise FetchError when the page cannot be fetched.
    """

    def fetch_ratio_and_earnings(
        self, symbol: str, exchange: Optional[str] = None
    ) -> RatioAndEarnings:
        ...

    def close(self) -> None:
        """Release network resources."""
        ...
