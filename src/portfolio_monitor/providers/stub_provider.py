"""Stub market data provider for offline/testing use."""

import random
from decimal import Decimal
from typing import Optional

from portfolio_monitor.core.timezone import now_market
from portfolio_monitor.domain.views import PriceQuote, RatioAndEarnings


# Deterministic fake data for common NSE symbols: (price, P/E, earnings date)
_STUB_DATA: dict[str, tuple[Decimal, Decimal, str]] = {
    "RELIANCE": (Decimal("2945.60"), Decimal("28.41"), "Jan 16, 2025"),
    "TCS": (Decimal("4102.35"), Decimal("31.07"), "Jan 9, 2025"),
    "HDFCBANK": (Decimal("1718.90"), Decimal("19.52"), "Jan 22, 2025"),
    "INFY": (Decimal("1893.15"), Decimal("29.88"), "Jan 16, 2025"),
    "ICICIBANK": (Decimal("1264.05"), Decimal("18.73"), "Jan 25, 2025"),
    "TATAPOWER": (Decimal("391.20"), Decimal("33.64"), "Feb 5, 2025"),
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Serves as both price and ratio fetcher. Uses predefined data for common
    symbols; generates seeded random prices for unknown symbols and leaves
    their P/E and earnings date empty. The exchange is ignored.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)

    def fetch_price(self, symbol: str, exchange: Optional[str] = None) -> PriceQuote:
        upper_symbol = symbol.upper()
        if upper_symbol in _STUB_DATA:
            price = _STUB_DATA[upper_symbol][0]
        else:
            price = Decimal(str(50 + self._rng.random() * 2000)).quantize(Decimal("0.01"))
        return PriceQuote(symbol=symbol, price=price, as_of=now_market())

    def fetch_ratio_and_earnings(
        self, symbol: str, exchange: Optional[str] = None
    ) -> RatioAndEarnings:
        upper_symbol = symbol.upper()
        if upper_symbol not in _STUB_DATA:
            return RatioAndEarnings(symbol=symbol)
        _, pe_ratio, earnings = _STUB_DATA[upper_symbol]
        return RatioAndEarnings(symbol=symbol, pe_ratio=pe_ratio, latest_earnings=earnings)

    def close(self) -> None:
        """Nothing to release."""
