"""Market data payloads returned by fetchers and stored in the cache."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PriceQuote:
    """Current market price for a symbol."""

    symbol: str
    price: Decimal
    as_of: datetime


@dataclass(frozen=True)
class RatioAndEarnings:
    """P/E ratio and latest earnings date; either may be missing."""

    symbol: str
    pe_ratio: Optional[Decimal] = None
    latest_earnings: Optional[str] = None
