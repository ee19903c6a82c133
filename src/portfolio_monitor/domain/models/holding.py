"""Holding domain model."""

from dataclasses import dataclass, field
from decimal import Decimal

UNKNOWN_SECTOR = "Unknown"


@dataclass(frozen=True)
class Holding:
    """
    One portfolio position loaded from the portfolio source.

    Immutable once loaded. `investment` is purchase_price x quantity;
    `portfolio_percentage` is this holding's share of total investment.
    """

    symbol: str
    quantity: Decimal
    purchase_price: Decimal
    particulars: str = ""
    sector: str = UNKNOWN_SECTOR
    exchange: str = "NSE"
    portfolio_percentage: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def investment(self) -> Decimal:
        return self.purchase_price * self.quantity
