"""View models for the assembled portfolio snapshot."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from portfolio_monitor.domain.models import Holding


@dataclass
class HoldingView:
    """A holding enriched with cached market data and derived metrics."""

    holding: Holding
    cmp: Decimal
    present_value: Decimal
    gain_loss: Decimal
    gain_loss_percentage: Decimal
    last_updated: datetime
    pe_ratio: Optional[Decimal] = None
    latest_earnings: Optional[str] = None


@dataclass
class SectorSummary:
    """Totals for all holdings sharing a sector label."""

    sector: str
    total_investment: Decimal
    total_present_value: Decimal
    gain_loss: Decimal
    gain_loss_percentage: Decimal
    holdings: list[HoldingView] = field(default_factory=list)


@dataclass
class PortfolioSnapshot:
    """Portfolio-level totals over all sectors."""

    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percentage: Decimal
    last_updated: datetime
    sectors: list[SectorSummary] = field(default_factory=list)
