"""Pydantic schemas for the portfolio snapshot API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from portfolio_monitor.domain.views import HoldingView, PortfolioSnapshot, SectorSummary


class HoldingResponse(BaseModel):
    """A holding with live market data and derived gain/loss."""

    particulars: str
    symbol: str
    exchange: str
    sector: str
    purchase_price: float
    quantity: float
    investment: float
    portfolio_percentage: float
    cmp: float
    present_value: float
    gain_loss: float
    gain_loss_percentage: float
    # Null until the first successful scrape for this symbol
    pe_ratio: Optional[float] = None
    latest_earnings: Optional[str] = None
    last_updated: datetime

    @classmethod
    def from_view(cls, view: HoldingView) -> "HoldingResponse":
        holding = view.holding
        return cls(
            particulars=holding.particulars,
            symbol=holding.symbol,
            exchange=holding.exchange,
            sector=holding.sector,
            purchase_price=holding.purchase_price,
            quantity=holding.quantity,
            investment=holding.investment,
            portfolio_percentage=holding.portfolio_percentage,
            cmp=view.cmp,
            present_value=view.present_value,
            gain_loss=view.gain_loss,
            gain_loss_percentage=view.gain_loss_percentage,
            pe_ratio=view.pe_ratio,
            latest_earnings=view.latest_earnings,
            last_updated=view.last_updated,
        )


class SectorSummaryResponse(BaseModel):
    """Totals for one sector plus its holdings."""

    sector: str
    total_investment: float
    total_present_value: float
    gain_loss: float
    gain_loss_percentage: float
    holdings: list[HoldingResponse]

    @classmethod
    def from_summary(cls, summary: SectorSummary) -> "SectorSummaryResponse":
        return cls(
            sector=summary.sector,
            total_investment=summary.total_investment,
            total_present_value=summary.total_present_value,
            gain_loss=summary.gain_loss,
            gain_loss_percentage=summary.gain_loss_percentage,
            holdings=[HoldingResponse.from_view(v) for v in summary.holdings],
        )


class PortfolioSummaryResponse(BaseModel):
    """Portfolio totals and per-sector breakdown."""

    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_percentage: float
    sectors: list[SectorSummaryResponse]
    last_updated: datetime

    @classmethod
    def from_snapshot(cls, snapshot: PortfolioSnapshot) -> "PortfolioSummaryResponse":
        return cls(
            total_investment=snapshot.total_investment,
            total_present_value=snapshot.total_present_value,
            total_gain_loss=snapshot.total_gain_loss,
            total_gain_loss_percentage=snapshot.total_gain_loss_percentage,
            sectors=[SectorSummaryResponse.from_summary(s) for s in snapshot.sectors],
            last_updated=snapshot.last_updated,
        )


class PortfolioEnvelope(BaseModel):
    """Response for GET /api/portfolio."""

    success: bool = True
    data: PortfolioSummaryResponse
