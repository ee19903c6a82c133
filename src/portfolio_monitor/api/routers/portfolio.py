"""Portfolio snapshot endpoint."""

import logging

from fastapi import APIRouter, Depends

from portfolio_monitor.api.deps import get_snapshot_assembler
from portfolio_monitor.api.schemas import PortfolioEnvelope, PortfolioSummaryResponse
from portfolio_monitor.services import SnapshotAssembler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["portfolio"])


@router.get("/portfolio", response_model=PortfolioEnvelope)
def get_portfolio(
    assembler: SnapshotAssembler = Depends(get_snapshot_assembler),
) -> PortfolioEnvelope:
    """
    Return holdings grouped by sector with market data and gain/loss.

    Served from cache only, possibly stale; holdings never priced yet use
    their purchase price. Responds 503 until the portfolio is loaded.
    """
    logger.debug("API request: GET /api/portfolio")
    snapshot = assembler.get_snapshot()
    return PortfolioEnvelope(data=PortfolioSummaryResponse.from_snapshot(snapshot))
