"""Portfolio snapshot assembled from holdings and cached market data."""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable

from portfolio_monitor.core.exceptions import PortfolioNotReadyError
from portfolio_monitor.core.timezone import now_market, to_market
from portfolio_monitor.domain.models import CacheKind, Holding, UNKNOWN_SECTOR, cache_key
from portfolio_monitor.domain.views import HoldingView, PortfolioSnapshot, SectorSummary
from portfolio_monitor.repositories.protocols import PortfolioSource
from portfolio_monitor.services.cache_store import TtlCacheStore

_ZERO = Decimal("0")
_CENT = Decimal("0.01")


def gain_loss_percentage(gain_loss: Decimal, investment: Decimal) -> Decimal:
    """gain_loss / investment x 100, rounded to 2 places; 0 when nothing was invested."""
    if investment <= 0:
        return _ZERO
    return (gain_loss / investment * 100).quantize(_CENT)


class SnapshotAssembler:
    """
    Builds the enriched portfolio view on demand.

    Only stale cache reads are used, so a snapshot is always available:
    holdings without a cached price are valued at their purchase price.
    Never triggers or waits for a refresh.
    """

    def __init__(
        self,
        cache: TtlCacheStore,
        portfolio: PortfolioSource,
        clock: Callable[[], datetime] = now_market,
    ):
        self._cache = cache
        self._portfolio = portfolio
        self._clock = clock

    def get_snapshot(self) -> PortfolioSnapshot:
        """
        Return the current snapshot.

        Raises PortfolioNotReadyError when no holdings are loaded.
        """
        holdings = self._portfolio.get_holdings()
        if not holdings:
            raise PortfolioNotReadyError()

        views = [self.enrich(h) for h in holdings]
        return summarize(group_by_sector(views), self._clock())

    def enrich(self, holding: Holding) -> HoldingView:
        """Combine one holding with its cached price, P/E and earnings date."""
        cmp_entry = self._cache.get_stale_entry(cache_key(CacheKind.CMP, holding.symbol))
        if cmp_entry is not None:
            cmp = cmp_entry.value.price
            last_updated = to_market(cmp_entry.updated_at)
        else:
            cmp = holding.purchase_price
            last_updated = self._clock()

        present_value = cmp * holding.quantity
        gain_loss = present_value - holding.investment

        return HoldingView(
            holding=holding,
            cmp=cmp,
            present_value=present_value,
            gain_loss=gain_loss,
            gain_loss_percentage=gain_loss_percentage(gain_loss, holding.investment),
            last_updated=last_updated,
            pe_ratio=self._cache.get_stale(cache_key(CacheKind.PE_RATIO, holding.symbol)),
            latest_earnings=self._cache.get_stale(cache_key(CacheKind.EARNINGS, holding.symbol)),
        )


def group_by_sector(views: Iterable[HoldingView]) -> list[SectorSummary]:
    """Partition holdings by sector in order of first appearance and total each group."""
    groups: dict[str, list[HoldingView]] = {}
    for view in views:
        groups.setdefault(view.holding.sector or UNKNOWN_SECTOR, []).append(view)

    summaries = []
    for sector, members in groups.items():
        total_investment = sum((v.holding.investment for v in members), _ZERO)
        total_present_value = sum((v.present_value for v in members), _ZERO)
        gain_loss = total_present_value - total_investment
        summaries.append(
            SectorSummary(
                sector=sector,
                total_investment=total_investment,
                total_present_value=total_present_value,
                gain_loss=gain_loss,
                gain_loss_percentage=gain_loss_percentage(gain_loss, total_investment),
                holdings=members,
            )
        )
    return summaries


def summarize(sectors: list[SectorSummary], as_of: datetime) -> PortfolioSnapshot:
    """Roll sector totals up into portfolio totals."""
    total_investment = sum((s.total_investment for s in sectors), _ZERO)
    total_present_value = sum((s.total_present_value for s in sectors), _ZERO)
    total_gain_loss = total_present_value - total_investment
    return PortfolioSnapshot(
        total_investment=total_investment,
        total_present_value=total_present_value,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percentage=gain_loss_percentage(total_gain_loss, total_investment),
        last_updated=as_of,
        sectors=sectors,
    )
