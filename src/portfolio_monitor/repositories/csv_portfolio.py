"""Portfolio holdings loaded from a CSV file."""

import csv
import dataclasses
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from portfolio_monitor.core.exceptions import PortfolioLoadError
from portfolio_monitor.domain.models import Holding, UNKNOWN_SECTOR

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "particulars",
    "purchase_price",
    "quantity",
    "symbol",
]


def _parse_decimal(value: Optional[str]) -> Decimal:
    """Parse a numeric cell; blanks and junk count as zero."""
    text = (value or "").replace(",", "").strip()
    if not text:
        return Decimal("0")
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return Decimal("0")
    if not parsed.is_finite() or parsed < 0:
        return Decimal("0")
    return parsed


def with_portfolio_percentages(holdings: list[Holding]) -> list[Holding]:
    """Return copies of `holdings` with each one's share of total investment filled in."""
    total_investment = sum((h.investment for h in holdings), Decimal("0"))
    return [
        dataclasses.replace(
            h,
            portfolio_percentage=(
                (h.investment / total_investment * 100).quantize(Decimal("0.01"))
                if total_investment > 0
                else Decimal("0")
            ),
        )
        for h in holdings
    ]


class CsvPortfolioLoader:
    """
    Portfolio source backed by a CSV file.

    Expected format: particulars, purchase_price, quantity, symbol[, sector, exchange]
    The file is parsed once by `load()`; `get_holdings()` serves the parsed list.
    Rows without a quantity are section or summary rows and are skipped.
    """

    def __init__(self, path: Path, default_exchange: str = "NSE"):
        self._path = Path(path)
        self._default_exchange = default_exchange
        self._holdings: tuple[Holding, ...] = ()

    def load(self) -> tuple[Holding, ...]:
        """Parse the file and replace the in-memory holdings."""
        if not self._path.exists():
            raise PortfolioLoadError(f"Portfolio file not found: {self._path}")

        logger.info("Loading portfolio from %s", self._path)
        holdings: list[Holding] = []
        try:
            with open(self._path, newline="", encoding="utf-8-sig") as csvfile:
                reader = csv.DictReader(csvfile)

                fieldnames = [name.strip() for name in reader.fieldnames or []]
                missing = set(REQUIRED_COLUMNS) - set(fieldnames)
                if missing:
                    raise PortfolioLoadError(f"Missing required columns: {sorted(missing)}")
                reader.fieldnames = fieldnames

                for row_num, row in enumerate(reader, start=2):  # header is row 1
                    holding = self._parse_row(row, row_num)
                    if holding is not None:
                        holdings.append(holding)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise PortfolioLoadError(f"Failed to read portfolio file {self._path}: {e}") from e

        self._holdings = tuple(with_portfolio_percentages(holdings))
        logger.info("Loaded %d holdings", len(self._holdings))
        blank = sum(1 for h in self._holdings if not h.symbol)
        if blank:
            logger.warning("%d holdings have no symbol and will not be refreshed", blank)
        return self._holdings

    def _parse_row(self, row: dict[str, Optional[str]], row_num: int) -> Optional[Holding]:
        quantity_cell = (row.get("quantity") or "").strip()
        if not quantity_cell:
            logger.debug("Skipping row %d: no quantity", row_num)
            return None

        particulars = (row.get("particulars") or "").strip()
        return Holding(
            symbol=(row.get("symbol") or "").strip().upper(),
            quantity=_parse_decimal(quantity_cell),
            purchase_price=_parse_decimal(row.get("purchase_price")),
            particulars=particulars or f"Holding {row_num - 1}",
            sector=(row.get("sector") or "").strip() or UNKNOWN_SECTOR,
            exchange=(row.get("exchange") or "").strip().upper() or self._default_exchange,
        )

    def get_holdings(self) -> tuple[Holding, ...]:
        return self._holdings
