# core/models.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Holding:
    symbol: str
    investment: float
    purchase_price: float


@dataclass(frozen=True)
class Configuration:
    credential: str
    holdings: Tuple[Holding, ...]

    @property
    def symbols(self) -> list[str]:
        return [h.symbol for h in self.holdings]


@dataclass(frozen=True)
class ValuationRecord:
    """One asset's valuation for a run.

    current_value / roi_percent are None when the arithmetic is undefined
    (zero purchase price or zero investment). price_missing marks a symbol
    the quote service did not price; current_price is then 0.0.
    """
    symbol: str
    current_price: float
    investment: float
    current_value: Optional[float]
    roi_percent: Optional[float]
    price_missing: bool = False


@dataclass(frozen=True)
class PortfolioSummary:
    total_investment: float
    total_current_value: Optional[float]
    overall_roi_percent: Optional[float]


@dataclass(frozen=True)
class Valuation:
    timestamp: datetime
    records: Tuple[ValuationRecord, ...]
    summary: PortfolioSummary

    @property
    def missing_symbols(self) -> list[str]:
        return [r.symbol for r in self.records if r.price_missing]
