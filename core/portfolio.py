# core/portfolio.py
from __future__ import annotations
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from core.models import Holding, PortfolioSummary, Valuation, ValuationRecord


def current_value(investment: float, purchase_price: float, price: float) -> Optional[float]:
    """Units bought at purchase_price, marked at price. None if purchase_price is 0."""
    if purchase_price == 0:
        return None
    return (investment / purchase_price) * price


def roi_percent(investment: float, value: Optional[float]) -> Optional[float]:
    if value is None or investment == 0:
        return None
    return ((value - investment) / investment) * 100.0


def summarize(records: Iterable[ValuationRecord]) -> PortfolioSummary:
    total_investment = 0.0
    total_value: Optional[float] = 0.0
    for rec in records:
        total_investment += rec.investment
        if total_value is not None:
            total_value = None if rec.current_value is None else total_value + rec.current_value
    return PortfolioSummary(
        total_investment=total_investment,
        total_current_value=total_value,
        overall_roi_percent=roi_percent(total_investment, total_value),
    )


def valuate(holdings: Sequence[Holding], prices: Mapping[str, float],
            timestamp: datetime) -> Valuation:
    """Compute per-asset records (input order kept) and portfolio totals.

    Never raises on data: a symbol absent from prices is valued at 0 and
    flagged price_missing; duplicate symbols are valued independently.
    """
    records = []
    for h in holdings:
        price = prices.get(h.symbol)
        missing = price is None
        if missing:
            price = 0.0
        value = current_value(h.investment, h.purchase_price, price)
        records.append(ValuationRecord(
            symbol=h.symbol,
            current_price=price,
            investment=h.investment,
            current_value=value,
            roi_percent=roi_percent(h.investment, value),
            price_missing=missing,
        ))
    return Valuation(timestamp=timestamp, records=tuple(records), summary=summarize(records))
