# report/console.py
from __future__ import annotations
from typing import Optional, Sequence

import plotext as plt
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.models import PortfolioSummary, Valuation, ValuationRecord
from utils.logging import get_logger

log = get_logger("report")

CHART_WIDTH = 80
CHART_HEIGHT = 20
NA = "n/a"


def _money(v: Optional[float]) -> str:
    return NA if v is None else f"${v:.2f}"


def _pct(v: Optional[float]) -> str:
    return NA if v is None else f"{v:.2f}%"


def print_summary(summary: PortfolioSummary, console: Optional[Console] = None):
    console = console or Console()
    console.print("--- Portfolio Summary ---")
    console.print(f"Total Investment: {_money(summary.total_investment)}")
    console.print(f"Total Current Value: {_money(summary.total_current_value)}")
    console.print(f"Overall ROI: {_pct(summary.overall_roi_percent)}")


def print_records(valuation: Valuation, console: Optional[Console] = None):
    console = console or Console()
    table = Table(title=f"Holdings @ {valuation.timestamp.isoformat(timespec='seconds')}")
    table.add_column("#", justify="right")
    table.add_column("Coin", justify="left")
    table.add_column("Price (USD)", justify="right")
    table.add_column("Investment", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("ROI %", justify="right")
    table.add_column("Note", justify="left")

    for i, rec in enumerate(valuation.records):
        table.add_row(
            str(i),
            escape(rec.symbol.upper()),
            f"${rec.current_price:,.2f}",
            f"${rec.investment:,.2f}",
            _money(rec.current_value),
            _pct(rec.roi_percent),
            "[bold red]missing price[/bold red]" if rec.price_missing else "",
        )
    console.print(table)


def chart_points(records: Sequence[ValuationRecord], attr: str) -> tuple[list[int], list[float]]:
    """(positions, values) for a per-record series; undefined values are skipped.

    attr is "delta" (investment - current value) or "roi".
    """
    xs, ys = [], []
    for i, rec in enumerate(records):
        if attr == "delta":
            y = None if rec.current_value is None else rec.investment - rec.current_value
        else:
            y = rec.roi_percent
        if y is not None:
            xs.append(i)
            ys.append(y)
    return xs, ys


def _draw(kind: str, xs: list[int], ys: list[float], title: str,
          n: int, width: int, height: int):
    plt.clear_figure()
    plt.plotsize(width, height)
    plt.title(title)
    plt.xlim(0, n)
    if kind == "bar":
        plt.bar(xs, ys)
    else:
        plt.plot(xs, ys)
    plt.show()


def render_charts(records: Sequence[ValuationRecord],
                  width: int = CHART_WIDTH, height: int = CHART_HEIGHT):
    """Bar chart of investment - value and line chart of ROI, x = input position."""
    n = len(records)
    charts = [
        ("bar", "delta", "Investment vs Current Value"),
        ("line", "roi", "Return on Investment (ROI)"),
    ]
    for kind, attr, title in charts:
        xs, ys = chart_points(records, attr)
        if not xs:
            log.info("Nothing to plot for '%s'.", title)
            continue
        try:
            _draw(kind, xs, ys, title, n, width, height)
        except Exception:
            # charts are cosmetic; never fail the run over them
            log.warning("Could not render chart '%s'.", title, exc_info=True)


def render(valuation: Valuation, charts: bool = True, console: Optional[Console] = None):
    console = console or Console()
    print_summary(valuation.summary, console)
    print_records(valuation, console)
    if charts:
        render_charts(valuation.records)
