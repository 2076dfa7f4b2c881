# storage/csv_log.py
import csv
import os
from typing import Optional

from core.errors import WriteError
from core.models import Valuation

DEFAULT_LOG_PATH = "data.csv"
HEADER = ["Timestamp", "Coin", "Current Price", "Investment", "Current Value", "ROI (%)"]


def _num(v: Optional[float]) -> str:
    # full precision; undefined values leave the cell empty
    return "" if v is None else repr(float(v))


def _needs_header(path: str) -> bool:
    return not os.path.exists(path) or os.path.getsize(path) == 0


def append_records(valuation: Valuation, path: str = DEFAULT_LOG_PATH) -> int:
    """Append one row per record; header only on a new/empty file. Returns rows written."""
    ts = valuation.timestamp.isoformat()
    try:
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
        write_header = _needs_header(path)
        with open(path, "a", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            if write_header:
                w.writerow(HEADER)
            for rec in valuation.records:
                w.writerow([
                    ts,
                    rec.symbol,
                    _num(rec.current_price),
                    _num(rec.investment),
                    _num(rec.current_value),
                    _num(rec.roi_percent),
                ])
    except (OSError, csv.Error) as e:
        raise WriteError(f"Cannot write record log {path}: {e}") from e
    return len(valuation.records)
