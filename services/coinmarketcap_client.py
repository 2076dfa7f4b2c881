# services/coinmarketcap_client.py
from __future__ import annotations
import time
from typing import Sequence, Dict, Any, Optional
import requests

from core.errors import FetchDecodeError, FetchNetworkError, FetchStatusError
from utils.logging import get_logger

log = get_logger("cmc")

API_URL = "https://pro-api.coinmarketcap.com/v1/cryptocurrency/quotes/latest"
API_KEY_HEADER = "X-CMC_PRO_API_KEY"
CONVERT = "USD"


def _unique(symbols: Sequence[str]) -> list[str]:
    seen = set()
    out = []
    for s in symbols:
        if s not in seen:
            seen.add(s)
            out.append(s)
    return out


def _error_message(r: requests.Response) -> Optional[str]:
    # CMC error bodies look like {"status": {"error_code": 1001, "error_message": "..."}}
    try:
        body = r.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("status"), dict):
        return body["status"].get("error_message")
    return None


def _as_price(v: Any) -> Optional[float]:
    """JSON number as float; None for non-numbers and ints too big for a float."""
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    try:
        return float(v)
    except OverflowError:
        return None


def parse_quotes(payload: Dict[str, Any], symbols: Sequence[str]) -> Dict[str, float]:
    """
    Pull data.<symbol>.quote.USD.price for each symbol.
    Symbols without a numeric price are left out of the result.
    """
    data = payload.get("data") or {}
    out: Dict[str, float] = {}
    for sym in symbols:
        entry = data.get(sym)
        price = None
        if isinstance(entry, dict):
            quote = entry.get("quote")
            if isinstance(quote, dict) and isinstance(quote.get(CONVERT), dict):
                price = quote[CONVERT].get("price")
        price = _as_price(price)
        if price is not None:
            out[sym] = price
        else:
            log.warning("No %s price for %s in quote response.", CONVERT, sym)
    return out


def get_prices(api_key: str, symbols: Sequence[str],
               session: Optional[requests.Session] = None,
               timeout: tuple[float, float] = (3.0, 10.0)) -> Dict[str, float]:
    """
    One batched quotes/latest call for all symbols. Returns e.g.
    {"BTC": 60000.0, "ETH": 1800.0}; unpriced symbols are absent.
    Raises a FetchError subclass on any failure; never retries.
    """
    wanted = _unique(symbols)
    if not wanted:
        return {}

    params = {"symbol": ",".join(wanted)}
    headers = {"Accept": "application/json", API_KEY_HEADER: api_key}
    sess = session or requests.Session()

    t0 = time.perf_counter()
    try:
        r = sess.get(API_URL, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        log.error("Quote request failed: %s", type(e).__name__)
        raise FetchNetworkError(f"Quote request failed: {e}") from e
    elapsed_ms = (time.perf_counter() - t0) * 1000.0

    if not 200 <= r.status_code < 300:
        log.error("Quote service returned %d (%.1f ms).", r.status_code, elapsed_ms)
        raise FetchStatusError(r.status_code, _error_message(r))

    try:
        payload = r.json()
    except ValueError as e:
        raise FetchDecodeError("Quote response is not valid JSON") from e
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        raise FetchDecodeError("Quote response has no 'data' object")

    log.info("Fetched %d symbols in %.1f ms (status %d).",
             len(wanted), elapsed_ms, r.status_code)
    return parse_quotes(payload, wanted)
