# storage/json_store.py
import json
import math
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from core.errors import ConfigError
from core.models import Configuration, Holding

DEFAULT_CONFIG_PATH = "config.json"
API_KEY_ENV = "CMC_PRO_API_KEY"

# accepted field names, first one is canonical
CREDENTIAL_KEYS = ("credential", "api_key")
HOLDINGS_KEYS = ("holdings", "coins")
PURCHASE_PRICE_KEYS = ("purchasePrice", "purchase_price")


def read_json(path: str) -> Any:
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except ValueError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _pick(obj: Dict[str, Any], keys: tuple, where: str) -> Any:
    for k in keys:
        if k in obj:
            return obj[k]
    raise ConfigError(f"Missing required field '{keys[0]}' in {where}")


def _amount(obj: Dict[str, Any], keys: tuple, where: str) -> float:
    v = _pick(obj, keys, where)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ConfigError(f"'{keys[0]}' in {where} must be a number, got {v!r}")
    try:
        v = float(v)
    except OverflowError as e:
        raise ConfigError(f"'{keys[0]}' in {where} is too large") from e
    if not math.isfinite(v) or v < 0:
        raise ConfigError(f"'{keys[0]}' in {where} must be a non-negative number, got {v!r}")
    return v


def _holding(obj: Any, index: int) -> Holding:
    where = f"holdings[{index}]"
    if not isinstance(obj, dict):
        raise ConfigError(f"{where} must be an object")
    sym = _pick(obj, ("symbol",), where)
    if not isinstance(sym, str) or not sym.strip():
        raise ConfigError(f"'symbol' in {where} must be a non-empty string")
    return Holding(
        symbol=sym.strip().upper(),
        investment=_amount(obj, ("investment",), where),
        purchase_price=_amount(obj, PURCHASE_PRICE_KEYS, where),
    )


def parse_config(doc: Any, env_credential: Optional[str] = None) -> Configuration:
    """Validate a decoded config document. env_credential wins over the file's."""
    if not isinstance(doc, dict):
        raise ConfigError("Config document must be a JSON object")

    credential = env_credential
    if not credential:
        credential = _pick(doc, CREDENTIAL_KEYS, "config")
    if not isinstance(credential, str) or not credential.strip():
        raise ConfigError(f"'credential' must be a non-empty string (or set {API_KEY_ENV})")

    raw = _pick(doc, HOLDINGS_KEYS, "config")
    if not isinstance(raw, list):
        raise ConfigError("'holdings' must be an array")

    holdings = tuple(_holding(item, i) for i, item in enumerate(raw))
    return Configuration(credential=credential.strip(), holdings=holdings)


def read_config(path: str = DEFAULT_CONFIG_PATH) -> Configuration:
    """Load holdings + quote-service credential. Raises ConfigError."""
    load_dotenv()
    return parse_config(read_json(path), os.environ.get(API_KEY_ENV))
