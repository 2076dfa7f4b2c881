import json

import pytest

import storage.json_store as js
from core.errors import ConfigError


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch):
    monkeypatch.delenv(js.API_KEY_ENV, raising=False)
    monkeypatch.setattr(js, "load_dotenv", lambda *a, **kw: False)


def _write(tmp_path, obj):
    p = tmp_path / "config.json"
    p.write_text(json.dumps(obj), encoding="utf-8")
    return str(p)


def test_reads_holdings_in_order(tmp_path):
    path = _write(tmp_path, {
        "credential": "k-123",
        "holdings": [
            {"symbol": "ETH", "investment": 500, "purchasePrice": 2000},
            {"symbol": "BTC", "investment": 500.5, "purchasePrice": 50000.0},
        ],
    })
    cfg = js.read_config(path)
    assert cfg.credential == "k-123"
    assert cfg.symbols == ["ETH", "BTC"]
    assert cfg.holdings[1].investment == 500.5
    assert cfg.holdings[0].purchase_price == 2000.0


def test_accepts_snake_case_field_names(tmp_path):
    path = _write(tmp_path, {
        "api_key": "abc",
        "coins": [{"symbol": "BTC", "investment": 1000, "purchase_price": 50000}],
    })
    cfg = js.read_config(path)
    assert cfg.credential == "abc"
    assert cfg.holdings[0].purchase_price == 50000.0


def test_env_credential_overrides_file(tmp_path, monkeypatch):
    monkeypatch.setenv(js.API_KEY_ENV, "from-env")
    path = _write(tmp_path, {"holdings": []})
    assert js.read_config(path).credential == "from-env"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        js.read_config(str(tmp_path / "nope.json"))


def test_bad_json(tmp_path):
    p = tmp_path / "config.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid JSON"):
        js.read_config(str(p))


def test_missing_credential(tmp_path):
    path = _write(tmp_path, {"holdings": []})
    with pytest.raises(ConfigError, match="credential"):
        js.read_config(path)


def test_missing_numeric_field_is_error_not_zero(tmp_path):
    path = _write(tmp_path, {"credential": "k", "holdings": [{"symbol": "BTC", "investment": 1000}]})
    with pytest.raises(ConfigError, match="purchasePrice"):
        js.read_config(path)


@pytest.mark.parametrize("bad", ["1000", True, None, -5])
def test_invalid_investment(tmp_path, bad):
    path = _write(tmp_path, {"credential": "k",
                             "holdings": [{"symbol": "BTC", "investment": bad, "purchasePrice": 1}]})
    with pytest.raises(ConfigError, match="investment"):
        js.read_config(path)


def test_holdings_must_be_array(tmp_path):
    path = _write(tmp_path, {"credential": "k", "holdings": {"symbol": "BTC"}})
    with pytest.raises(ConfigError, match="array"):
        js.read_config(path)


def test_document_must_be_object(tmp_path):
    path = _write(tmp_path, [1, 2, 3])
    with pytest.raises(ConfigError, match="object"):
        js.read_config(path)


def test_zero_purchase_price_allowed(tmp_path):
    path = _write(tmp_path, {"credential": "k",
                             "holdings": [{"symbol": "AIR", "investment": 10, "purchasePrice": 0}]})
    assert js.read_config(path).holdings[0].purchase_price == 0.0


def test_integer_too_large_for_float(tmp_path):
    p = tmp_path / "config.json"
    p.write_text('{"credential": "k", "holdings": [{"symbol": "BTC", "investment": 1%s, "purchasePrice": 1}]}'
                 % ("0" * 400), encoding="utf-8")
    with pytest.raises(ConfigError, match="too large"):
        js.read_config(str(p))


def test_symbols_are_upper_cased(tmp_path):
    path = _write(tmp_path, {"credential": "k",
                             "holdings": [{"symbol": " btc ", "investment": 1, "purchasePrice": 1}]})
    assert js.read_config(path).symbols == ["BTC"]
