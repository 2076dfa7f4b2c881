# cli.py
import sys
import argparse
import logging

from core.errors import ConfigError, FetchError, WriteError
from core.portfolio import valuate
from report.console import render
from services.coinmarketcap_client import get_prices
from storage.csv_log import DEFAULT_LOG_PATH, append_records
from storage.json_store import DEFAULT_CONFIG_PATH, read_config
from utils.logging import get_logger, set_level
from utils.timeutils import run_timestamp

log = get_logger("cli")


def run_report(config_path: str, log_path: str, charts: bool = True) -> int:
    cfg = read_config(config_path)
    if not cfg.holdings:
        log.warning("No holdings in %s; nothing to report.", config_path)
        return 0

    prices = get_prices(cfg.credential, cfg.symbols)
    valuation = valuate(cfg.holdings, prices, run_timestamp())
    if valuation.missing_symbols:
        log.warning("No price for %s; valued at 0.", ", ".join(valuation.missing_symbols))

    rows = append_records(valuation, log_path)
    log.info("Appended %d rows to %s.", rows, log_path)

    render(valuation, charts=charts)
    return 0

# -------- Commands --------

def cmd_report(args: argparse.Namespace) -> int:
    return run_report(args.config, args.log, charts=not args.no_charts)

def cmd_holdings(args: argparse.Namespace) -> int:
    cfg = read_config(args.config)
    if not cfg.holdings:
        print(f"No holdings in {args.config}.")
        return 0
    for i, h in enumerate(cfg.holdings):
        print(f"{i:>3}  {h.symbol.upper():<8} invested ${h.investment:,.2f} @ ${h.purchase_price:,.4f}")
    return 0


# -------- Parser --------

def build_parser():
    p = argparse.ArgumentParser(prog="crypto-roi", description="Crypto portfolio ROI reporter")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_report = sub.add_parser("report", help="Fetch prices, log rows, print summary and charts")
    p_report.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Holdings config (default config.json)")
    p_report.add_argument("--log", default=DEFAULT_LOG_PATH, help="CSV record log to append to (default data.csv)")
    p_report.add_argument("--no-charts", action="store_true", help="Skip the terminal charts")
    p_report.set_defaults(func=cmd_report)

    p_hold = sub.add_parser("holdings", help="Show configured holdings (no network)")
    p_hold.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Holdings config (default config.json)")
    p_hold.set_defaults(func=cmd_holdings)

    return p

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)
    try:
        return args.func(args)
    except ConfigError as e:
        log.error("Config error: %s", e)
    except FetchError as e:
        log.error("Fetch error: %s", e)
    except WriteError as e:
        log.error("Write error: %s", e)
    return 1

if __name__ == "__main__":
    sys.exit(main())
