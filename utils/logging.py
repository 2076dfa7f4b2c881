# utils/logging.py
from __future__ import annotations
import logging
import os
import sys

ROOT_NAME = "crypto_roi"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def _configure_root() -> logging.Logger:
    global _configured
    root = logging.getLogger(ROOT_NAME)
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get("CRYPTO_ROI_LOG_LEVEL", "INFO").upper())
        root.propagate = False
        _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Child logger of the app namespace, e.g. get_logger("cmc") -> crypto_roi.cmc"""
    _configure_root()
    return logging.getLogger(f"{ROOT_NAME}.{name}")


def set_level(level: int | str) -> None:
    _configure_root().setLevel(level)
