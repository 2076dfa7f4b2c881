# core/errors.py
from __future__ import annotations
from typing import Optional


class CryptoRoiError(Exception):
    """Base class for every error that aborts a run."""


class ConfigError(CryptoRoiError):
    """Config file missing, unparseable, or missing a required field."""


class FetchError(CryptoRoiError):
    """Quote service call failed."""


class FetchNetworkError(FetchError):
    pass


class FetchStatusError(FetchError):
    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.service_message = message
        text = f"Quote service returned HTTP {status_code}"
        if message:
            text += f": {message}"
        super().__init__(text)


class FetchDecodeError(FetchError):
    pass


class WriteError(CryptoRoiError):
    """Record log could not be created or written."""
