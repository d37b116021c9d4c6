"""Errors raised by fee estimation."""

from __future__ import annotations

__all__ = [
    "FeeError",
    "HorizonUnavailable",
    "InvalidFeeValue",
    "CurrencyConversionFailed",
    "InvalidCurrency",
    "CacheUnavailable",
    "InvalidOperationCount",
    "FeeNetworkError",
    "ParseError",
    "FeeConfigError",
    "FeeTimeout",
    "FeeOtherError",
]


class FeeError(Exception):
    """Base class of fee estimation errors."""

    prefix = "Fee error"

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(f"{self.prefix}: {message}")


class HorizonUnavailable(FeeError):
    prefix = "Horizon unavailable"


class InvalidFeeValue(FeeError):
    prefix = "Invalid fee value"


class CurrencyConversionFailed(FeeError):
    prefix = "Currency conversion failed"


class InvalidCurrency(FeeError):
    prefix = "Invalid currency"


class CacheUnavailable(FeeError):
    prefix = "Cache unavailable"


class InvalidOperationCount(FeeError):
    prefix = "Invalid operation count"


class FeeNetworkError(FeeError):
    prefix = "Network error"


class ParseError(FeeError):
    prefix = "Parse error"


class FeeConfigError(FeeError):
    prefix = "Invalid configuration"


class FeeTimeout(FeeError):
    """Fetching fees took too long."""

    def __init__(self) -> None:
        self.message = "Timeout while fetching fees"
        Exception.__init__(self, self.message)


class FeeOtherError(FeeError):
    prefix = "Fee error"