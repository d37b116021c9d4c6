"""Currencies, exchange rates and conversion of fees."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Tuple

from .error import CurrencyConversionFailed, InvalidCurrency

__all__ = ["Currency", "ExchangeRate", "CurrencyConverter", "FormattedAmount"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Currency(Enum):
    """Currencies a fee can be shown in."""

    XLM = "XLM"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    CNY = "CNY"
    INR = "INR"
    BRL = "BRL"
    AUD = "AUD"
    CAD = "CAD"

    def code(self) -> str:
        """The three-letter currency code."""
        return self.value

    def symbol(self) -> str:
        """The symbol used when displaying amounts."""
        return _SYMBOLS[self]

    @classmethod
    def from_code(cls, code: str) -> "Currency":
        """Look a currency up by its code, case-insensitively."""
        try:
            return cls(code.upper())
        except ValueError:
            raise InvalidCurrency(code) from None

    @classmethod
    def all(cls) -> List["Currency"]:
        """Every supported currency."""
        return list(cls)


_SYMBOLS = {
    Currency.XLM: "XLM",
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
    Currency.JPY: "¥",
    Currency.CNY: "¥",
    Currency.INR: "₹",
    Currency.BRL: "R$",
    Currency.AUD: "A$",
    Currency.CAD: "C$",
}


@dataclass
class ExchangeRate:
    """One unit of ``base`` is worth ``rate`` units of ``target``."""

    base: Currency
    target: Currency
    rate: float
    fetched_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, base: Currency, target: Currency, rate: float) -> "ExchangeRate":
        """Validate the rate and stamp it with the current time."""
        if rate <= 0.0:
            raise CurrencyConversionFailed("exchange rate must be positive")
        return cls(base=base, target=target, rate=rate)

    def age_seconds(self) -> int:
        """Whole seconds since the rate was fetched."""
        return int((_utcnow() - self.fetched_at).total_seconds())

    def is_fresh(self, max_age_seconds: int) -> bool:
        """Whether the rate is younger than ``max_age_seconds``."""
        return self.age_seconds() < max_age_seconds


class CurrencyConverter:
    """Converts amounts using the exchange rates it has been given."""

    def __init__(self) -> None:
        self._rates: Dict[Tuple[Currency, Currency], ExchangeRate] = {}

    def set_rate(self, base: Currency, target: Currency, rate: float) -> None:
        """Record the rate for a currency pair."""
        self._rates[(base, target)] = ExchangeRate.create(base, target, rate)

    def get_rate(self, base: Currency, target: Currency) -> float:
        """The rate for a pair; 1.0 when both currencies are the same."""
        if base == target:
            return 1.0
        try:
            return self._rates[(base, target)].rate
        except KeyError:
            raise CurrencyConversionFailed(
                f"rate not available for {base.code()}/{target.code()}"
            ) from None

    def convert(
        self, amount: float, from_currency: Currency, to_currency: Currency
    ) -> float:
        """Convert ``amount`` between currencies."""
        if from_currency == to_currency:
            return amount
        if amount < 0.0:
            raise CurrencyConversionFailed("amount cannot be negative")
        return amount * self.get_rate(from_currency, to_currency)

    def convert_xlm_fee(self, xlm_amount: float, target: Currency) -> float:
        """Convert a fee in XLM to ``target``."""
        if target == Currency.XLM:
            return xlm_amount
        return xlm_amount * self.get_rate(Currency.XLM, target)

    def clear(self) -> None:
        """Forget every rate."""
        self._rates.clear()

    def __len__(self) -> int:
        return len(self._rates)

    def has_rate(self, base: Currency, target: Currency) -> bool:
        """Whether a pair can be converted."""
        return base == target or (base, target) in self._rates


@dataclass
class FormattedAmount:
    """An amount together with its currency symbol."""

    amount: float
    currency: Currency
    symbol: str = field(init=False)

    def __post_init__(self) -> None:
        self.symbol = self.currency.symbol()

    def __str__(self) -> str:
        return self.format(8)

    def format(self, precision: int) -> str:
        """The amount with ``precision`` decimal places after its symbol."""
        return f"{self.symbol} {self.amount:.{precision}f}"