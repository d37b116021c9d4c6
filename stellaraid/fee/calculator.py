"""Transaction fee arithmetic and fee information."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .error import InvalidFeeValue, InvalidOperationCount

__all__ = [
    "BASE_FEE_STROOPS",
    "BASE_FEE_XLM",
    "STROOPS_PER_XLM",
    "DEFAULT_CACHE_TTL_SECS",
    "FeeConfig",
    "FeeInfo",
    "calculate_fee",
    "stroops_to_xlm",
    "xlm_to_stroops",
    "calculate_surge_percent",
]

BASE_FEE_STROOPS = 100
BASE_FEE_XLM = 0.00001
STROOPS_PER_XLM = 10_000_000
DEFAULT_CACHE_TTL_SECS = 300

_I64_MAX = 2**63 - 1
_I64_MIN = -(2**63)


@dataclass
class FeeConfig:
    """Settings for fee calculation."""

    base_fee_stroops: int = BASE_FEE_STROOPS
    min_fee_xlm: float = 0.00001
    max_fee_xlm: float = 100.0
    surge_threshold_percent: float = 150.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def calculate_fee(base_fee_stroops: int, operation_count: int) -> int:
    """Total fee in stroops for a transaction of ``operation_count`` operations."""
    if operation_count < 1:
        raise InvalidOperationCount("operation_count must be at least 1")
    if base_fee_stroops < 0:
        raise InvalidFeeValue("base_fee_stroops cannot be negative")
    total = base_fee_stroops * operation_count
    if total > _I64_MAX:
        raise InvalidFeeValue("fee calculation overflow")
    return total


def stroops_to_xlm(stroops: int) -> float:
    """Convert stroops to XLM."""
    return stroops / STROOPS_PER_XLM


def xlm_to_stroops(xlm: float) -> int:
    """Convert XLM to stroops, truncating towards zero."""
    value = xlm * STROOPS_PER_XLM
    if math.isnan(value):
        return 0
    if value >= _I64_MAX:
        return _I64_MAX
    if value <= _I64_MIN:
        return _I64_MIN
    return int(value)


def calculate_surge_percent(current_fee: int, normal_fee: int) -> float:
    """Current fee as a percentage of the normal fee (100 means normal)."""
    if normal_fee == 0:
        return 100.0
    return (current_fee / normal_fee) * 100.0


@dataclass
class FeeInfo:
    """Fee estimate for one transaction."""

    base_fee_stroops: int
    operation_count: int
    total_fee_stroops: int
    total_fee_xlm: float
    is_surge_pricing: bool
    surge_percent: float
    fetched_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        base_fee_stroops: int,
        operation_count: int,
        is_surge_pricing: bool,
        surge_percent: float,
    ) -> "FeeInfo":
        """Validate the inputs and compute the totals."""
        total = calculate_fee(base_fee_stroops, operation_count)
        return cls(
            base_fee_stroops=base_fee_stroops,
            operation_count=operation_count,
            total_fee_stroops=total,
            total_fee_xlm=stroops_to_xlm(total),
            is_surge_pricing=is_surge_pricing,
            surge_percent=surge_percent,
        )

    def exceeds_threshold(self, threshold_xlm: float) -> bool:
        """Whether the total fee is above ``threshold_xlm``."""
        return self.total_fee_xlm > threshold_xlm

    def age_seconds(self) -> int:
        """Whole seconds since the fee was fetched."""
        return int((_utcnow() - self.fetched_at).total_seconds())

    def is_fresh(self, cache_ttl_seconds: int) -> bool:
        """Whether the fee is younger than ``cache_ttl_seconds``."""
        return self.age_seconds() < cache_ttl_seconds