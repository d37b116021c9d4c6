"""Record of observed base fees and statistics over them."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Deque, Iterable, List, Optional

from .error import InvalidFeeValue

__all__ = ["FeeRecord", "FeeStats", "FeeHistory", "DEFAULT_MAX_RECORDS"]

DEFAULT_MAX_RECORDS = 1000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _halve_toward_zero(value: int) -> int:
    quotient = abs(value) // 2
    return quotient if value >= 0 else -quotient


@dataclass
class FeeRecord:
    """A base fee observed at a moment from a named source."""

    base_fee_stroops: int
    source: str
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, base_fee_stroops: int, source: str) -> "FeeRecord":
        """Validate the fee and stamp it with the current time."""
        if base_fee_stroops < 0:
            raise InvalidFeeValue("base_fee_stroops cannot be negative")
        return cls(base_fee_stroops=base_fee_stroops, source=source)

    def age_seconds(self) -> int:
        """Whole seconds since the fee was observed."""
        return int((_utcnow() - self.timestamp).total_seconds())


@dataclass
class FeeStats:
    """Summary statistics of a set of fee records."""

    min_fee: int
    max_fee: int
    avg_fee: float
    median_fee: int
    std_dev: float
    total_records: int

    @classmethod
    def calculate(cls, records: Iterable[FeeRecord]) -> Optional["FeeStats"]:
        """Statistics of ``records``, or ``None`` when there are none."""
        fees = [record.base_fee_stroops for record in records]
        if not fees:
            return None

        count = len(fees)
        avg_fee = sum(fees) / count

        ordered = sorted(fees)
        middle = count // 2
        if count % 2 == 0:
            median_fee = _halve_toward_zero(ordered[middle - 1] + ordered[middle])
        else:
            median_fee = ordered[middle]

        variance = sum((fee - avg_fee) ** 2 for fee in fees) / count

        return cls(
            min_fee=min(fees),
            max_fee=max(fees),
            avg_fee=avg_fee,
            median_fee=median_fee,
            std_dev=math.sqrt(variance),
            total_records=count,
        )


class FeeHistory:
    """Keeps the most recent ``max_records`` fee observations, oldest first."""

    def __init__(self, max_records: int) -> None:
        self.max_records = max_records
        self._records: Deque[FeeRecord] = deque(maxlen=max_records)

    @classmethod
    def default_capacity(cls) -> "FeeHistory":
        """A history holding up to 1000 records."""
        return cls(DEFAULT_MAX_RECORDS)

    def add(self, base_fee_stroops: int, source: str) -> None:
        """Record a fee, dropping the oldest record when full."""
        self._records.append(FeeRecord.create(base_fee_stroops, source))

    def all(self) -> List[FeeRecord]:
        """Every record, oldest first."""
        return list(self._records)

    def within_time_window(self, seconds: int) -> List[FeeRecord]:
        """Records at most ``seconds`` old."""
        return [r for r in self._records if r.age_seconds() <= seconds]

    def latest(self) -> Optional[FeeRecord]:
        """The most recent record."""
        return self._records[-1] if self._records else None

    def oldest(self) -> Optional[FeeRecord]:
        """The oldest record kept."""
        return self._records[0] if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def stats(self) -> Optional[FeeStats]:
        """Statistics over every record."""
        return FeeStats.calculate(self._records)

    def recent_stats(self, seconds: int) -> Optional[FeeStats]:
        """Statistics over records at most ``seconds`` old."""
        return FeeStats.calculate(self.within_time_window(seconds))

    def clear(self) -> None:
        """Drop every record."""
        self._records.clear()

    def prune_older_than(self, seconds: int) -> None:
        """Drop records older than ``seconds``."""
        kept = self.within_time_window(seconds)
        self._records.clear()
        self._records.extend(kept)

    def max_change_percent(self, seconds: int) -> Optional[float]:
        """Spread between the highest and lowest recent fee, as a percentage of the lowest."""
        recent = self.within_time_window(seconds)
        if len(recent) < 2:
            return None
        fees = [r.base_fee_stroops for r in recent]
        lowest, highest = min(fees), max(fees)
        if lowest == 0:
            return None
        return ((highest - lowest) / lowest) * 100.0