"""Detection of surge pricing from the network base fee."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional

from .error import InvalidFeeValue

__all__ = [
    "SurgePricingConfig",
    "SurgePricingLevel",
    "SurgePricingAnalyzer",
    "SurgePricingAnalysis",
    "FeeTrend",
]


@dataclass
class SurgePricingConfig:
    """Thresholds for classifying fees."""

    normal_base_fee: int = 100
    warn_threshold_percent: float = 150.0
    critical_threshold_percent: float = 300.0
    window_size: int = 10


class SurgePricingLevel(Enum):
    """How far the fee is above normal."""

    NORMAL = "Normal"
    ELEVATED = "Elevated"
    HIGH = "High"
    CRITICAL = "Critical"

    def display_name(self) -> str:
        """Name shown to users."""
        return self.value

    def description(self) -> str:
        """Short explanation for users."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    SurgePricingLevel.NORMAL: "Network fees are normal",
    SurgePricingLevel.ELEVATED: "Network is slightly congested",
    SurgePricingLevel.HIGH: "Network is congested",
    SurgePricingLevel.CRITICAL: "Network is congested - high fees",
}

_RECOMMENDATIONS = {
    SurgePricingLevel.NORMAL: "Fees are normal. Safe to proceed.",
    SurgePricingLevel.ELEVATED: (
        "Network is slightly congested. Fees are slightly elevated."
    ),
    SurgePricingLevel.HIGH: "Network is congested. Consider waiting if not urgent.",
    SurgePricingLevel.CRITICAL: (
        "Network has critical congestion. Wait for fees to decrease if possible."
    ),
}


class FeeTrend(Enum):
    """Direction fees are moving in."""

    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"

    def emoji(self) -> str:
        """Pictogram for the trend."""
        return _EMOJI[self]


_EMOJI = {
    FeeTrend.INCREASING: "📈",
    FeeTrend.STABLE: "➡️",
    FeeTrend.DECREASING: "📉",
}


@dataclass
class SurgePricingAnalysis:
    """Result of analysing one base fee."""

    surge_level: SurgePricingLevel
    is_surge: bool
    surge_percent: float
    current_fee: int
    normal_fee: int
    trend: FeeTrend
    recommendation: str


class SurgePricingAnalyzer:
    """Classifies fees and tracks their trend over a sliding window."""

    def __init__(self, config: SurgePricingConfig) -> None:
        self.config = config
        self._fee_history: Deque[int] = deque(maxlen=max(0, config.window_size))

    def analyze(self, current_base_fee: int) -> SurgePricingAnalysis:
        """Record ``current_base_fee`` and classify it."""
        if current_base_fee < 0:
            raise InvalidFeeValue("base fee cannot be negative")

        self._fee_history.append(current_base_fee)

        normal = self.config.normal_base_fee
        if normal > 0:
            surge_percent = (current_base_fee / normal) * 100.0
        else:
            surge_percent = 100.0

        level = self.detect_level(surge_percent)
        return SurgePricingAnalysis(
            surge_level=level,
            is_surge=level is not SurgePricingLevel.NORMAL,
            surge_percent=surge_percent,
            current_fee=current_base_fee,
            normal_fee=normal,
            trend=self.calculate_trend(),
            recommendation=self.recommendation(level),
        )

    def detect_level(self, surge_percent: float) -> SurgePricingLevel:
        """The level for a fee at ``surge_percent`` of normal."""
        if surge_percent >= self.config.critical_threshold_percent:
            return SurgePricingLevel.CRITICAL
        if surge_percent >= self.config.warn_threshold_percent:
            return SurgePricingLevel.HIGH
        if surge_percent > 100.0:
            return SurgePricingLevel.ELEVATED
        return SurgePricingLevel.NORMAL

    def calculate_trend(self) -> FeeTrend:
        """Compare the newer half of the window with the older half."""
        fees = list(self._fee_history)
        if len(fees) < 2:
            return FeeTrend.STABLE

        split = len(fees) // 2
        older, recent = fees[:split], fees[split:]
        older_avg = sum(older) / len(older)
        recent_avg = sum(recent) / len(recent)

        if older_avg == 0:
            if recent_avg > 0:
                return FeeTrend.INCREASING
            if recent_avg < 0:
                return FeeTrend.DECREASING
            return FeeTrend.STABLE

        percent_change = ((recent_avg - older_avg) / older_avg) * 100.0
        if percent_change > 10.0:
            return FeeTrend.INCREASING
        if percent_change < -10.0:
            return FeeTrend.DECREASING
        return FeeTrend.STABLE

    def recommendation(self, level: SurgePricingLevel) -> str:
        """Advice to users for ``level``."""
        return _RECOMMENDATIONS[level]

    def reset_history(self) -> None:
        """Forget the tracked fees."""
        self._fee_history.clear()

    def average_fee(self) -> Optional[float]:
        """Mean of the tracked fees."""
        if not self._fee_history:
            return None
        return sum(self._fee_history) / len(self._fee_history)

    def max_fee(self) -> Optional[int]:
        """Highest tracked fee."""
        return max(self._fee_history, default=None)

    def min_fee(self) -> Optional[int]:
        """Lowest tracked fee."""
        return min(self._fee_history, default=None)