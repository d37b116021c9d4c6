"""Fee estimation service combining fetching, caching, history and surge analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import httpx

from .cache import CacheMetadata, FeeCache
from .calculator import DEFAULT_CACHE_TTL_SECS, FeeConfig, FeeInfo
from .currency import Currency, CurrencyConverter
from .history import FeeHistory, FeeStats
from .horizon_fetcher import DEFAULT_TIMEOUT_SECS, PUBLIC_HORIZON_URL, HorizonFeeFetcher
from .surge_pricing import SurgePricingAnalyzer, SurgePricingConfig

__all__ = ["FeeServiceConfig", "FeeEstimationService"]

log = logging.getLogger(__name__)

_HISTORY_SOURCE = "Horizon API"


@dataclass
class FeeServiceConfig:
    """Settings of the fee estimation service."""

    horizon_url: str = PUBLIC_HORIZON_URL
    cache_ttl_secs: int = DEFAULT_CACHE_TTL_SECS
    fetch_timeout_secs: int = DEFAULT_TIMEOUT_SECS
    max_history_records: int = 1000
    enable_surge_detection: bool = True


class FeeEstimationService:
    """Estimates transaction fees from the current network base fee."""

    def __init__(
        self,
        config: Optional[FeeServiceConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config if config is not None else FeeServiceConfig()
        self.fee_config = FeeConfig()
        self._fetcher = HorizonFeeFetcher(
            self.config.horizon_url, transport=transport
        ).with_timeout(self.config.fetch_timeout_secs)
        self._cache = FeeCache(self.config.cache_ttl_secs)
        self._history = FeeHistory(self.config.max_history_records)
        self._surge_analyzer = SurgePricingAnalyzer(SurgePricingConfig())
        self._converter = CurrencyConverter()

    @classmethod
    def public_horizon(cls) -> "FeeEstimationService":
        """A service using the public Horizon server."""
        return cls(FeeServiceConfig())

    async def estimate_fee(self, operation_count: int) -> FeeInfo:
        """Estimate the fee of a transaction with ``operation_count`` operations."""
        log.info("Estimating fee for %d operations", operation_count)

        cached_fee = self._cache.get()
        if cached_fee is not None:
            log.info("Using cached base fee: %d stroops", cached_fee)
            return FeeInfo.create(cached_fee, operation_count, False, 100.0)

        base_fee = await self._fetch_and_cache_fee()
        analysis = self._surge_analyzer.analyze(base_fee)
        log.info(
            "Base fee: %d stroops, Surge level: %s",
            base_fee,
            analysis.surge_level.display_name(),
        )
        return FeeInfo.create(
            base_fee, operation_count, analysis.is_surge, analysis.surge_percent
        )

    async def estimate_fee_in_currency(
        self, operation_count: int, currency: Currency
    ) -> Tuple[FeeInfo, float]:
        """Estimate a fee and convert its XLM total to ``currency``."""
        fee_info = await self.estimate_fee(operation_count)
        if currency == Currency.XLM:
            return fee_info, fee_info.total_fee_xlm
        converted = self._converter.convert_xlm_fee(fee_info.total_fee_xlm, currency)
        return fee_info, converted

    async def set_exchange_rate(
        self, from_currency: Currency, to_currency: Currency, rate: float
    ) -> None:
        """Record an exchange rate used for conversions."""
        self._converter.set_rate(from_currency, to_currency, rate)

    async def get_fee_stats(self) -> Optional[FeeStats]:
        """Statistics over every recorded fee."""
        return self._history.stats()

    async def get_recent_fee_stats(self, seconds: int) -> Optional[FeeStats]:
        """Statistics over fees recorded in the last ``seconds``."""
        return self._history.recent_stats(seconds)

    async def _fetch_and_cache_fee(self) -> int:
        log.debug("Fetching base fee from Horizon")
        base_fee = await self._fetcher.fetch_base_fee()
        self._cache.set(base_fee)
        self._history.add(base_fee, _HISTORY_SOURCE)
        return base_fee

    async def clear_cache(self) -> None:
        """Drop the cached base fee."""
        self._cache.clear()
        log.info("Fee cache cleared")

    async def clear_history(self) -> None:
        """Drop every recorded fee."""
        self._history.clear()
        log.info("Fee history cleared")

    async def get_cache_metadata(self) -> Optional[CacheMetadata]:
        """Details of the cached base fee, if any."""
        return self._cache.metadata()

    async def get_history_count(self) -> int:
        """Number of recorded fees."""
        return len(self._history)

    async def batch_estimate_fees(self, operation_counts: Iterable[int]) -> List[FeeInfo]:
        """Estimate fees for several operation counts, in order."""
        return [await self.estimate_fee(count) for count in operation_counts]

    async def is_surging(self) -> bool:
        """Whether fees are currently under surge pricing."""
        fee_info = await self.estimate_fee(1)
        return fee_info.is_surge_pricing

    async def get_surge_info(self) -> Optional[str]:
        """A one-line summary of the surge level for the cached fee."""
        base_fee = self._cache.get()
        if base_fee is None:
            return None
        analysis = self._surge_analyzer.analyze(base_fee)
        return (
            f"{analysis.surge_level.display_name()}: {analysis.recommendation} "
            f"({int(analysis.surge_percent)}%)"
        )