"""Fetching the current network base fee from Horizon."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from .error import FeeNetworkError, FeeTimeout, HorizonUnavailable, InvalidFeeValue, ParseError

__all__ = ["HorizonFeeFetcher", "PUBLIC_HORIZON_URL", "DEFAULT_TIMEOUT_SECS"]

log = logging.getLogger(__name__)

PUBLIC_HORIZON_URL = "https://horizon.stellar.org"
DEFAULT_TIMEOUT_SECS = 30

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _as_i64(value: Any) -> Optional[int]:
    """The value as a signed 64-bit integer, if it is one."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if not _I64_MIN <= value <= _I64_MAX:
        return None
    return value


class HorizonFeeFetcher:
    """Reads the base fee of the latest ledger from a Horizon server."""

    def __init__(
        self,
        server_url: str,
        timeout_secs: int = DEFAULT_TIMEOUT_SECS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.server_url = server_url
        self.timeout_secs = timeout_secs
        self._transport = transport

    @classmethod
    def public_horizon(cls) -> "HorizonFeeFetcher":
        """A fetcher for the public Horizon server."""
        return cls(PUBLIC_HORIZON_URL)

    def with_timeout(self, timeout_secs: int) -> "HorizonFeeFetcher":
        """A copy of this fetcher using ``timeout_secs`` as request timeout."""
        return HorizonFeeFetcher(self.server_url, timeout_secs, self._transport)

    async def fetch_base_fee(self) -> int:
        """Fetch the current base fee in stroops."""
        url = f"{self.server_url}/ledgers?sort=desc&limit=1"
        log.info("Fetching base fee from Horizon: %s", url)

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=float(self.timeout_secs)
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException:
            raise FeeTimeout() from None
        except httpx.ConnectError:
            raise HorizonUnavailable("Connection failed") from None
        except httpx.HTTPError as exc:
            raise FeeNetworkError(str(exc)) from exc

        if not response.is_success:
            raise HorizonUnavailable(
                f"HTTP status: {response.status_code} {response.reason_phrase}".rstrip()
            )

        try:
            body = response.text
        except (UnicodeDecodeError, LookupError) as exc:
            raise ParseError(f"Failed to read response body: {exc}") from exc

        return self.parse_base_fee(body)

    def parse_base_fee(self, response_body: str) -> int:
        """Extract the base fee from a Horizon ledgers response body."""
        try:
            parsed = json.loads(response_body)
        except ValueError as exc:
            raise ParseError(str(exc)) from exc

        embedded = parsed.get("_embedded") if isinstance(parsed, dict) else None
        records = embedded.get("records") if isinstance(embedded, dict) else None
        if not isinstance(records, list) or not records:
            raise ParseError("No ledger records in response")
        record = records[0]

        raw_fee = record.get("base_fee_rate") if isinstance(record, dict) else None
        base_fee = _as_i64(raw_fee)
        if base_fee is None:
            raise ParseError("base_fee_rate field missing or invalid")

        if base_fee < 0:
            raise InvalidFeeValue("base fee is negative")
        if base_fee == 0:
            raise InvalidFeeValue("base fee is zero")

        log.info("Fetched base fee: %d stroops", base_fee)
        return base_fee