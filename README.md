# stellaraid

Estimates Stellar transaction fees. It reads the current base fee from a Horizon
server, caches it, records it, detects surge pricing and converts fees into
other currencies.

## Modules

All modules are in `stellaraid.fee`:

- `calculator`: `calculate_fee`, `stroops_to_xlm`, `xlm_to_stroops`,
  `calculate_surge_percent`, `FeeConfig` and `FeeInfo`. The constants are
  `BASE_FEE_STROOPS` (100), `STROOPS_PER_XLM` (10,000,000) and
  `DEFAULT_CACHE_TTL_SECS` (300).
- `cache`: `FeeCache` holds one base fee for a number of seconds.
  `FeeCache.default_ttl()` keeps it for five minutes. `get()` returns `None`
  once the fee has expired. `get_unchecked()` returns the fee even after it
  has expired. `metadata()` describes the fee that is held.
- `history`: `FeeHistory` keeps the most recent observations, up to 1000 by
  default. `FeeStats.calculate` gives the minimum, maximum, mean, median and
  standard deviation of a set of observations.
- `surge_pricing`: `SurgePricingAnalyzer` sorts a fee into a
  `SurgePricingLevel`: `NORMAL` up to 100% of normal, `ELEVATED` above that,
  `HIGH` from 150% and `CRITICAL` from 300%. It also gives a `FeeTrend` taken
  over its last ten fees, and a recommendation for the user.
- `currency`: `Currency` has ten members (XLM, USD, EUR, GBP, JPY, CNY, INR,
  BRL, AUD, CAD). `CurrencyConverter` converts with the rates you give it.
  `FormattedAmount` prints an amount with its currency symbol.
- `horizon_fetcher`: `HorizonFeeFetcher` reads `base_fee_rate` from the latest
  ledger (`/ledgers?sort=desc&limit=1`).
- `service`: `FeeEstimationService` brings these parts together, and
  `FeeServiceConfig` configures it.
- `error`: the `FeeError` hierarchy. It includes `InvalidFeeValue`,
  `InvalidOperationCount`, `InvalidCurrency`, `CurrencyConversionFailed`,
  `HorizonUnavailable`, `FeeNetworkError`, `ParseError` and `FeeTimeout`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Calculating fees needs no network access:

```python
from stellaraid.fee.calculator import calculate_fee, stroops_to_xlm

total = calculate_fee(100, 5)   # 500 stroops
print(stroops_to_xlm(total))    # 5e-05
```

Converting a fee into another currency:

```python
from stellaraid.fee.currency import Currency, CurrencyConverter, FormattedAmount

converter = CurrencyConverter()
converter.set_rate(Currency.XLM, Currency.USD, 0.25)
usd = converter.convert_xlm_fee(2.0, Currency.USD)
print(FormattedAmount(usd, Currency.USD).format(2))   # "$ 0.50"
```

Estimating a fee. `FeeEstimationService.public_horizon()` queries the public
Horizon server. Any other server, or an `httpx` transport, can be given
instead, as in this example:

```python
import asyncio
import httpx
from stellaraid.fee.service import FeeEstimationService, FeeServiceConfig

def handler(request):
    return httpx.Response(200, json={"_embedded": {"records": [{"base_fee_rate": 200}]}})

async def main():
    service = FeeEstimationService(
        FeeServiceConfig(horizon_url="http://horizon.test"),
        transport=httpx.MockTransport(handler),
    )
    info = await service.estimate_fee(3)
    print(info.total_fee_stroops, info.is_surge_pricing)   # 600 True
    print(await service.get_surge_info())
    # High: Network is congested. Consider waiting if not urgent. (200%)

asyncio.run(main())
```

Surge pricing is checked only when the base fee is fetched. While a cached fee
is still valid, `estimate_fee` reports it as normal pricing at 100%.

## What this package does not do

- It has no general-purpose Horizon client. The only Horizon request it sends
  is the ledger query for the base fee. It does not limit its request rate,
  retry failed requests or cache other responses.
- It does not check whether a server is healthy.
- It does not fetch exchange rates. You supply them with `set_rate` or
  `set_exchange_rate`.
- It has no command-line interface and stores nothing on disk. The cache and
  the history are kept in memory only.