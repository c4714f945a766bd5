"""
Metric fetchers.

Each fetcher module provides:
- fetch_X_metrics(identifier, cache) - cached fetch, never raises
- X_fallback() - the payload served when the upstream fails

Available fetchers:
- tvl: DefiLlama TVL history, TVL volatility, per-chain TVL
- market: CoinGecko price, market cap, volume, volatility
- usage: protocol usage metrics (simulated indexer)
"""

from .tvl import (
    fetch_tvl_metrics,
    calculate_tvl_volatility,
    tvl_fallback,
    TVL_FALLBACK,
)

from .market import (
    fetch_market_metrics,
    market_fallback,
    MARKET_FALLBACK,
)

from .usage import (
    fetch_usage_metrics,
    simulate_usage_source,
    usage_fallback,
    DEFAULT_USAGE_PROFILE,
)

__all__ = [
    # TVL
    "fetch_tvl_metrics",
    "calculate_tvl_volatility",
    "tvl_fallback",
    "TVL_FALLBACK",
    # Market
    "fetch_market_metrics",
    "market_fallback",
    "MARKET_FALLBACK",
    # Usage
    "fetch_usage_metrics",
    "simulate_usage_source",
    "usage_fallback",
    "DEFAULT_USAGE_PROFILE",
]
