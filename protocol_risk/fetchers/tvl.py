"""
TVL Fetcher - DefiLlama protocol TVL history.

Fetches the protocol TVL time series and derives:
- Current TVL (last data point)
- 30-day TVL volatility (stdev of day-over-day fractional changes)
- Per-chain TVL
"""

import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import numpy as np
import pandas as pd

from ..config.settings import API_CONFIG
from ..exceptions import UpstreamFetchError
from ..models import LiquidityMetrics
from .http import get_json

if TYPE_CHECKING:
    from ..core.cache import TimeBoxedCache

logger = logging.getLogger(__name__)

SOURCE = "DefiLlama"

VOLATILITY_WINDOW = 30
DEFAULT_TVL_VOLATILITY = 0.05

# Served whenever DefiLlama cannot be reached or returns garbage
TVL_FALLBACK = {
    "total": 1_000_000_000,
    "volatility_30d": DEFAULT_TVL_VOLATILITY,
    "chains": {"Ethereum": 1_000_000_000},
}

# currentChainTvls buckets that are not chains
NON_CHAIN_BUCKETS = {"borrowed", "staking", "pool2", "vesting", "offers", "treasury"}


def tvl_fallback() -> LiquidityMetrics:
    return LiquidityMetrics(
        total=float(TVL_FALLBACK["total"]),
        volatility_30d=TVL_FALLBACK["volatility_30d"],
        chains={k: float(v) for k, v in TVL_FALLBACK["chains"].items()},
        was_fallback=True,
    )


def calculate_tvl_volatility(
    tvl_values: List[float],
    window: int = VOLATILITY_WINDOW,
    default: float = DEFAULT_TVL_VOLATILITY,
) -> float:
    """
    Standard deviation of day-over-day fractional TVL changes.

    Uses the trailing `window` points. Returns `default` when fewer than two
    points exist or no finite change can be computed (e.g. TVL stuck at 0).
    """
    series = pd.Series(tvl_values, dtype=float).tail(window)
    if len(series) < 2:
        return default

    changes = (series.diff() / series.shift(1)).iloc[1:]
    changes = changes.replace([np.inf, -np.inf], np.nan).dropna()
    if changes.empty:
        return default

    return float(np.std(changes.to_numpy()))


def extract_chain_tvls(data: Dict[str, Any]) -> Dict[str, float]:
    """Per-chain TVL from currentChainTvls, else chain names mapped to 0."""
    current = data.get("currentChainTvls")
    if isinstance(current, dict) and current:
        return {
            chain: float(value)
            for chain, value in current.items()
            if "-" not in chain and chain.lower() not in NON_CHAIN_BUCKETS
        }
    return {chain: 0.0 for chain in data.get("chains") or []}


def parse_tvl_response(data: Dict[str, Any]) -> LiquidityMetrics:
    """
    Convert a DefiLlama /protocol body into LiquidityMetrics.

    Raises:
        UpstreamFetchError: body has no usable TVL history
    """
    try:
        history = data["tvl"]
        tvl_values = [float(point["totalLiquidityUSD"]) for point in history]
        chains = extract_chain_tvls(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise UpstreamFetchError(SOURCE, f"malformed TVL response: {e!r}") from e

    return LiquidityMetrics(
        total=tvl_values[-1] if tvl_values else 0.0,
        volatility_30d=calculate_tvl_volatility(tvl_values),
        chains=chains,
    )


def fetch_tvl_metrics(
    llama_slug: str,
    cache: "TimeBoxedCache",
    timeout: Optional[float] = None,
) -> LiquidityMetrics:
    """
    Fetch TVL metrics for a DefiLlama protocol slug.

    Served from cache when fresh. Never raises: on any failure the failure
    is logged and TVL_FALLBACK is returned (not cached).

    Args:
        llama_slug: DefiLlama protocol slug (e.g. "aave-v3", "makerdao")
        cache: Shared cache instance
        timeout: Request timeout in seconds

    Returns:
        LiquidityMetrics
    """
    cache_key = f"tvl:{llama_slug}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    try:
        data = get_json(f"{API_CONFIG['defillama_url']}/protocol/{llama_slug}", SOURCE, timeout=timeout)
        metrics = parse_tvl_response(data)
    except Exception as e:
        logger.warning("TVL fetch failed for %s, using fallback: %s", llama_slug, e)
        return tvl_fallback()

    cache.put(cache_key, metrics)
    logger.debug("Fetched TVL for %s: $%.0f", llama_slug, metrics.total)
    return metrics
