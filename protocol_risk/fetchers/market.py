"""
Market Fetcher - CoinGecko spot market data.

Fetches price, market cap and 24h volume for a coin and approximates
30d / 90d volatility from the 24h price change.
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..config.settings import API_CONFIG
from ..exceptions import UpstreamFetchError
from ..models import MarketMetrics
from .http import get_json

if TYPE_CHECKING:
    from ..core.cache import TimeBoxedCache

logger = logging.getLogger(__name__)

SOURCE = "CoinGecko"

# simple/price carries no history, so volatility is scaled from the 24h move
VOLATILITY_30D_MULTIPLIER = 5
VOLATILITY_90D_MULTIPLIER = 6

MARKET_FALLBACK = {
    "price": 1.0,
    "market_cap": 1_000_000_000,
    "volume_24h": 50_000_000,
    "volatility_30d": 0.04,
    "volatility_90d": 0.06,
}


def market_fallback() -> MarketMetrics:
    return MarketMetrics(
        price=float(MARKET_FALLBACK["price"]),
        market_cap=float(MARKET_FALLBACK["market_cap"]),
        volume_24h=float(MARKET_FALLBACK["volume_24h"]),
        volatility_30d=MARKET_FALLBACK["volatility_30d"],
        volatility_90d=MARKET_FALLBACK["volatility_90d"],
        was_fallback=True,
    )


def parse_market_response(data: Dict[str, Any], coin_id: str) -> MarketMetrics:
    """
    Convert a CoinGecko simple/price body into MarketMetrics.

    Raises:
        UpstreamFetchError: coin missing from body or a required field absent
    """
    try:
        coin = data[coin_id]
        # CoinGecko reports null change for thinly traded coins
        change_24h = abs(float(coin.get("usd_24h_change") or 0)) / 100
        return MarketMetrics(
            price=float(coin["usd"]),
            market_cap=float(coin["usd_market_cap"]),
            volume_24h=float(coin["usd_24h_vol"]),
            volatility_30d=change_24h * VOLATILITY_30D_MULTIPLIER,
            volatility_90d=change_24h * VOLATILITY_90D_MULTIPLIER,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise UpstreamFetchError(SOURCE, f"malformed market response for {coin_id}: {e!r}") from e


def fetch_market_metrics(
    coin_id: str,
    cache: "TimeBoxedCache",
    timeout: Optional[float] = None,
) -> MarketMetrics:
    """
    Fetch market metrics for a CoinGecko coin id.

    Served from cache when fresh. Never raises: on any failure the failure
    is logged and MARKET_FALLBACK is returned (not cached).

    Args:
        coin_id: CoinGecko coin id (e.g. "aave", "maker")
        cache: Shared cache instance
        timeout: Request timeout in seconds

    Returns:
        MarketMetrics
    """
    cache_key = f"market:{coin_id}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    params = {
        "ids": coin_id,
        "vs_currencies": "usd",
        "include_market_cap": "true",
        "include_24hr_vol": "true",
        "include_24hr_change": "true",
    }
    headers = None
    if API_CONFIG.get("coingecko_api_key"):
        headers = {"x-cg-demo-api-key": API_CONFIG["coingecko_api_key"]}

    try:
        data = get_json(
            f"{API_CONFIG['coingecko_url']}/simple/price",
            SOURCE,
            params=params,
            headers=headers,
            timeout=timeout,
        )
        metrics = parse_market_response(data, coin_id)
    except Exception as e:
        logger.warning("Market fetch failed for %s, using fallback: %s", coin_id, e)
        return market_fallback()

    cache.put(cache_key, metrics)
    logger.debug("Fetched market data for %s: price=%s", coin_id, metrics.price)
    return metrics
