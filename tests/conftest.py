"""
Pytest configuration and fixtures for the protocol risk engine.

This file contains shared fixtures used across all test modules:
isolated caches with a controllable clock, canned upstream responses,
and stub fetchers for engine tests.
"""

import pytest
from typing import Dict, Any, Callable
from unittest.mock import MagicMock, patch

from protocol_risk.core.cache import TimeBoxedCache
from protocol_risk.core.engine import RiskEngine
from protocol_risk.models import LiquidityMetrics, MarketMetrics, UsageMetrics


# =============================================================================
# CLOCK AND CACHE FIXTURES
# =============================================================================

class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(fake_clock) -> TimeBoxedCache:
    """Isolated 5-minute cache driven by fake_clock."""
    return TimeBoxedCache(freshness_seconds=300, clock=fake_clock)


# =============================================================================
# UPSTREAM RESPONSE FIXTURES
# =============================================================================

@pytest.fixture
def defillama_response() -> Dict[str, Any]:
    """Sample DefiLlama /protocol response."""
    return {
        "name": "MakerDAO",
        "chains": ["Ethereum", "Arbitrum"],
        "currentChainTvls": {
            "Ethereum": 4_500_000_000,
            "Ethereum-borrowed": 120_000_000,
            "Arbitrum": 500_000_000,
            "borrowed": 120_000_000,
        },
        "tvl": [
            {"date": 1704067200, "totalLiquidityUSD": 4_000_000_000},
            {"date": 1704153600, "totalLiquidityUSD": 4_400_000_000},
            {"date": 1704240000, "totalLiquidityUSD": 3_960_000_000},
            {"date": 1704326400, "totalLiquidityUSD": 5_000_000_000},
        ],
    }


@pytest.fixture
def coingecko_response() -> Dict[str, Any]:
    """Sample CoinGecko /simple/price response for 'maker'."""
    return {
        "maker": {
            "usd": 1450.25,
            "usd_market_cap": 1_340_000_000,
            "usd_24h_vol": 85_000_000,
            "usd_24h_change": -1.2,
        }
    }


def make_response(payload: Any, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def mock_upstreams(defillama_response, coingecko_response):
    """
    Mock requests.get, routing DefiLlama and CoinGecko URLs to canned bodies.

    Usage:
        def test_live_report(mock_upstreams):
            # requests.get is already mocked
            report = engine.get_risk_report("maker-dao")
    """
    def _route(url, params=None, headers=None, timeout=None):
        if "/protocol/" in url:
            return make_response(defillama_response)
        if "/simple/price" in url:
            coin_id = params["ids"]
            body = {coin_id: coingecko_response["maker"]}
            return make_response(body)
        raise AssertionError(f"Unexpected URL {url}")

    with patch("requests.get", side_effect=_route) as mock_get:
        yield mock_get


@pytest.fixture
def failing_upstreams():
    """Every upstream HTTP call raises a connection error."""
    import requests

    with patch("requests.get", side_effect=requests.ConnectionError("network down")) as mock_get:
        yield mock_get


# =============================================================================
# METRIC FIXTURES
# =============================================================================

@pytest.fixture
def healthy_tvl() -> LiquidityMetrics:
    return LiquidityMetrics(total=5_000_000_000, volatility_30d=0.02, chains={"Ethereum": 5_000_000_000})


@pytest.fixture
def calm_market() -> MarketMetrics:
    return MarketMetrics(
        price=100.0,
        market_cap=2_000_000_000,
        volume_24h=150_000_000,
        volatility_30d=0.0,
        volatility_90d=0.0,
    )


@pytest.fixture
def lending_usage() -> UsageMetrics:
    return UsageMetrics(utilization_rate=0.75, health_factor=1.65)


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def engine_factory(cache, fake_clock) -> Callable[..., RiskEngine]:
    """
    Factory for engines with stub fetchers.

    Usage:
        def test_something(engine_factory, calm_market):
            engine = engine_factory(market=calm_market)
    """
    def _create_engine(
        tvl: LiquidityMetrics = None,
        market: MarketMetrics = None,
        usage: UsageMetrics = None,
        **kwargs,
    ) -> RiskEngine:
        tvl = tvl or LiquidityMetrics(total=1_000_000_000, volatility_30d=0.05)
        market = market or MarketMetrics(
            price=1.0, market_cap=1e9, volume_24h=5e7, volatility_30d=0.04, volatility_90d=0.06
        )
        usage = usage or UsageMetrics(utilization_rate=0.75, health_factor=1.5)
        return RiskEngine(
            cache=cache,
            tvl_fetcher=lambda slug, c: tvl,
            market_fetcher=lambda coin_id, c: market,
            usage_fetcher=lambda protocol_id, c: usage,
            clock=fake_clock,
            **kwargs,
        )

    return _create_engine
