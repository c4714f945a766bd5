"""
Risk Engine - resolves a protocol, fetches its metrics and builds the report.

Flow for one report:
    protocol_id -> registry lookup -> TVL / market / usage fetched in parallel
    -> five category scorers -> weighted total (0-100) -> risk level

Fetchers never raise (they fall back), so a report is always produced for a
registered protocol. Only UnknownProtocolError reaches the caller.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Tuple

from ..config.settings import ENGINE_CONFIG
from ..exceptions import UnknownProtocolError
from ..fetchers.market import fetch_market_metrics
from ..fetchers.tvl import fetch_tvl_metrics
from ..fetchers.usage import fetch_usage_metrics
from ..models import (
    LiquidityMetrics,
    MarketMetrics,
    RiskReport,
    ScoreBreakdown,
    UsageMetrics,
)
from ..scoring import (
    calculate_category_scores,
    calculate_total_score,
    classify_risk_level,
    round_half_up,
)
from .cache import TimeBoxedCache
from .registry import ProtocolMapping, ProtocolRegistry

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, TimeBoxedCache], Any]


class RiskEngine:
    """
    Builds RiskReports for registered protocols.

    Args:
        cache: Cache shared by all fetchers; a fresh one is created if omitted
        tvl_fetcher: (llama_slug, cache) -> LiquidityMetrics
        market_fetcher: (coingecko_id, cache) -> MarketMetrics
        usage_fetcher: (protocol_id, cache) -> UsageMetrics
        clock: Returns the report timestamp in epoch seconds
        fetch_workers: Threads used to fetch one report's metrics
        batch_workers: Reports built concurrently by get_risk_reports
    """

    def __init__(
        self,
        cache: Optional[TimeBoxedCache] = None,
        tvl_fetcher: Fetcher = fetch_tvl_metrics,
        market_fetcher: Fetcher = fetch_market_metrics,
        usage_fetcher: Fetcher = fetch_usage_metrics,
        clock: Callable[[], float] = time.time,
        fetch_workers: Optional[int] = None,
        batch_workers: Optional[int] = None,
    ):
        self.cache = cache if cache is not None else TimeBoxedCache()
        self.tvl_fetcher = tvl_fetcher
        self.market_fetcher = market_fetcher
        self.usage_fetcher = usage_fetcher
        self._clock = clock
        self.fetch_workers = fetch_workers or ENGINE_CONFIG["fetch_workers"]
        self.batch_workers = batch_workers or ENGINE_CONFIG["batch_workers"]

    def fetch_metrics(self, mapping: ProtocolMapping) -> Tuple[LiquidityMetrics, MarketMetrics, UsageMetrics]:
        """Fetch the three metric sets in parallel and wait for all of them."""
        with ThreadPoolExecutor(max_workers=self.fetch_workers) as executor:
            tvl_future = executor.submit(self.tvl_fetcher, mapping.llama_slug, self.cache)
            market_future = executor.submit(self.market_fetcher, mapping.coingecko_id, self.cache)
            usage_future = executor.submit(self.usage_fetcher, mapping.protocol_id, self.cache)

            return tvl_future.result(), market_future.result(), usage_future.result()

    def get_risk_report(self, protocol_id: str) -> RiskReport:
        """
        Build the risk report for one protocol.

        Args:
            protocol_id: Registered protocol identifier (e.g. "aave-v3")

        Returns:
            RiskReport

        Raises:
            UnknownProtocolError: protocol_id is not registered
        """
        mapping = ProtocolRegistry.resolve(protocol_id)

        tvl, market, usage = self.fetch_metrics(mapping)

        categories = calculate_category_scores(
            protocol_id=protocol_id,
            family=mapping.family,
            tvl=tvl,
            market=market,
            usage=usage,
        )

        # Tier comes from the unrounded total; 79.97 displays as 80.0 but stays Medium
        raw_total = calculate_total_score(categories)
        risk_level = classify_risk_level(raw_total)
        total_score = round_half_up(raw_total)

        fallback_sources = tuple(
            name for name, metrics in (("tvl", tvl), ("market", market), ("usage", usage))
            if metrics.was_fallback
        )
        if fallback_sources:
            logger.warning("Report for %s built with fallback data: %s", protocol_id, ", ".join(fallback_sources))

        report = RiskReport(
            protocol_id=protocol_id,
            total_score=total_score,
            risk_level=risk_level,
            breakdown=ScoreBreakdown(
                smart_contract=round_half_up(categories.smart_contract.score),
                market=round_half_up(categories.market.score),
                liquidity=round_half_up(categories.liquidity.score),
                protocol_specific=round_half_up(categories.protocol_specific.score),
                governance=round_half_up(categories.governance.score),
            ),
            categories=categories,
            timestamp=self._clock(),
            fallback_sources=fallback_sources,
        )

        logger.info("Risk report for %s: %.1f (%s)", protocol_id, total_score, risk_level.value)
        return report

    def get_risk_reports(self, protocol_ids: List[str]) -> List[RiskReport]:
        """
        Build reports for several protocols concurrently.

        Every identifier is resolved before any fetch starts, so an unknown
        protocol raises without partial work. Output order follows input order.
        """
        unknown = [p for p in protocol_ids if not ProtocolRegistry.is_registered(p)]
        if unknown:
            raise UnknownProtocolError(unknown[0])

        if not protocol_ids:
            return []

        with ThreadPoolExecutor(max_workers=self.batch_workers) as executor:
            return list(executor.map(self.get_risk_report, protocol_ids))


# Process-wide engine for callers that do not manage their own
risk_engine = RiskEngine()


def get_risk_report(protocol_id: str) -> RiskReport:
    return risk_engine.get_risk_report(protocol_id)


def get_risk_reports(protocol_ids: List[str]) -> List[RiskReport]:
    return risk_engine.get_risk_reports(protocol_ids)

