"""
Protocol Risk Engine.

Scores DeFi protocols from independently sourced signals:
- TVL history (DefiLlama)
- Market price and volatility (CoinGecko)
- Protocol usage metrics (utilization, health factor, volume)

Five category scores (0-20 each) are combined into a 0-100 total and a
Low / Medium / High / Critical risk level.

Quick Start:
    from protocol_risk import RiskEngine

    engine = RiskEngine()
    report = engine.get_risk_report("aave-v3")
    print(f"{report.total_score} ({report.risk_level.value})")
"""

__version__ = "1.0.0"

from .exceptions import RiskEngineError, UnknownProtocolError, UpstreamFetchError

from .models import (
    RiskLevel,
    ProtocolFamily,
    MarketMetrics,
    LiquidityMetrics,
    UsageMetrics,
    CategoryScore,
    CategoryScores,
    ScoreBreakdown,
    RiskReport,
)

from .core import (
    TimeBoxedCache,
    ProtocolRegistry,
    ProtocolMapping,
    resolve_protocol,
    list_protocols,
    RiskEngine,
    risk_engine,
    get_risk_report,
    get_risk_reports,
)

from .scoring import classify_risk_level, get_score_justifications

from .simulator import (
    SimulationResult,
    PROTOCOL_CATALOG,
    calculate_projected_yield,
    calculate_heuristic_risk_score,
    get_catalog_entry,
)

__all__ = [
    "__version__",
    # Errors
    "RiskEngineError",
    "UnknownProtocolError",
    "UpstreamFetchError",
    # Models
    "RiskLevel",
    "ProtocolFamily",
    "MarketMetrics",
    "LiquidityMetrics",
    "UsageMetrics",
    "CategoryScore",
    "CategoryScores",
    "ScoreBreakdown",
    "RiskReport",
    # Engine
    "TimeBoxedCache",
    "ProtocolRegistry",
    "ProtocolMapping",
    "resolve_protocol",
    "list_protocols",
    "RiskEngine",
    "risk_engine",
    "get_risk_report",
    "get_risk_reports",
    # Scoring
    "classify_risk_level",
    "get_score_justifications",
    # Simulator
    "SimulationResult",
    "PROTOCOL_CATALOG",
    "calculate_projected_yield",
    "calculate_heuristic_risk_score",
    "get_catalog_entry",
]
