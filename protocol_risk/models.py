"""
Data model for the protocol risk engine.

Metric sets produced by the fetchers, the per-category score, and the
immutable RiskReport handed to presentation code.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Any, Optional, Tuple, Union


DisplayValue = Union[float, int, str, None]


class RiskLevel(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ProtocolFamily(Enum):
    """Protocol type, resolved once from the registry."""
    LENDING = "lending"
    DEX = "dex"
    AGGREGATOR = "aggregator"
    STABLECOIN_ISSUER = "stablecoin_issuer"
    UNKNOWN = "unknown"


# =============================================================================
# FETCHED METRIC SETS
# =============================================================================

@dataclass(frozen=True)
class MarketMetrics:
    """Price and volatility from the market data provider."""
    price: float
    market_cap: float
    volume_24h: float
    volatility_30d: float  # fractional stdev of returns, not percent
    volatility_90d: float
    was_fallback: bool = False


@dataclass(frozen=True)
class LiquidityMetrics:
    """TVL snapshot and TVL volatility from the TVL provider."""
    total: float
    volatility_30d: float
    chains: Dict[str, float] = field(default_factory=dict)
    was_fallback: bool = False


@dataclass(frozen=True)
class UsageMetrics:
    """
    Protocol usage metrics. Every field is optional; which ones are present
    depends on the protocol type.
    """
    utilization_rate: Optional[float] = None
    health_factor: Optional[float] = None
    proposal_count: Optional[int] = None
    borrow_rate: Optional[float] = None
    supply_rate: Optional[float] = None
    pool_liquidity: Optional[float] = None
    volume_usd: Optional[float] = None
    fees_usd: Optional[float] = None
    was_fallback: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any], was_fallback: bool = False) -> "UsageMetrics":
        return cls(
            utilization_rate=data.get("utilization_rate"),
            health_factor=data.get("health_factor"),
            proposal_count=data.get("proposal_count"),
            borrow_rate=data.get("borrow_rate"),
            supply_rate=data.get("supply_rate"),
            pool_liquidity=data.get("pool_liquidity"),
            volume_usd=data.get("volume_usd"),
            fees_usd=data.get("fees_usd"),
            was_fallback=was_fallback,
        )


# =============================================================================
# SCORES AND REPORT
# =============================================================================

@dataclass(frozen=True)
class CategoryScore:
    """Score for one risk category. `score` is always within [0, 20]."""
    category: str
    score: float
    details: Dict[str, DisplayValue] = field(default_factory=dict)
    justification: str = ""


@dataclass(frozen=True)
class ScoreBreakdown:
    """The five category scores, rounded to one decimal for display."""
    smart_contract: float
    market: float
    liquidity: float
    protocol_specific: float
    governance: float


@dataclass(frozen=True)
class CategoryScores:
    smart_contract: CategoryScore
    market: CategoryScore
    liquidity: CategoryScore
    protocol_specific: CategoryScore
    governance: CategoryScore

    def items(self) -> Tuple[Tuple[str, CategoryScore], ...]:
        return (
            ("smart_contract", self.smart_contract),
            ("market", self.market),
            ("liquidity", self.liquidity),
            ("protocol_specific", self.protocol_specific),
            ("governance", self.governance),
        )


@dataclass(frozen=True)
class RiskReport:
    """
    Final risk assessment for one protocol.

    total_score is 5 x the mean of the five 0-20 category scores, so it lies
    in [0, 100]. Higher is safer. fallback_sources names the data sources
    ("tvl", "market", "usage") that were served from fallback payloads.
    """
    protocol_id: str
    total_score: float
    risk_level: RiskLevel
    breakdown: ScoreBreakdown
    categories: CategoryScores
    timestamp: float
    fallback_sources: Tuple[str, ...] = ()

    @property
    def is_degraded(self) -> bool:
        return bool(self.fallback_sources)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dict."""
        data = asdict(self)
        data["risk_level"] = self.risk_level.value
        data["fallback_sources"] = list(self.fallback_sources)
        return data
