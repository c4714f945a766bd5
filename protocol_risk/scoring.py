"""
Protocol Risk Scoring Implementation.

Five independent category scorers map fetched metrics (and static protocol
knowledge) to a 0-20 score with a details breakdown. The aggregate is the
weighted sum rescaled to 0-100 and classified into a risk level.

All functions here are pure: no I/O, no shared state.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List

from .thresholds import (
    CATEGORY_MAX_SCORE,
    TOTAL_SCALE,
    RISK_LEVEL_THRESHOLDS,
    CATEGORY_WEIGHTS,
    MARKET_THRESHOLDS,
    LIQUIDITY_THRESHOLDS,
    PROTOCOL_SPECIFIC_THRESHOLDS,
    SMART_CONTRACT_PROFILES,
    GOVERNANCE_PROFILES,
)
from .models import (
    CategoryScore,
    CategoryScores,
    LiquidityMetrics,
    MarketMetrics,
    ProtocolFamily,
    RiskLevel,
    RiskReport,
    UsageMetrics,
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from zero on the decimal representation (2.25 -> 2.3)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp_score(score: float) -> float:
    """Clamp a category score into [0, 20]."""
    return min(CATEGORY_MAX_SCORE, max(0.0, float(score)))


def normalize(value: float, min_value: float, max_value: float) -> float:
    """Map value linearly from [min_value, max_value] onto [0, 20], clamped."""
    return clamp_score((value - min_value) / (max_value - min_value) * CATEGORY_MAX_SCORE)


def classify_risk_level(total_score: float) -> RiskLevel:
    """
    Classify a 0-100 total into a risk level.

    < 40 Critical, [40, 60) High, [60, 80) Medium, >= 80 Low.
    """
    for tier in RISK_LEVEL_THRESHOLDS:
        if total_score >= tier["min"]:
            return RiskLevel(tier["level"])
    return RiskLevel.CRITICAL


def _profile(table: Dict[str, Dict[str, Any]], protocol_id: str) -> Dict[str, Any]:
    """Default profile overlaid with the protocol's own entry."""
    base = table["default"]
    override = table.get(protocol_id, {})
    details = dict(base["details"])
    details.update(override.get("details", {}))
    return {
        "score": override.get("score", base["score"]),
        "details": details,
        "justification": override.get("justification", base["justification"]),
    }


# =============================================================================
# CATEGORY SCORING FUNCTIONS
# =============================================================================

def calculate_smart_contract_score(protocol_id: str) -> CategoryScore:
    """Smart Contract Risk from the static audit / exploit / age table."""
    profile = _profile(SMART_CONTRACT_PROFILES, protocol_id)
    return CategoryScore(
        category=CATEGORY_WEIGHTS["smart_contract"]["label"],
        score=clamp_score(profile["score"]),
        details=profile["details"],
        justification=profile["justification"],
    )


def calculate_market_score(market: MarketMetrics) -> CategoryScore:
    """
    Market Risk.

    Volatility: 0% -> 20 pts, 10% -> 0 pts (never negative).
    Oracle reliability is a fixed 18.
    score = 0.6 * volatility score + 0.4 * oracle score
    """
    t = MARKET_THRESHOLDS
    vol_score = max(0.0, CATEGORY_MAX_SCORE - market.volatility_30d * t["volatility_penalty_per_unit"])
    oracle_score = t["oracle_reliability_score"]
    score = vol_score * t["volatility_weight"] + oracle_score * t["oracle_weight"]

    return CategoryScore(
        category=CATEGORY_WEIGHTS["market"]["label"],
        score=clamp_score(score),
        details={
            "volatility_30d": market.volatility_30d,
            "volatility_90d": market.volatility_90d,
            "volatility_score": round(vol_score, 2),
            "oracle_reliability": "High",
            "price_shock_risk": "Low",
        },
        justification=f"30d volatility {market.volatility_30d:.2%} gives {vol_score:.1f}/20; "
                      f"oracle reliability {oracle_score}/20",
    )


def calculate_liquidity_score(tvl: LiquidityMetrics, usage: UsageMetrics) -> CategoryScore:
    """
    Liquidity Risk.

    TVL: $100M -> 0 pts, $5B -> 20 pts (linear, clamped).
    Utilization: 20 pts, 18 above 80%, 10 above 90%.
    score = 0.7 * TVL score + 0.3 * utilization score
    """
    t = LIQUIDITY_THRESHOLDS
    tvl_score = normalize(tvl.total, t["tvl_floor_usd"], t["tvl_ceiling_usd"])

    util_score = t["utilization_default_score"]
    util_just = "Utilization within optimal range"
    if usage.utilization_rate is None:
        util_just = "No utilization data - no penalty"
    else:
        for tier in t["utilization"]:
            if usage.utilization_rate > tier["above"]:
                util_score = tier["score"]
                util_just = tier["justification"]
                break

    score = tvl_score * t["tvl_weight"] + util_score * t["utilization_weight"]

    return CategoryScore(
        category=CATEGORY_WEIGHTS["liquidity"]["label"],
        score=clamp_score(score),
        details={
            "tvl": tvl.total,
            "tvl_volatility": tvl.volatility_30d,
            "tvl_score": round(tvl_score, 2),
            "utilization_rate": usage.utilization_rate,
            "utilization_score": util_score,
            "pool_depth": "High",
        },
        justification=f"TVL ${tvl.total / 1e6:,.0f}M gives {tvl_score:.1f}/20 | {util_just}",
    )


def _score_lending(usage: UsageMetrics) -> CategoryScore:
    t = PROTOCOL_SPECIFIC_THRESHOLDS["lending"]
    hf = usage.health_factor if usage.health_factor is not None else t["default_health_factor"]

    score = t["floor_score"]
    for tier in t["health_factor"]:
        if hf > tier["above"]:
            score = tier["score"]
            break

    return CategoryScore(
        category=CATEGORY_WEIGHTS["protocol_specific"]["label"],
        score=clamp_score(score),
        details={
            "health_factor": hf,
            "liquidation_risk": "High" if hf < t["liquidation_risk_below"] else "Low",
        },
        justification=f"Average health factor {hf:.2f}",
    )


def _score_dex(usage: UsageMetrics) -> CategoryScore:
    t = PROTOCOL_SPECIFIC_THRESHOLDS["dex"]
    # High volume earns LP fees that offset impermanent loss
    vol_liq_ratio = (usage.volume_usd or 0) / (usage.pool_liquidity or 1)
    score = t["high_volume_score"] if vol_liq_ratio > t["volume_to_liquidity_threshold"] else t["base_score"]

    return CategoryScore(
        category=CATEGORY_WEIGHTS["protocol_specific"]["label"],
        score=clamp_score(score),
        details={
            "impermanent_loss_risk": "Medium",
            "volume_to_liquidity": round(vol_liq_ratio, 4),
        },
        justification=f"Volume/liquidity ratio {vol_liq_ratio:.2f}",
    )


def _score_aggregator(usage: UsageMetrics) -> CategoryScore:
    t = PROTOCOL_SPECIFIC_THRESHOLDS["aggregator"]
    return CategoryScore(
        category=CATEGORY_WEIGHTS["protocol_specific"]["label"],
        score=clamp_score(t["score"]),
        details=dict(t["details"]),
        justification="Strategy risk from layered protocol integrations",
    )


def _score_stablecoin_issuer(usage: UsageMetrics) -> CategoryScore:
    t = PROTOCOL_SPECIFIC_THRESHOLDS["stablecoin_issuer"]
    return CategoryScore(
        category=CATEGORY_WEIGHTS["protocol_specific"]["label"],
        score=clamp_score(t["score"]),
        details=dict(t["details"]),
        justification="Peg stability backed by surplus buffer",
    )


def _score_unknown_family(usage: UsageMetrics) -> CategoryScore:
    return CategoryScore(
        category=CATEGORY_WEIGHTS["protocol_specific"]["label"],
        score=clamp_score(PROTOCOL_SPECIFIC_THRESHOLDS["unknown"]["score"]),
        details={"protocol_family": "Unrecognized"},
        justification="No family-specific model - neutral score applied",
    )


FAMILY_SCORERS: Dict[ProtocolFamily, Callable[[UsageMetrics], CategoryScore]] = {
    ProtocolFamily.LENDING: _score_lending,
    ProtocolFamily.DEX: _score_dex,
    ProtocolFamily.AGGREGATOR: _score_aggregator,
    ProtocolFamily.STABLECOIN_ISSUER: _score_stablecoin_issuer,
    ProtocolFamily.UNKNOWN: _score_unknown_family,
}


def calculate_protocol_specific_score(family: ProtocolFamily, usage: UsageMetrics) -> CategoryScore:
    """
    Protocol-Specific Risk, by protocol family.

    Lending: health factor > 1.5 -> 19, > 1.1 -> 14, else 5
    DEX: volume/liquidity > 0.5 -> 18, else 15
    Aggregator: 16, Stablecoin issuer: 19, Unknown: 15
    """
    return FAMILY_SCORERS[family](usage)


def calculate_governance_score(protocol_id: str) -> CategoryScore:
    """Governance Risk from the static admin-control table."""
    profile = _profile(GOVERNANCE_PROFILES, protocol_id)
    return CategoryScore(
        category=CATEGORY_WEIGHTS["governance"]["label"],
        score=clamp_score(profile["score"]),
        details=profile["details"],
        justification=profile["justification"],
    )


# =============================================================================
# OVERALL SCORE CALCULATION
# =============================================================================

def calculate_category_scores(
    protocol_id: str,
    family: ProtocolFamily,
    tvl: LiquidityMetrics,
    market: MarketMetrics,
    usage: UsageMetrics,
) -> CategoryScores:
    """Run all five category scorers."""
    return CategoryScores(
        smart_contract=calculate_smart_contract_score(protocol_id),
        market=calculate_market_score(market),
        liquidity=calculate_liquidity_score(tvl, usage),
        protocol_specific=calculate_protocol_specific_score(family, usage),
        governance=calculate_governance_score(protocol_id),
    )


def calculate_total_score(categories: CategoryScores) -> float:
    """
    Weighted sum of the 0-20 category scores, rescaled x5 to 0-100.

    With equal weights this is 5 x the mean of the five scores. Unrounded.
    """
    weighted = sum(
        CATEGORY_WEIGHTS[key]["weight"] * category.score
        for key, category in categories.items()
    )
    return weighted * TOTAL_SCALE


def get_score_justifications(report: RiskReport) -> List[dict]:
    """
    Extract all justifications from a report for display.

    Args:
        report: Output of RiskEngine.get_risk_report

    Returns:
        List of justification entries
    """
    description = next(
        tier["description"] for tier in RISK_LEVEL_THRESHOLDS
        if tier["level"] == report.risk_level.value
    )
    justifications = [{
        "category": "Overall Score",
        "score": report.total_score,
        "risk_level": report.risk_level.value,
        "justification": f"5 x mean of category scores = {report.total_score} "
                         f"({report.risk_level.value} risk). {description}",
    }]

    if report.fallback_sources:
        justifications.append({
            "category": "Data Quality",
            "justification": f"Fallback data used for: {', '.join(report.fallback_sources)}",
        })

    for key, category in report.categories.items():
        justifications.append({
            "category": category.category,
            "score": round_half_up(category.score),
            "weight": f"{CATEGORY_WEIGHTS[key]['weight'] * 100:.0f}%",
            "justification": category.justification,
        })
        for label, value in category.details.items():
            justifications.append({
                "category": f"  └─ {label}",
                "value": value,
            })

    return justifications
