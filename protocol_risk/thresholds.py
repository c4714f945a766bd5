"""
Risk Scoring Thresholds and Static Protocol Knowledge.

Every category is scored on a 0-20 scale (higher = safer). The five
categories are weighted equally and the weighted sum is rescaled x5 into
the 0-100 total.

Static tables hold the qualitative inputs that are not fetched:
- Smart contract profile (audits, exploit history, contract age)
- Governance profile (admin keys, multisig, governance model)

Protocols missing from a table fall back to the "default" entry.
"""

# =============================================================================
# SCALE
# =============================================================================

CATEGORY_MAX_SCORE = 20.0
TOTAL_SCALE = 5.0  # weighted 0-20 sum -> 0-100

# =============================================================================
# RISK LEVELS
# =============================================================================

# Lower bound (inclusive) of each tier, checked from the top down
RISK_LEVEL_THRESHOLDS = [
    {"min": 80, "level": "Low", "description": "Strong fundamentals across all risk dimensions."},
    {"min": 60, "level": "Medium", "description": "Notable risk factors that require monitoring."},
    {"min": 40, "level": "High", "description": "Significant risk factors. Active management required."},
    {"min": 0, "level": "Critical", "description": "Critical risk factors. Substantial loss possible."},
]

# =============================================================================
# CATEGORY WEIGHTS
# =============================================================================

CATEGORY_WEIGHTS = {
    "smart_contract": {
        "weight": 0.20,
        "label": "Smart Contract Risk",
        "justification": "Audit coverage, exploit history and contract age.",
    },
    "market": {
        "weight": 0.20,
        "label": "Market Risk",
        "justification": "Governance token volatility and oracle reliability.",
    },
    "liquidity": {
        "weight": 0.20,
        "label": "Liquidity Risk",
        "justification": "TVL depth and lending pool utilization.",
    },
    "protocol_specific": {
        "weight": 0.20,
        "label": "Protocol-Specific Risk",
        "justification": "Risk driver specific to the protocol family "
                        "(health factor, IL, strategy, peg).",
    },
    "governance": {
        "weight": 0.20,
        "label": "Governance Risk",
        "justification": "Admin key control, multisig threshold and decentralization.",
    },
}

# =============================================================================
# MARKET RISK
# =============================================================================

MARKET_THRESHOLDS = {
    # 0% vol -> 20 pts, 10% vol -> 0 pts
    "volatility_penalty_per_unit": 200,
    # No on-chain oracle feed is fetched; top protocols use Chainlink
    "oracle_reliability_score": 18,
    "volatility_weight": 0.6,
    "oracle_weight": 0.4,
}

# =============================================================================
# LIQUIDITY RISK
# =============================================================================

LIQUIDITY_THRESHOLDS = {
    "tvl_floor_usd": 100_000_000,       # $100M -> 0 pts
    "tvl_ceiling_usd": 5_000_000_000,   # $5B -> 20 pts
    "tvl_weight": 0.7,
    "utilization_weight": 0.3,
    # Optimal utilization is around 80%; checked from the top down
    "utilization": [
        {"above": 0.9, "score": 10, "justification": "Utilization > 90% - withdrawals may be blocked"},
        {"above": 0.8, "score": 18, "justification": "Utilization > 80% - approaching kink"},
    ],
    "utilization_default_score": 20,
}

# =============================================================================
# PROTOCOL-SPECIFIC RISK
# =============================================================================

PROTOCOL_SPECIFIC_THRESHOLDS = {
    "lending": {
        "default_health_factor": 1.5,
        "health_factor": [
            {"above": 1.5, "score": 19},
            {"above": 1.1, "score": 14},
        ],
        "floor_score": 5,
        "liquidation_risk_below": 1.1,
    },
    "dex": {
        "volume_to_liquidity_threshold": 0.5,
        "high_volume_score": 18,
        "base_score": 15,
    },
    "aggregator": {
        "score": 16,
        "details": {"strategy_complexity": "High", "audit_coverage": "95%"},
    },
    "stablecoin_issuer": {
        "score": 19,
        "details": {"peg_deviation": "0.1%", "surplus_buffer": "Healthy"},
    },
    "unknown": {
        "score": 15,
    },
}

# =============================================================================
# SMART CONTRACT PROFILES
# =============================================================================

SMART_CONTRACT_PROFILES = {
    "default": {
        "score": 18,
        "details": {
            "audit_count": 5,
            "days_since_last_audit": 120,
            "exploit_count": 0,
            "bug_bounty_size": "1M+",
            "contract_age": "2+ Years",
        },
        "justification": "Multiple audits, no exploit history, active bug bounty.",
    },
    "uniswap-v3": {
        "score": 19.5,
        "details": {"audit_count": 8, "contract_age": "4+ Years"},
        "justification": "Heavily audited, immutable core live for over four years.",
    },
    "yearn-finance": {
        "score": 16,
        "details": {"complexity": "High"},
        "justification": "Vault strategies add code complexity and integration surface.",
    },
    "maker-dao": {
        "score": 19,
        "details": {"contract_age": "5+ Years"},
        "justification": "Longest-running DeFi codebase with extensive formal review.",
    },
}

# =============================================================================
# GOVERNANCE PROFILES
# =============================================================================

GOVERNANCE_PROFILES = {
    "default": {
        "score": 17,
        "details": {
            "admin_key": "Timelock",
            "multisig_threshold": "5/9",
            "update_frequency": "Monthly",
        },
        "justification": "Timelocked admin behind a multisig.",
    },
    "maker-dao": {
        "score": 19,
        "details": {"governance_model": "DAO"},
        "justification": "Highly decentralized on-chain governance.",
    },
    "uniswap-v3": {
        "score": 18,
        "details": {"admin_control": "Minimal"},
        "justification": "Immutable core contracts; governance limited to fee switch.",
    },
}
