"""
Yield Simulator.

Projects compound yield for a protocol position and provides the 1-10
heuristic risk score shown next to each protocol in the catalog.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

COMPOUNDING_PERIODS_PER_YEAR = 12  # monthly


@dataclass(frozen=True)
class SimulationResult:
    month: int
    value: float
    yield_earned: float


# Demo catalog used by the simulator; tvl in USD, apy in percent
PROTOCOL_CATALOG: List[Dict] = [
    {
        "id": "aave-v3",
        "name": "Aave V3",
        "symbol": "USDC",
        "apy": 4.5,
        "tvl": 1_500_000_000,
        "risk_score": 2,
        "chain": "Ethereum",
        "description": "Leading decentralized lending protocol allowing users to lend, borrow, "
                       "and earn interest on crypto assets.",
    },
    {
        "id": "yearn-finance",
        "name": "Yearn Finance",
        "symbol": "USDC",
        "apy": 5.2,
        "tvl": 400_000_000,
        "risk_score": 4,
        "chain": "Ethereum",
        "description": "Yield aggregator that optimizes DeFi returns by automatically moving "
                       "funds between protocols.",
    },
    {
        "id": "uniswap-v3",
        "name": "Uniswap V3",
        "symbol": "USDC/ETH",
        "apy": 12.5,
        "tvl": 800_000_000,
        "risk_score": 7,
        "chain": "Ethereum",
        "description": "Largest decentralized exchange (DEX) utilizing concentrated liquidity "
                       "for higher capital efficiency.",
    },
    {
        "id": "maker-dao",
        "name": "MakerDAO",
        "symbol": "DAI",
        "apy": 3.8,
        "tvl": 5_000_000_000,
        "risk_score": 1,
        "chain": "Ethereum",
        "description": "Decentralized organization managing the DAI stablecoin, backed by "
                       "crypto collateral.",
    },
]


def get_catalog_entry(protocol_id: str) -> Optional[Dict]:
    for entry in PROTOCOL_CATALOG:
        if entry["id"] == protocol_id:
            return entry
    return None


def calculate_projected_yield(principal: float, apy: float, months: int) -> List[SimulationResult]:
    """
    Project a position's value with monthly compounding.

    A = P * (1 + r/n)^(n*t), n = 12

    Args:
        principal: Initial investment in USD
        apy: Annual yield as a percentage (5.5 for 5.5%)
        months: Duration in months

    Returns:
        One SimulationResult per month from 0 to `months` inclusive
    """
    if principal < 0:
        raise ValueError(f"principal must be non-negative, got {principal}")
    if months < 0:
        raise ValueError(f"months must be non-negative, got {months}")

    rate = apy / 100
    n = COMPOUNDING_PERIODS_PER_YEAR
    periods = np.arange(months + 1)
    amounts = principal * np.power(1 + rate / n, n * (periods / 12))

    return [
        SimulationResult(
            month=int(month),
            value=round(float(amount), 2),
            yield_earned=round(float(amount - principal), 2),
        )
        for month, amount in zip(periods, amounts)
    ]


def calculate_heuristic_risk_score(volatility: float, tvl: float) -> int:
    """
    Simplified 1-10 risk score (lower is safer) from volatility and TVL.

    Args:
        volatility: Volatility index (0-1)
        tvl: Total Value Locked in USD
    """
    if tvl <= 0:
        raise ValueError(f"tvl must be positive, got {tvl}")

    tvl_score = max(1.0, 10 - np.log10(tvl / 1_000_000))
    vol_score = volatility * 10
    score = (tvl_score + vol_score) / 2
    # halves round up (4.5 -> 5)
    return int(min(10, max(1, np.floor(score + 0.5))))
