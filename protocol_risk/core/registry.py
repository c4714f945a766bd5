"""
Protocol Registry - Static mapping from protocol identifier to data sources.

Each protocol resolves to the DefiLlama slug, the CoinGecko coin id and its
ProtocolFamily. Unknown identifiers are a caller error, never defaulted.
"""

from dataclasses import dataclass
from typing import Dict, List

from ..exceptions import UnknownProtocolError
from ..models import ProtocolFamily


@dataclass(frozen=True)
class ProtocolMapping:
    """Provider-specific identifiers for one protocol."""
    protocol_id: str
    name: str
    llama_slug: str
    coingecko_id: str
    family: ProtocolFamily
    chain: str = "Ethereum"


PROTOCOL_MAPPING: Dict[str, ProtocolMapping] = {
    "aave-v3": ProtocolMapping(
        protocol_id="aave-v3",
        name="Aave V3",
        llama_slug="aave-v3",
        coingecko_id="aave",
        family=ProtocolFamily.LENDING,
    ),
    "compound-v3": ProtocolMapping(
        protocol_id="compound-v3",
        name="Compound V3",
        llama_slug="compound-v3",
        coingecko_id="compound-governance-token",
        family=ProtocolFamily.LENDING,
    ),
    "uniswap-v3": ProtocolMapping(
        protocol_id="uniswap-v3",
        name="Uniswap V3",
        llama_slug="uniswap-v3",
        coingecko_id="uniswap",
        family=ProtocolFamily.DEX,
    ),
    "curve-dex": ProtocolMapping(
        protocol_id="curve-dex",
        name="Curve DEX",
        llama_slug="curve-dex",
        coingecko_id="curve-dao-token",
        family=ProtocolFamily.DEX,
    ),
    "yearn-finance": ProtocolMapping(
        protocol_id="yearn-finance",
        name="Yearn Finance",
        llama_slug="yearn-finance",
        coingecko_id="yearn-finance",
        family=ProtocolFamily.AGGREGATOR,
    ),
    "maker-dao": ProtocolMapping(
        protocol_id="maker-dao",
        name="MakerDAO",
        llama_slug="makerdao",
        coingecko_id="maker",
        family=ProtocolFamily.STABLECOIN_ISSUER,
    ),
    # Liquid staking has no dedicated scorer yet
    "lido": ProtocolMapping(
        protocol_id="lido",
        name="Lido",
        llama_slug="lido",
        coingecko_id="lido-dao",
        family=ProtocolFamily.UNKNOWN,
    ),
}


class ProtocolRegistry:
    """Lookup helpers over PROTOCOL_MAPPING."""

    @staticmethod
    def resolve(protocol_id: str) -> ProtocolMapping:
        """
        Resolve a protocol identifier to its data source identifiers.

        Raises:
            UnknownProtocolError: identifier is not registered
        """
        mapping = PROTOCOL_MAPPING.get(protocol_id)
        if mapping is None:
            raise UnknownProtocolError(protocol_id)
        return mapping

    @staticmethod
    def list_protocols() -> List[str]:
        return list(PROTOCOL_MAPPING.keys())

    @staticmethod
    def is_registered(protocol_id: str) -> bool:
        return protocol_id in PROTOCOL_MAPPING


def resolve_protocol(protocol_id: str) -> ProtocolMapping:
    return ProtocolRegistry.resolve(protocol_id)


def list_protocols() -> List[str]:
    return ProtocolRegistry.list_protocols()
