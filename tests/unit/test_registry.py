"""
Unit tests for the protocol registry.
"""

import pytest

from protocol_risk.core.registry import (
    PROTOCOL_MAPPING,
    ProtocolRegistry,
    list_protocols,
    resolve_protocol,
)
from protocol_risk.exceptions import RiskEngineError, UnknownProtocolError
from protocol_risk.models import ProtocolFamily


class TestResolve:

    @pytest.mark.unit
    @pytest.mark.parametrize("protocol_id,llama_slug,coingecko_id,family", [
        ("aave-v3", "aave-v3", "aave", ProtocolFamily.LENDING),
        ("yearn-finance", "yearn-finance", "yearn-finance", ProtocolFamily.AGGREGATOR),
        ("uniswap-v3", "uniswap-v3", "uniswap", ProtocolFamily.DEX),
        ("maker-dao", "makerdao", "maker", ProtocolFamily.STABLECOIN_ISSUER),
    ])
    def test_core_protocols(self, protocol_id, llama_slug, coingecko_id, family):
        mapping = resolve_protocol(protocol_id)
        assert mapping.protocol_id == protocol_id
        assert mapping.llama_slug == llama_slug
        assert mapping.coingecko_id == coingecko_id
        assert mapping.family == family

    @pytest.mark.unit
    def test_unknown_protocol_raises(self):
        with pytest.raises(UnknownProtocolError) as exc_info:
            ProtocolRegistry.resolve("does-not-exist")
        assert exc_info.value.protocol_id == "does-not-exist"
        assert str(exc_info.value) == "Unknown protocol: does-not-exist"

    @pytest.mark.unit
    def test_unknown_protocol_error_hierarchy(self):
        error = UnknownProtocolError("x")
        assert isinstance(error, RiskEngineError)
        assert isinstance(error, KeyError)

    @pytest.mark.unit
    def test_lookup_is_exact(self):
        """Substring matches do not resolve."""
        for candidate in ["aave", "AAVE-V3", "aave-v3 "]:
            assert not ProtocolRegistry.is_registered(candidate)


class TestListing:

    @pytest.mark.unit
    def test_list_protocols_matches_mapping(self):
        assert list_protocols() == list(PROTOCOL_MAPPING)

    @pytest.mark.unit
    def test_every_family_is_reachable(self):
        families = {mapping.family for mapping in PROTOCOL_MAPPING.values()}
        assert families == set(ProtocolFamily)

    @pytest.mark.unit
    def test_mapping_keys_match_protocol_ids(self):
        for key, mapping in PROTOCOL_MAPPING.items():
            assert key == mapping.protocol_id
