"""
Unit tests for the yield simulator.
"""

import pytest

from protocol_risk.simulator import (
    PROTOCOL_CATALOG,
    calculate_heuristic_risk_score,
    calculate_projected_yield,
    get_catalog_entry,
)


class TestProjectedYield:

    @pytest.mark.unit
    def test_month_zero_is_principal(self):
        results = calculate_projected_yield(10_000, 5.0, 12)
        assert results[0].month == 0
        assert results[0].value == 10_000
        assert results[0].yield_earned == 0

    @pytest.mark.unit
    def test_one_row_per_month_inclusive(self):
        assert len(calculate_projected_yield(1_000, 4.5, 24)) == 25

    @pytest.mark.unit
    def test_twelve_months_monthly_compounding(self):
        results = calculate_projected_yield(10_000, 12.0, 12)
        expected = round(10_000 * (1 + 0.12 / 12) ** 12, 2)
        assert results[-1].value == pytest.approx(expected)
        assert results[-1].yield_earned == pytest.approx(expected - 10_000, abs=0.01)

    @pytest.mark.unit
    def test_zero_apy_keeps_value_flat(self):
        results = calculate_projected_yield(500, 0.0, 6)
        assert {r.value for r in results} == {500}

    @pytest.mark.unit
    def test_values_increase_with_positive_apy(self):
        values = [r.value for r in calculate_projected_yield(1_000, 3.8, 36)]
        assert values == sorted(values)

    @pytest.mark.unit
    @pytest.mark.parametrize("principal,months", [(-1, 12), (100, -1)])
    def test_rejects_negative_inputs(self, principal, months):
        with pytest.raises(ValueError):
            calculate_projected_yield(principal, 5.0, months)


class TestHeuristicRiskScore:

    @pytest.mark.unit
    @pytest.mark.parametrize("volatility,tvl,expected", [
        (0.0, 10_000_000_000, 3),    # tvl_score 6 -> 3
        (0.5, 1_000_000, 8),         # (10 + 5) / 2 = 7.5 -> 8
        (1.0, 1_000, 10),            # capped at 10
        (0.0, 1e18, 1),              # tvl_score floored at 1 -> 0.5 -> 1
    ])
    def test_heuristic_score(self, volatility, tvl, expected):
        assert calculate_heuristic_risk_score(volatility, tvl) == expected

    @pytest.mark.unit
    def test_rejects_non_positive_tvl(self):
        with pytest.raises(ValueError):
            calculate_heuristic_risk_score(0.1, 0)


class TestCatalog:

    @pytest.mark.unit
    def test_catalog_lookup(self):
        entry = get_catalog_entry("maker-dao")
        assert entry["symbol"] == "DAI"
        assert get_catalog_entry("does-not-exist") is None

    @pytest.mark.unit
    def test_catalog_entries_have_required_fields(self):
        for entry in PROTOCOL_CATALOG:
            for field in ["id", "name", "symbol", "apy", "tvl", "risk_score", "chain"]:
                assert field in entry
