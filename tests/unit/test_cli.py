"""
Unit tests for the command-line entry point and the package exports.
"""

import pytest
from unittest.mock import patch

import protocol_risk
from protocol_risk.__main__ import main


class TestCommandLine:

    @pytest.mark.unit
    @pytest.mark.smoke
    def test_prints_requested_reports(self, engine_factory, capsys):
        engine = engine_factory()
        with patch("protocol_risk.__main__.get_risk_reports", side_effect=engine.get_risk_reports) as mock_reports:
            exit_code = main(["maker-dao", "lido"])

        assert exit_code == 0
        mock_reports.assert_called_once_with(["maker-dao", "lido"])
        out = capsys.readouterr().out
        assert "=== maker-dao ===" in out
        assert "=== lido ===" in out
        assert "Overall Score" in out

    @pytest.mark.unit
    def test_defaults_to_all_registered_protocols(self, engine_factory, capsys):
        engine = engine_factory()
        with patch("protocol_risk.__main__.get_risk_reports", side_effect=engine.get_risk_reports) as mock_reports:
            main([])

        mock_reports.assert_called_once_with(protocol_risk.list_protocols())

    @pytest.mark.unit
    def test_unknown_protocol_exits_non_zero(self, capsys):
        assert main(["does-not-exist"]) == 1
        assert "Unknown protocol: does-not-exist" in capsys.readouterr().err


class TestPackageExports:

    @pytest.mark.unit
    def test_simulator_exported(self):
        assert protocol_risk.calculate_projected_yield(100, 0.0, 1)[-1].value == 100
        assert protocol_risk.get_catalog_entry("aave-v3")["name"] == "Aave V3"
        assert protocol_risk.calculate_heuristic_risk_score(0.0, 10_000_000_000) == 3
