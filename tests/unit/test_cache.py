"""
Unit tests for the time-boxed cache.

Covers the freshness window boundary, overwrite-on-put semantics and
isolation between cache instances.
"""

import pytest

from protocol_risk.core.cache import TimeBoxedCache


class TestFreshnessWindow:
    """Tests for entry expiry."""

    @pytest.mark.unit
    def test_missing_key_is_absent(self, cache):
        assert cache.get("tvl:aave-v3") is None

    @pytest.mark.unit
    def test_fresh_entry_is_served(self, cache, fake_clock):
        cache.put("tvl:aave-v3", {"total": 1})
        fake_clock.advance(299)
        assert cache.get("tvl:aave-v3") == {"total": 1}

    @pytest.mark.unit
    def test_entry_expires_at_window(self, cache, fake_clock):
        """now - stored_at < window is required, so exactly 300s is stale."""
        cache.put("tvl:aave-v3", {"total": 1})
        fake_clock.advance(300)
        assert cache.get("tvl:aave-v3") is None

    @pytest.mark.unit
    def test_stale_entry_is_not_purged(self, cache, fake_clock):
        cache.put("tvl:aave-v3", {"total": 1})
        fake_clock.advance(1000)
        assert cache.get("tvl:aave-v3") is None
        assert len(cache) == 1

    @pytest.mark.unit
    def test_put_replaces_and_restarts_window(self, cache, fake_clock):
        cache.put("market:aave", {"price": 1})
        fake_clock.advance(250)
        cache.put("market:aave", {"price": 2})
        fake_clock.advance(250)
        assert cache.get("market:aave") == {"price": 2}

    @pytest.mark.unit
    def test_put_does_not_merge(self, cache):
        cache.put("usage:aave-v3", {"a": 1, "b": 2})
        cache.put("usage:aave-v3", {"a": 3})
        assert cache.get("usage:aave-v3") == {"a": 3}


class TestCacheConstruction:

    @pytest.mark.unit
    @pytest.mark.parametrize("window", [0, -5])
    def test_rejects_non_positive_window(self, window):
        with pytest.raises(ValueError):
            TimeBoxedCache(freshness_seconds=window)

    @pytest.mark.unit
    def test_default_window_is_five_minutes(self):
        assert TimeBoxedCache().freshness_seconds == 300

    @pytest.mark.unit
    def test_instances_are_isolated(self, fake_clock):
        first = TimeBoxedCache(clock=fake_clock)
        second = TimeBoxedCache(clock=fake_clock)
        first.put("tvl:lido", 1)
        assert second.get("tvl:lido") is None

    @pytest.mark.unit
    def test_contains_respects_freshness(self, cache, fake_clock):
        cache.put("tvl:lido", 1)
        assert "tvl:lido" in cache
        fake_clock.advance(301)
        assert "tvl:lido" not in cache

    @pytest.mark.unit
    def test_clear(self, cache):
        cache.put("tvl:lido", 1)
        cache.clear()
        assert len(cache) == 0
