"""
Tests for IndicatorCache: fingerprint computation and in-memory caching.
"""
import pytest
import pandas as pd
import numpy as np
from marketlens.cache import compute_fingerprint, IndicatorCache
from marketlens.shared.validation import InvalidParameterError


@pytest.fixture
def frame():
    return pd.DataFrame({"close": [1.0, 2.0, 3.0]}, index=pd.date_range("2024-01-01", periods=3))


class TestFingerprintComputation:
    """Tests for fingerprint computation."""

    def test_compute_fingerprint_basic(self, frame):
        fp = compute_fingerprint("table", {"sma": [20, 50]}, frame)
        assert isinstance(fp, str)
        assert len(fp) == 16  # First 16 chars of SHA256

    def test_compute_fingerprint_stability(self, frame):
        """Same inputs produce the same fingerprint, regardless of key order."""
        fp1 = compute_fingerprint("table", {"a": 1, "b": 2}, frame)
        fp2 = compute_fingerprint("table", {"b": 2, "a": 1}, frame.copy())
        assert fp1 == fp2

    def test_compute_fingerprint_different_params(self, frame):
        assert compute_fingerprint("table", {"rsi": 14}, frame) != compute_fingerprint("table", {"rsi": 7}, frame)
        assert compute_fingerprint("table", {}, frame) != compute_fingerprint("equity", {}, frame)

    def test_compute_fingerprint_different_data(self, frame):
        changed = frame.copy()
        changed.iloc[1, 0] = 2.5
        assert compute_fingerprint("table", {}, frame) != compute_fingerprint("table", {}, changed)
        shifted = frame.set_axis(pd.date_range("2025-01-01", periods=3))
        assert compute_fingerprint("table", {}, frame) != compute_fingerprint("table", {}, shifted)

    def test_compute_fingerprint_series(self, frame):
        fp = compute_fingerprint("equity", {}, frame["close"])
        assert fp == compute_fingerprint("equity", {}, frame["close"].copy())


class TestIndicatorCache:
    """In-memory LRU cache behaviour."""

    def test_miss_then_hit(self, frame):
        cache = IndicatorCache()
        assert cache.get("abc") is None
        cache.put("abc", frame)
        pd.testing.assert_frame_equal(cache.get("abc"), frame)
        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["total_requests"] == 2
        assert stats["hit_rate_pct"] == 50.0

    def test_cached_value_is_isolated(self, frame):
        cache = IndicatorCache()
        cache.put("k", frame)
        frame.iloc[0, 0] = 99.0
        got = cache.get("k")
        assert got.iloc[0, 0] == 1.0
        got.iloc[0, 0] = -1.0
        assert cache.get("k").iloc[0, 0] == 1.0

    def test_get_or_compute(self, frame):
        cache = IndicatorCache()
        calls = []

        def compute():
            calls.append(1)
            return frame

        first = cache.get_or_compute("k", compute)
        second = cache.get_or_compute("k", compute)
        assert len(calls) == 1
        pd.testing.assert_frame_equal(first, second)

    def test_lru_eviction(self):
        cache = IndicatorCache(max_entries=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert len(cache) == 2
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3

    def test_clear(self):
        cache = IndicatorCache()
        cache.put("a", np.arange(3))
        cache.get("a")
        cache.clear()
        assert len(cache) == 0
        assert cache.get_stats()["hits"] == 0

    def test_invalid_size(self):
        with pytest.raises(InvalidParameterError, match="max_entries"):
            IndicatorCache(max_entries=0)

    def test_repr(self):
        cache = IndicatorCache()
        assert "IndicatorCache(entries=0" in repr(cache)
