"""
Tests for RSI and MACD.
"""
import pytest
import pandas as pd
import numpy as np
from marketlens.indicators.oscillators import rsi, macd, signal_line, MACDResult
from marketlens.shared.validation import InvalidParameterError


@pytest.fixture
def sample_prices():
    dates = pd.date_range('2021-01-01', periods=120, freq='B')
    rng = np.random.default_rng(42)
    return pd.Series(100 + np.cumsum(rng.standard_normal(120)), index=dates)


class TestRSI:
    """Test RSI calculation."""

    def test_constant_prices_example(self):
        """[10,10,10,10,10], period 3 -> [u,u,u,100,100]."""
        result = rsi([10, 10, 10, 10, 10], 3)
        assert result.isna().tolist() == [True, True, True, False, False]
        assert result.iloc[3:].tolist() == [100.0, 100.0]

    def test_rsi_range(self, sample_prices):
        """RSI should be between 0 and 100."""
        valid = rsi(sample_prices).dropna()
        assert valid.min() >= 0
        assert valid.max() <= 100

    def test_rsi_length(self, sample_prices):
        """RSI should have same length as input."""
        result = rsi(sample_prices)
        assert len(result) == len(sample_prices)
        assert result.iloc[:14].isna().all()
        assert result.iloc[14:].notna().all()

    def test_rising_prices_exactly_100(self):
        result = rsi(np.arange(1.0, 31.0), 14)
        assert (result.dropna() == 100.0).all()

    def test_falling_prices_exactly_0(self):
        result = rsi(np.arange(30.0, 0.0, -1.0), 14)
        assert (result.dropna() == 0.0).all()

    def test_simple_average_value(self):
        """Gains 2 and 2, loss 1 over period 3 -> RS = 4, RSI = 80."""
        result = rsi([10, 12, 11, 13], 3)
        assert result.iloc[3] == pytest.approx(80.0)

    def test_shorter_than_period_all_undefined(self):
        """n < period gives no defined value."""
        assert rsi([1.0, 2.0, 3.0], 5).isna().all()
        # n == period still lacks one delta
        assert rsi([1.0, 2.0, 3.0], 3).isna().all()

    def test_rsi_period(self, sample_prices):
        """Different periods should give different results."""
        assert not rsi(sample_prices, 7).dropna().equals(rsi(sample_prices, 14).dropna())

    def test_undefined_delta_not_counted_as_zero(self):
        result = rsi([10.0, 11.0, np.nan, 12.0, 13.0, 14.0, 15.0], 2)
        assert result.iloc[2:4].isna().all()
        assert result.iloc[-1] == 100.0

    def test_invalid_period(self):
        with pytest.raises(InvalidParameterError):
            rsi([1, 2, 3], 0)


class TestMACD:
    """Test MACD calculation."""

    def test_returns_aligned_components(self, sample_prices):
        result = macd(sample_prices)
        assert isinstance(result, MACDResult)
        for series in (result.macd, result.signal, result.histogram):
            assert len(series) == len(sample_prices)
            pd.testing.assert_index_equal(series.index, sample_prices.index)

    def test_definition_boundaries(self, sample_prices):
        """macd defined from slow-1; signal from slow-1 + signal-1."""
        result = macd(sample_prices, 12, 26, 9)
        assert result.macd.iloc[:25].isna().all()
        assert result.macd.iloc[25:].notna().all()
        assert result.signal.iloc[:33].isna().all()
        assert result.signal.iloc[33:].notna().all()

    def test_histogram_is_difference(self, sample_prices):
        result = macd(sample_prices)
        both = result.macd.notna() & result.signal.notna()
        diff = result.macd[both] - result.signal[both]
        pd.testing.assert_series_equal(result.histogram[both], diff, check_names=False)
        assert (result.histogram.isna() == ~both).all()

    def test_constant_prices_zero(self):
        result = macd([50.0] * 40)
        assert (result.histogram.dropna() == 0.0).all()
        assert (result.macd.dropna() == 0.0).all()

    def test_short_series_undefined(self):
        result = macd(np.arange(1.0, 21.0))
        assert result.macd.isna().all()
        assert result.signal.isna().all()
        assert result.histogram.isna().all()

    def test_fast_must_be_less_than_slow(self):
        with pytest.raises(InvalidParameterError, match="fast"):
            macd([1, 2, 3], fast=26, slow=12)

    def test_to_frame(self, sample_prices):
        frame = macd(sample_prices).to_frame()
        assert list(frame.columns) == ["macd", "signal", "histogram"]


class TestSignalLine:
    """signal_line smooths only the defined suffix."""

    def test_all_undefined(self):
        line = pd.Series([np.nan] * 5)
        assert signal_line(line, 3).isna().all()

    def test_padded_back_to_full_length(self):
        line = pd.Series([np.nan, np.nan, 1.0, 2.0, 3.0, 4.0])
        result = signal_line(line, 3)
        assert result.isna().tolist() == [True, True, True, True, False, False]
        assert result.iloc[4:].tolist() == pytest.approx([2.0, 3.0])
