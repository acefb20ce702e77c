"""
Individual indicator implementations following the Indicator interface.

These classes give the table builder a uniform way to compute and name
columns, so adding an indicator does not touch the alignment code.
"""
from typing import Tuple

import pandas as pd

from .base import Indicator
from .moving_averages import sma, ema
from .oscillators import rsi, macd
from ..shared.defaults import (
    SMA_SHORT_PERIOD,
    EMA_SHORT_PERIOD,
    RSI_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
)
from ..shared.validation import InvalidParameterError, validate_period


class SMAIndicator(Indicator):
    """Simple Moving Average indicator."""

    def __init__(self, period: int = SMA_SHORT_PERIOD):
        self.period = validate_period(period)
        self.key = f"sma{self.period}"

    @property
    def columns(self) -> Tuple[str, ...]:
        return (self.key,)

    def calculate(self, prices: pd.Series) -> pd.Series:
        """Calculate SMA values."""
        return sma(prices, self.period)


class EMAIndicator(Indicator):
    """Exponential Moving Average indicator."""

    def __init__(self, period: int = EMA_SHORT_PERIOD):
        self.period = validate_period(period)
        self.key = f"ema{self.period}"

    @property
    def columns(self) -> Tuple[str, ...]:
        return (self.key,)

    def calculate(self, prices: pd.Series) -> pd.Series:
        """Calculate EMA values."""
        return ema(prices, self.period)


class RSIIndicator(Indicator):
    """Relative Strength Index indicator (simple trailing average)."""

    key = "rsi"

    def __init__(self, period: int = RSI_PERIOD):
        self.period = validate_period(period)

    @property
    def columns(self) -> Tuple[str, ...]:
        return ("rsi",)

    def calculate(self, prices: pd.Series) -> pd.Series:
        """Calculate RSI values."""
        return rsi(prices, self.period)


class MACDIndicator(Indicator):
    """MACD (Moving Average Convergence Divergence) indicator."""

    key = "macd"

    def __init__(
        self,
        fast: int = MACD_FAST,
        slow: int = MACD_SLOW,
        signal: int = MACD_SIGNAL,
    ):
        self.fast = validate_period(fast, "fast")
        self.slow = validate_period(slow, "slow")
        self.signal = validate_period(signal, "signal")
        if self.fast >= self.slow:
            raise InvalidParameterError(
                f"MACD fast period ({self.fast}) must be less than slow period ({self.slow})"
            )

    @property
    def columns(self) -> Tuple[str, ...]:
        return ("macd", "macd_signal", "macd_histogram")

    def calculate(self, prices: pd.Series) -> pd.Series:
        """
        Calculate MACD histogram (MACD line - Signal line).

        Returns histogram as it's the most commonly used MACD value.
        """
        return macd(prices, self.fast, self.slow, self.signal).histogram

    def calculate_frame(self, prices: pd.Series) -> pd.DataFrame:
        result = macd(prices, self.fast, self.slow, self.signal)
        return pd.DataFrame({
            "macd": result.macd,
            "macd_signal": result.signal,
            "macd_histogram": result.histogram,
        }, index=prices.index)


# Export all indicator classes
__all__ = ['SMAIndicator', 'EMAIndicator', 'RSIIndicator', 'MACDIndicator']
