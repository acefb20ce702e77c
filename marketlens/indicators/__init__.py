"""
Indicator calculation module.

Provides all technical indicators:
- Moving averages (SMA, EMA)
- Oscillators (RSI, MACD with signal line and histogram)

All indicators are pure functions of the full price history and follow a
unified interface for use by the aligned dashboard table.
"""
from .moving_averages import sma, ema
from .oscillators import rsi, macd, signal_line, MACDResult
from .base import Indicator
from .implementations import SMAIndicator, EMAIndicator, RSIIndicator, MACDIndicator

__all__ = [
    'sma',
    'ema',
    'rsi',
    'macd',
    'signal_line',
    'MACDResult',
    'Indicator',
    'SMAIndicator',
    'EMAIndicator',
    'RSIIndicator',
    'MACDIndicator',
]
