"""
Shared types, validation helpers and defaults for the analytics engine.

This module provides:
- PriceBar, DerivedSeriesPoint and SignalKind value types
- InvalidParameterError and parameter checks
- Centralized default values for all indicator and strategy parameters
"""
from .types import PriceBar, DerivedSeriesPoint, SignalKind, optional_float, series_points
from .validation import (
    InvalidParameterError,
    as_float_series,
    validate_period,
    validate_positive,
    validate_range,
)
from .defaults import (
    SMA_SHORT_PERIOD, SMA_LONG_PERIOD,
    EMA_SHORT_PERIOD, EMA_LONG_PERIOD,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    INITIAL_CAPITAL, EQUITY_MULTIPLIER,
    TRADING_DAYS_PER_YEAR,
)

__all__ = [
    'PriceBar',
    'DerivedSeriesPoint',
    'SignalKind',
    'optional_float',
    'series_points',
    'InvalidParameterError',
    'as_float_series',
    'validate_period',
    'validate_positive',
    'validate_range',
    'SMA_SHORT_PERIOD', 'SMA_LONG_PERIOD',
    'EMA_SHORT_PERIOD', 'EMA_LONG_PERIOD',
    'RSI_PERIOD', 'RSI_OVERSOLD', 'RSI_OVERBOUGHT',
    'MACD_FAST', 'MACD_SLOW', 'MACD_SIGNAL',
    'INITIAL_CAPITAL', 'EQUITY_MULTIPLIER',
    'TRADING_DAYS_PER_YEAR',
]
