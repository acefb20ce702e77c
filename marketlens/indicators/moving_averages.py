"""
Simple and exponential moving averages.

Both functions return a float Series of the same length and index as the
input. Positions before the lookback window is satisfied are NaN (undefined).
"""
import logging

import numpy as np
import pandas as pd

from ..shared.validation import SeriesLike, as_float_series, validate_period

logger = logging.getLogger(__name__)


def sma(prices: SeriesLike, period: int) -> pd.Series:
    """
    Simple Moving Average.

    NaN for i < period - 1, otherwise the mean of prices[i-period+1 .. i].
    Uses pandas' running-sum rolling mean (O(n)). A window that contains an
    undefined value is itself undefined.
    """
    period = validate_period(period)
    series = as_float_series(prices)
    if series.empty:
        return series
    return series.rolling(window=period, min_periods=period).mean()


def ema(prices: SeriesLike, period: int) -> pd.Series:
    """
    Exponential Moving Average seeded with the SMA of the first `period` values.

    k = 2 / (period + 1)
    ema[period-1] = sma(prices, period)[period-1]
    ema[i] = (prices[i] - ema[i-1]) * k + ema[i-1]

    Once a value is undefined every later value is undefined too, since the
    recurrence depends on it. period == 1 is the identity series.
    """
    period = validate_period(period)
    series = as_float_series(prices)
    if series.empty:
        return series
    if period == 1:
        return series

    values = series.to_numpy(dtype=float)
    n = len(values)
    out = np.full(n, np.nan)
    if n < period:
        logger.debug(f"EMA({period}) undefined: only {n} values")
        return pd.Series(out, index=series.index)

    k = 2.0 / (period + 1)
    # Seed is the first defined SMA so the two agree at index period - 1
    prev = float(sma(series.iloc[:period], period).iloc[-1])
    out[period - 1] = prev
    for i in range(period, n):
        if np.isnan(prev):
            break
        prev = (values[i] - prev) * k + prev
        out[i] = prev

    return pd.Series(out, index=series.index)
