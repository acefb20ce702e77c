"""
Momentum oscillators: RSI and MACD (line, signal, histogram).

RSI uses a simple trailing average of raw gains and losses over the last
`period` deltas, as the dashboard always has. It is intentionally NOT the
Wilder-smoothed RSI, so values differ from most charting packages.
"""
import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..shared.defaults import RSI_PERIOD, MACD_FAST, MACD_SLOW, MACD_SIGNAL
from ..shared.series import first_defined_position, pad_to_length
from ..shared.validation import (
    InvalidParameterError,
    SeriesLike,
    as_float_series,
    validate_period,
)
from .moving_averages import ema

logger = logging.getLogger(__name__)


def rsi(prices: SeriesLike, period: int = RSI_PERIOD) -> pd.Series:
    """
    Calculate Relative Strength Index (RSI).

    RSI = 100 - (100 / (1 + RS))
    RS = mean(last `period` gains) / mean(last `period` losses)

    Defined from index `period` onward (index 0 has no delta). When the window
    holds no loss the value is exactly 100; with losses but no gains it is
    exactly 0. Undefined deltas stay undefined instead of counting as zero.
    """
    period = validate_period(period)
    series = as_float_series(prices)
    if series.empty:
        return series

    delta = series.diff()
    gain = delta.clip(lower=0.0)
    loss = (-delta).clip(lower=0.0)

    avg_gain = gain.rolling(window=period, min_periods=period).mean()
    avg_loss = loss.rolling(window=period, min_periods=period).mean()

    # Integer counts are exact; running sums can leave 1e-17 residue behind
    gain_count = (gain > 0).astype(float).where(gain.notna()).rolling(period, min_periods=period).sum()
    loss_count = (loss > 0).astype(float).where(loss.notna()).rolling(period, min_periods=period).sum()

    with np.errstate(divide="ignore", invalid="ignore"):
        rs = avg_gain / avg_loss
        values = 100 - (100 / (1 + rs))

    values = values.where(gain_count > 0, 0.0)
    values = values.where(loss_count > 0, 100.0)
    values = values.where(avg_gain.notna() & avg_loss.notna())

    return values.clip(lower=0.0, upper=100.0)


@dataclass(frozen=True)
class MACDResult:
    """MACD components, each aligned to the input series."""
    macd: pd.Series
    signal: pd.Series
    histogram: pd.Series

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "macd": self.macd,
            "signal": self.signal,
            "histogram": self.histogram,
        })


def signal_line(macd_line: pd.Series, period: int = MACD_SIGNAL) -> pd.Series:
    """
    EMA of the contiguous defined suffix of macd_line, re-padded to full length.

    The EMA needs a dense input, so leading undefined values are compacted out
    before smoothing and restored afterwards.
    """
    period = validate_period(period, "signal")
    start = first_defined_position(macd_line)
    if start is None:
        return pd.Series(np.nan, index=macd_line.index, dtype="float64")
    compact = ema(macd_line.iloc[start:].to_numpy(), period)
    return pad_to_length(compact, len(macd_line), index=macd_line.index)


def macd(
    prices: SeriesLike,
    fast: int = MACD_FAST,
    slow: int = MACD_SLOW,
    signal: int = MACD_SIGNAL,
) -> MACDResult:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    macd = EMA(fast) - EMA(slow), undefined where either EMA is.
    signal = EMA(signal) of the defined macd suffix.
    histogram = macd - signal, undefined where either is.
    """
    fast = validate_period(fast, "fast")
    slow = validate_period(slow, "slow")
    signal = validate_period(signal, "signal")
    if fast >= slow:
        raise InvalidParameterError(
            f"MACD fast period ({fast}) must be less than slow period ({slow})"
        )

    series = as_float_series(prices)
    macd_line = ema(series, fast) - ema(series, slow)
    sig = signal_line(macd_line, signal)
    histogram = macd_line - sig

    logger.debug(
        f"MACD({fast},{slow},{signal}): {int(histogram.notna().sum())}/{len(series)} defined"
    )
    return MACDResult(macd=macd_line, signal=sig, histogram=histogram)
