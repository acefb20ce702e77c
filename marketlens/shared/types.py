"""
Shared value types used across engine modules.

This module consolidates the price bar, derived-series point and signal kind
types so that indicator, evaluation and presentation code agree on them.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import pandas as pd


class SignalKind(Enum):
    """Rule that opened a trade."""
    MA_PULLBACK = "MA_PULLBACK"
    RSI_OVERSOLD = "RSI_OVERSOLD"
    AI_ENHANCED = "AI_ENHANCED"


@dataclass(frozen=True)
class PriceBar:
    """
    One daily OHLCV bar.

    Bars are produced by the data source and never mutated by the engine.
    The OHLC ordering invariant is reported by is_well_formed but not enforced.
    """
    date: str  # ISO 8601 calendar day
    open: float
    high: float
    low: float
    close: float
    volume: int = 0

    @property
    def is_well_formed(self) -> bool:
        """True when low <= min(open, close) <= max(open, close) <= high."""
        values = (self.open, self.high, self.low, self.close)
        if any(v is None or not math.isfinite(v) for v in values):
            return False
        return self.low <= min(self.open, self.close) <= max(self.open, self.close) <= self.high

    @property
    def is_green(self) -> bool:
        return self.close >= self.open


@dataclass(frozen=True)
class DerivedSeriesPoint:
    """A single derived value at a position of the aligned series (None = not yet defined)."""
    index: int
    value: Optional[float] = None

    @property
    def is_defined(self) -> bool:
        return self.value is not None


def optional_float(value) -> Optional[float]:
    """Convert a scalar to float, mapping NaN/inf/None/NA to None."""
    if value is None or value is pd.NA:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def series_points(series: pd.Series) -> List[DerivedSeriesPoint]:
    """Convert an indicator series to positional points with None for undefined values."""
    return [
        DerivedSeriesPoint(index=i, value=optional_float(v))
        for i, v in enumerate(series.tolist())
    ]
