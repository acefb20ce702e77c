"""
Quote header figures derived from the bar series.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Union

import pandas as pd

from ..data.bars import ensure_ohlcv_frame
from ..shared.defaults import QUOTE_RANGE_BARS, VOLUME_WINDOW
from ..shared.types import PriceBar, optional_float
from ..shared.validation import validate_period

BarsInput = Union[pd.DataFrame, Iterable[PriceBar]]


@dataclass(frozen=True)
class QuoteSummary:
    """Latest price, day change and 52-week range."""
    price: float
    change: Optional[float]  # vs previous close; None with a single bar
    change_percent: Optional[float]
    volume: Optional[int]
    high_52w: Optional[float]
    low_52w: Optional[float]


def quote_summary(bars: BarsInput, range_bars: int = QUOTE_RANGE_BARS) -> Optional[QuoteSummary]:
    """
    Summarize the latest bar against the previous close and the trailing range.

    Returns None when there is no defined close.
    """
    range_bars = validate_period(range_bars, "range_bars")
    df = ensure_ohlcv_frame(bars)
    closes = df["close"].dropna()
    if closes.empty:
        return None

    price = float(closes.iloc[-1])
    change = change_percent = None
    if len(closes) > 1:
        previous = float(closes.iloc[-2])
        change = price - previous
        change_percent = change / previous * 100 if previous else None

    recent = df.iloc[-range_bars:]
    volume = optional_float(df["volume"].iloc[-1])
    return QuoteSummary(
        price=price,
        change=change,
        change_percent=change_percent,
        volume=None if volume is None else int(volume),
        high_52w=optional_float(recent["high"].max()),
        low_52w=optional_float(recent["low"].min()),
    )


def period_change(bars: BarsInput) -> Optional[dict]:
    """First-to-last close change over the whole series: {"change": ..., "change_percent": ...}."""
    closes = ensure_ohlcv_frame(bars)["close"].dropna()
    if closes.empty:
        return None
    first, last = float(closes.iloc[0]), float(closes.iloc[-1])
    return {
        "change": last - first,
        "change_percent": (last - first) / first * 100 if first else None,
    }


def average_volume(bars: BarsInput, window: int = VOLUME_WINDOW) -> Optional[float]:
    """Mean volume over the trailing window (None without volume data)."""
    window = validate_period(window, "window")
    volume = ensure_ohlcv_frame(bars)["volume"].iloc[-window:].dropna()
    if volume.empty:
        return None
    return float(volume.mean())
