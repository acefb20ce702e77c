"""
Price bar conversion and loading.

Converts PriceBar sequences to the OHLCV DataFrame used by the engine
(DatetimeIndex, lower-case columns) and back, and loads bars from CSV.
Malformed bars are reported, never rejected.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from ..shared.types import PriceBar

logger = logging.getLogger(__name__)

OHLCV_COLUMNS = ["open", "high", "low", "close", "volume"]


def _normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Sort by date and drop duplicate dates (keeping the last), logging both."""
    if not df.index.is_monotonic_increasing:
        logger.warning("Bars are not in ascending date order; sorting")
        df = df.sort_index(kind="mergesort")
    duplicated = df.index.duplicated(keep="last")
    if duplicated.any():
        logger.warning(f"Dropping {int(duplicated.sum())} bar(s) with duplicate dates")
        df = df[~duplicated]
    return df


def bars_to_frame(bars: Iterable[PriceBar]) -> pd.DataFrame:
    """
    Build an OHLCV DataFrame indexed by date from PriceBar values.

    Returns:
        DataFrame with DatetimeIndex named "date" and columns open, high, low, close, volume
    """
    bar_list = list(bars)
    df = pd.DataFrame(
        {
            "open": [b.open for b in bar_list],
            "high": [b.high for b in bar_list],
            "low": [b.low for b in bar_list],
            "close": [b.close for b in bar_list],
            "volume": [b.volume for b in bar_list],
        },
        index=pd.DatetimeIndex(pd.to_datetime([b.date for b in bar_list]), name="date"),
        columns=OHLCV_COLUMNS,
    )
    df[["open", "high", "low", "close"]] = df[["open", "high", "low", "close"]].astype("float64")
    return _normalize_frame(df)


def frame_to_bars(df: pd.DataFrame) -> List[PriceBar]:
    """Convert an OHLCV DataFrame back to PriceBar values (ISO dates)."""
    bars = []
    for ts, row in df[OHLCV_COLUMNS].iterrows():
        volume = row["volume"]
        bars.append(PriceBar(
            date=pd.Timestamp(ts).strftime("%Y-%m-%d"),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=0 if pd.isna(volume) else int(volume),
        ))
    return bars


def ensure_ohlcv_frame(data: Union[pd.DataFrame, Iterable[PriceBar]]) -> pd.DataFrame:
    """
    Accept either PriceBar values or an OHLCV DataFrame and return a normalized frame.

    Column names are matched case-insensitively (Close, CLOSE, close). A frame
    with only a close column is accepted; missing columns are filled with NaN.
    """
    if not isinstance(data, pd.DataFrame):
        return bars_to_frame(data)
    df = data.rename(columns={c: str(c).lower() for c in data.columns})
    if "close" not in df.columns:
        raise ValueError(f"Bar data needs a close column. Available: {list(data.columns)}")
    df = df.reindex(columns=OHLCV_COLUMNS)
    if not isinstance(df.index, pd.DatetimeIndex):
        df.index = pd.to_datetime(df.index)
    return _normalize_frame(df.rename_axis("date"))


def malformed_bar_mask(df: pd.DataFrame) -> pd.Series:
    """
    True for bars violating low <= min(open, close) <= max(open, close) <= high.

    Bars with undefined prices count as malformed.
    """
    body_low = df[["open", "close"]].min(axis=1, skipna=False)
    body_high = df[["open", "close"]].max(axis=1, skipna=False)
    # Comparisons against NaN are False, so undefined prices fail the check
    ok = (df["low"] <= body_low) & (body_high <= df["high"])
    return ~ok


def load_bars_csv(
    path: Union[str, Path],
    start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
    end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
) -> pd.DataFrame:
    """
    Load OHLCV bars from a CSV file whose first column is the date.

    Args:
        path: CSV file path
        start_date: Start date for filtering (inclusive). If None, no start filter.
        end_date: End date for filtering (inclusive). If None, no end filter.

    Returns:
        Normalized OHLCV DataFrame

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no close column
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    df = pd.read_csv(path, index_col=0, parse_dates=True)
    df = ensure_ohlcv_frame(df)

    if start_date is not None:
        df = df[df.index >= pd.to_datetime(start_date)]
    if end_date is not None:
        df = df[df.index <= pd.to_datetime(end_date)]

    logger.info(f"Loaded {len(df)} bars from {path}")
    return df
