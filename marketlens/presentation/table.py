"""
Series alignment and windowing for the dashboard charts.

All indicators are computed over the full bar history and merged into one
DataFrame keyed by date. Trailing windows and column projection are applied
afterwards, so they can only change which rows and columns are exposed,
never the indicator values themselves.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from ..data.bars import ensure_ohlcv_frame, malformed_bar_mask
from ..evaluation.equity import drawdown
from ..indicators.base import Indicator
from ..indicators.implementations import SMAIndicator, EMAIndicator, RSIIndicator, MACDIndicator
from ..shared.defaults import (
    SMA_SHORT_PERIOD, SMA_LONG_PERIOD,
    EMA_SHORT_PERIOD, EMA_LONG_PERIOD,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
)
from ..shared.series import pad_to_length
from ..shared.types import PriceBar, optional_float
from ..shared.validation import InvalidParameterError, validate_period

logger = logging.getLogger(__name__)

__all__ = [
    "TableSpec",
    "IndicatorToggle",
    "indicator_toggles",
    "default_enabled_keys",
    "build_indicator_table",
    "trailing_window",
    "select_columns",
    "column_groups",
    "table_to_records",
    "pad_to_length",
]

PRICE_COLUMNS = ("open", "high", "low", "close", "is_green")
EQUITY_COLUMNS = ("equity", "drawdown", "benchmark")
_MA_KEY = re.compile(r"^(sma|ema)\d+$")


@dataclass(frozen=True)
class TableSpec:
    """Which indicators the aligned table carries and their parameters."""
    sma_periods: Tuple[int, ...] = (SMA_SHORT_PERIOD, SMA_LONG_PERIOD)
    ema_periods: Tuple[int, ...] = (EMA_SHORT_PERIOD, EMA_LONG_PERIOD)
    rsi_period: int = RSI_PERIOD
    rsi_oversold: float = RSI_OVERSOLD
    rsi_overbought: float = RSI_OVERBOUGHT
    macd_fast: int = MACD_FAST
    macd_slow: int = MACD_SLOW
    macd_signal: int = MACD_SIGNAL

    def __post_init__(self) -> None:
        for p in (*self.sma_periods, *self.ema_periods):
            validate_period(p)
        validate_period(self.rsi_period, "rsi_period")
        if self.rsi_oversold >= self.rsi_overbought:
            raise InvalidParameterError(
                f"RSI oversold ({self.rsi_oversold}) must be less than overbought ({self.rsi_overbought})"
            )

    @classmethod
    def from_strategy(cls, config) -> "TableSpec":
        """SMA periods and RSI settings from a StrategyConfig; EMA/MACD keep chart defaults."""
        return cls(
            sma_periods=(config.short_ma, config.long_ma),
            rsi_period=config.rsi_period,
            rsi_oversold=config.rsi_oversold,
            rsi_overbought=config.rsi_overbought,
        )

    def indicators(self) -> List[Indicator]:
        out: List[Indicator] = [SMAIndicator(p) for p in dict.fromkeys(self.sma_periods)]
        out += [EMAIndicator(p) for p in dict.fromkeys(self.ema_periods)]
        out.append(RSIIndicator(self.rsi_period))
        out.append(MACDIndicator(self.macd_fast, self.macd_slow, self.macd_signal))
        return out

    def cache_params(self) -> Dict[str, Any]:
        return {
            "sma": list(self.sma_periods),
            "ema": list(self.ema_periods),
            "rsi": [self.rsi_period, self.rsi_oversold, self.rsi_overbought],
            "macd": [self.macd_fast, self.macd_slow, self.macd_signal],
        }


@dataclass(frozen=True)
class IndicatorToggle:
    """A user-toggleable column group on the unified chart."""
    key: str
    label: str
    group: str  # "price" or "oscillator"
    default_enabled: bool = False


def indicator_toggles(spec: Optional[TableSpec] = None) -> List[IndicatorToggle]:
    """Toggle list in chart order: price, equity, SMAs, EMAs, volume, RSI, MACD."""
    spec = spec or TableSpec()
    toggles = [
        IndicatorToggle("price", "Price", "price", True),
        IndicatorToggle("equity", "Equity Curve", "price", False),
    ]
    toggles += [IndicatorToggle(f"sma{p}", f"SMA {p}", "price", True) for p in dict.fromkeys(spec.sma_periods)]
    toggles += [IndicatorToggle(f"ema{p}", f"EMA {p}", "price", False) for p in dict.fromkeys(spec.ema_periods)]
    toggles += [
        IndicatorToggle("volume", "Volume", "price", True),
        IndicatorToggle("rsi", f"RSI ({spec.rsi_period})", "oscillator", False),
        IndicatorToggle("macd", "MACD", "oscillator", False),
    ]
    return toggles


def default_enabled_keys(spec: Optional[TableSpec] = None) -> List[str]:
    return [t.key for t in indicator_toggles(spec) if t.default_enabled]


def _align_equity(equity: Union[pd.DataFrame, pd.Series], index: pd.DatetimeIndex) -> pd.DataFrame:
    """
    Align an equity series/frame to the table's date index.

    Date-indexed input is matched by date; dates without an equity point stay
    undefined. Input without a date index must have one row per table row.
    """
    frame = equity.to_frame("equity") if isinstance(equity, pd.Series) else equity
    if "equity" not in frame.columns:
        raise ValueError(f"Equity data needs an equity column. Available: {list(frame.columns)}")
    frame = frame[[c for c in EQUITY_COLUMNS if c in frame.columns]].astype("float64")
    if "drawdown" not in frame.columns:
        # Drawdown from the equity's own history, before any reindexing
        frame = frame.assign(drawdown=drawdown(frame["equity"]))

    if isinstance(frame.index, pd.DatetimeIndex):
        return frame.reindex(index)
    if len(frame) != len(index):
        raise ValueError(
            f"Equity without a date index must match the bar count ({len(frame)} != {len(index)})"
        )
    return frame.set_axis(index)


def build_indicator_table(
    bars: Union[pd.DataFrame, Iterable[PriceBar]],
    spec: Optional[TableSpec] = None,
    equity: Optional[Union[pd.DataFrame, pd.Series]] = None,
) -> pd.DataFrame:
    """
    Merge raw bars, every indicator and optional equity into one date-indexed table.

    Args:
        bars: OHLCV DataFrame or PriceBar values (full history, ascending dates)
        spec: Indicator selection and parameters (default: chart defaults)
        equity: Optional equity Series or frame with equity[, drawdown, benchmark]

    Returns:
        DataFrame indexed by date with columns open, high, low, close, volume,
        is_green, indicator columns (NaN = undefined), rsi_oversold,
        rsi_overbought (nullable booleans) and equity columns if given
    """
    spec = spec or TableSpec()
    df = ensure_ohlcv_frame(bars)

    malformed = malformed_bar_mask(df)
    if malformed.any():
        logger.warning(f"{int(malformed.sum())} bar(s) violate the OHLC ordering; values are kept as-is")

    table = df.copy()
    undefined_body = df["open"].isna() | df["close"].isna()
    table["is_green"] = (df["close"] >= df["open"]).astype("boolean").mask(undefined_body)

    close = df["close"]
    for indicator in spec.indicators():
        frame = indicator.calculate_frame(close)
        for col in frame.columns:
            table[col] = frame[col]

    undefined_rsi = table["rsi"].isna()
    table["rsi_oversold"] = (table["rsi"] < spec.rsi_oversold).astype("boolean").mask(undefined_rsi)
    table["rsi_overbought"] = (table["rsi"] > spec.rsi_overbought).astype("boolean").mask(undefined_rsi)

    if equity is not None:
        aligned = _align_equity(equity, table.index)
        for col in aligned.columns:
            table[col] = aligned[col]

    logger.debug(f"Built indicator table: {len(table)} rows, {len(table.columns)} columns")
    return table


def trailing_window(table: pd.DataFrame, n: int) -> pd.DataFrame:
    """Last n rows of an already computed table (all rows if n exceeds the length)."""
    n = validate_period(n, "window")
    return table.iloc[-n:].copy()


def column_groups(table: pd.DataFrame) -> Dict[str, List[str]]:
    """Map each toggle key to the table columns it controls (only keys present in the table)."""
    groups: Dict[str, List[str]] = {}
    for col in table.columns:
        if col in PRICE_COLUMNS:
            key = "price"
        elif col in EQUITY_COLUMNS:
            key = "equity"
        elif col.startswith("rsi"):
            key = "rsi"
        elif col.startswith("macd"):
            key = "macd"
        elif col == "volume" or _MA_KEY.match(col):
            key = col
        else:
            continue
        groups.setdefault(key, []).append(col)
    return groups


def select_columns(table: pd.DataFrame, enabled: Iterable[str]) -> pd.DataFrame:
    """
    Project the table onto the enabled toggle keys.

    Pure projection: no values are recomputed. The date index always stays.
    Raises InvalidParameterError for keys the table does not carry.
    """
    groups = column_groups(table)
    keys = list(dict.fromkeys(enabled))
    unknown = [k for k in keys if k not in groups]
    if unknown:
        raise InvalidParameterError(f"Unknown indicator key(s) {unknown}. Available: {list(groups)}")
    wanted = {col for k in keys for col in groups[k]}
    return table[[c for c in table.columns if c in wanted]]


def _record_value(col: str, value):
    if value is None or value is pd.NA:
        return None
    if isinstance(value, bool) or col in ("is_green", "rsi_oversold", "rsi_overbought"):
        return bool(value)
    if col == "volume":
        number = optional_float(value)
        return None if number is None else int(number)
    return optional_float(value)


def table_to_records(table: pd.DataFrame) -> List[Dict[str, Any]]:
    """One dict per row with an ISO "date" key and None for undefined values."""
    records = []
    columns = list(table.columns)
    for ts, values in zip(table.index, table.itertuples(index=False, name=None)):
        record: Dict[str, Any] = {"date": pd.Timestamp(ts).strftime("%Y-%m-%d")}
        for col, value in zip(columns, values):
            record[col] = _record_value(col, value)
        records.append(record)
    return records
