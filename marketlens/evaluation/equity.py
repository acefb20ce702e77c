"""
Equity curve and drawdown calculation.

Builds a cumulative equity curve either from a price series (scaled price
return) or from per-period percentage returns (compounding), and derives the
running drawdown with a single running-maximum scan.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from ..shared.defaults import INITIAL_CAPITAL, EQUITY_MULTIPLIER, BENCHMARK_MULTIPLIER
from ..shared.series import first_defined_position
from ..shared.types import optional_float
from ..shared.validation import SeriesLike, as_float_series, validate_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquityCurvePoint:
    """Equity and drawdown at one date. Undefined values are None."""
    date: str
    equity: Optional[float]
    drawdown: Optional[float]


def equity_from_prices(
    prices: SeriesLike,
    initial_capital: float = INITIAL_CAPITAL,
    multiplier: float = EQUITY_MULTIPLIER,
) -> pd.Series:
    """
    Equity curve from price return since the first bar.

    equity[i] = initial_capital * (1 + (price[i] - price[0]) / price[0] * multiplier)

    The multiplier is a cosmetic participation factor (the dashboard shows
    1.15x the raw return); use 1.0 for a buy-and-hold benchmark.
    """
    initial_capital = validate_positive(initial_capital, "initial_capital")
    multiplier = validate_positive(multiplier, "multiplier")
    series = as_float_series(prices)
    if series.empty:
        return series
    base = series.iloc[0]
    if np.isnan(base) or base == 0:
        logger.warning("First price is undefined or zero; equity curve is undefined")
        return pd.Series(np.nan, index=series.index, dtype="float64")
    # capital + capital * r * m keeps whole-currency results exact
    return initial_capital + initial_capital * (series - base) / base * multiplier


def equity_from_returns(
    returns_pct: SeriesLike,
    initial_capital: float = INITIAL_CAPITAL,
) -> pd.Series:
    """
    Equity curve by compounding per-period percentage returns.

    equity[i] = initial_capital * prod(1 + returns_pct[j] / 100 for j <= i)

    Leading undefined returns (e.g. the first value of pct_change) mark the
    base period and map to initial_capital. Every point from the first later
    undefined return onwards depends on it and is undefined. With no defined
    return at all the whole curve is undefined.
    """
    initial_capital = validate_positive(initial_capital, "initial_capital")
    returns = as_float_series(returns_pct)
    if returns.empty:
        return returns
    start = first_defined_position(returns)
    if start is None:
        return pd.Series(np.nan, index=returns.index, dtype="float64")
    growth = 1 + returns / 100
    growth.iloc[:start] = 1.0
    return initial_capital * growth.cumprod(skipna=False)


def drawdown(equity: SeriesLike) -> pd.Series:
    """
    Running drawdown in percent of the running peak.

    drawdown[i] = 100 * (max(equity[0..i]) - equity[i]) / max(equity[0..i])

    Single pass over the data, no look-ahead. Zero at every new running maximum
    and NaN where equity is undefined (undefined points do not move the peak).
    """
    series = as_float_series(equity)
    if series.empty:
        return series
    peak = series.cummax(skipna=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        dd = (peak - series) / peak * 100
    # A non-positive peak has no meaningful percentage decline
    dd = dd.where(peak > 0, 0.0)
    return dd.where(series.notna())


def equity_curve(
    prices: SeriesLike,
    initial_capital: float = INITIAL_CAPITAL,
    multiplier: float = EQUITY_MULTIPLIER,
    include_benchmark: bool = True,
) -> pd.DataFrame:
    """
    Equity, drawdown and (optionally) the multiplier-1 benchmark for a price series.

    Returns:
        DataFrame indexed like prices with columns equity, drawdown[, benchmark]
    """
    equity = equity_from_prices(prices, initial_capital, multiplier)
    frame = pd.DataFrame({
        "equity": equity,
        "drawdown": drawdown(equity),
    }, index=equity.index)
    if include_benchmark:
        frame["benchmark"] = equity_from_prices(prices, initial_capital, BENCHMARK_MULTIPLIER)
    return frame


def equity_curve_points(frame: pd.DataFrame) -> List[EquityCurvePoint]:
    """Convert an equity frame (equity, drawdown columns) to EquityCurvePoint values."""
    points = []
    for ts, row in frame.iterrows():
        date = ts.strftime("%Y-%m-%d") if isinstance(ts, pd.Timestamp) else str(ts)
        points.append(EquityCurvePoint(
            date=date,
            equity=optional_float(row.get("equity")),
            drawdown=optional_float(row.get("drawdown")),
        ))
    return points
