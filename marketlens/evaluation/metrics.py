"""
Summary metrics aggregator.

Reduces a trade list and an equity curve into BacktestMetrics. Trade-based
figures (win rate, average return, expectancy, Sharpe, profit factor) come
from trade P&L; total return and max drawdown come from the equity curve.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..shared.defaults import EXPECTANCY_UNIT_RISK_PCT, TRADING_DAYS_PER_YEAR
from ..shared.validation import as_float_series, validate_positive
from .equity import EquityCurvePoint, drawdown
from .trades import BacktestMetrics, Trade

logger = logging.getLogger(__name__)

EquityInput = Union[pd.DataFrame, pd.Series, Sequence[EquityCurvePoint], None]


def _equity_frame(equity_curve: EquityInput) -> pd.DataFrame:
    """Normalize the accepted equity inputs to a frame with equity and drawdown columns."""
    if equity_curve is None:
        return pd.DataFrame({"equity": pd.Series(dtype="float64"), "drawdown": pd.Series(dtype="float64")})
    if isinstance(equity_curve, pd.DataFrame):
        frame = equity_curve
    elif isinstance(equity_curve, pd.Series):
        frame = pd.DataFrame({"equity": equity_curve})
    else:
        points = list(equity_curve)
        frame = pd.DataFrame({
            "equity": [p.equity for p in points],
            "drawdown": [p.drawdown for p in points],
        }, index=[p.date for p in points])
    if "equity" not in frame.columns:
        raise ValueError(f"Equity data needs an equity column. Available: {list(frame.columns)}")
    equity = as_float_series(frame["equity"])
    if "drawdown" in frame.columns:
        dd = as_float_series(frame["drawdown"])
    else:
        dd = drawdown(equity)
    return pd.DataFrame({"equity": equity, "drawdown": dd})


def total_return(equity: pd.Series) -> float:
    """100 * (last - first) / first over the defined equity points (0.0 if fewer than one)."""
    defined = as_float_series(equity).dropna()
    if defined.empty or defined.iloc[0] <= 0:
        return 0.0
    first = defined.iloc[0]
    return float((defined.iloc[-1] - first) / first * 100)


def max_drawdown(drawdowns: pd.Series) -> float:
    """Largest drawdown percentage (0.0 for an empty or undefined curve)."""
    defined = as_float_series(drawdowns).dropna()
    if defined.empty:
        return 0.0
    return float(defined.max())


def profit_factor(pnls: Iterable[float]) -> float:
    """
    Gross profit / gross loss.

    inf when there are profits but no losses, 0.0 when there are neither.
    """
    values = list(pnls)
    total_gains = sum(p for p in values if p > 0)
    total_losses = abs(sum(p for p in values if p < 0))
    if total_losses > 0:
        return total_gains / total_losses
    return float('inf') if total_gains > 0 else 0.0


def annualized_sharpe(returns: Sequence[float], periods_per_year: float) -> float:
    """
    mean / sample stdev of per-period returns, scaled by sqrt(periods_per_year).

    Returns 0.0 with fewer than two returns or no dispersion.
    """
    arr = np.asarray([r for r in returns if r is not None and math.isfinite(r)], dtype=float)
    if len(arr) < 2:
        return 0.0
    std = arr.std(ddof=1)
    if not np.isfinite(std) or std == 0:
        return 0.0
    return float(arr.mean() / std * math.sqrt(periods_per_year))


def trades_per_year(trades: Sequence[Trade]) -> float:
    """
    Trade frequency from the span between the first entry and the last exit.

    Falls back to TRADING_DAYS_PER_YEAR (one trade per session) when the span
    cannot be determined or is shorter than a day.
    """
    if not trades:
        return float(TRADING_DAYS_PER_YEAR)
    entries = pd.to_datetime([t.entry_date for t in trades], errors="coerce")
    exits = pd.to_datetime([t.exit_date for t in trades], errors="coerce")
    if entries.isna().any() or exits.isna().any():
        logger.warning("Unparseable trade dates; annualizing Sharpe as daily returns")
        return float(TRADING_DAYS_PER_YEAR)
    span_days = (exits.max() - entries.min()).days
    if span_days < 1:
        return float(TRADING_DAYS_PER_YEAR)
    return len(trades) * 365.25 / span_days


def compute_metrics(
    trades: Iterable[Trade],
    equity_curve: EquityInput = None,
    unit_risk_pct: float = EXPECTANCY_UNIT_RISK_PCT,
    periods_per_year: Optional[float] = None,
) -> BacktestMetrics:
    """
    Compute headline backtest metrics.

    Args:
        trades: Closed trades
        equity_curve: DataFrame with an equity column (drawdown is derived if
            missing), an equity Series, or EquityCurvePoint values
        unit_risk_pct: Size of one R in percent of position value. The default
            of 100 gives expectancy = mean(pnl_percent) / 100; pass the
            strategy's stop-loss % for stop-based R-multiples.
        periods_per_year: Annualization factor for the Sharpe ratio (default:
            derived from the trade date span)

    Returns:
        BacktestMetrics
    """
    unit_risk_pct = validate_positive(unit_risk_pct, "unit_risk_pct")
    trade_list: List[Trade] = list(trades)
    frame = _equity_frame(equity_curve)

    n = len(trade_list)
    pnls = [t.pnl for t in trade_list]
    pnl_pcts = [t.pnl_percent for t in trade_list]

    winners = sum(1 for p in pnls if p > 0)
    win_rate = (winners / n * 100) if n else 0.0
    avg_return = (sum(pnl_pcts) / n) if n else 0.0
    expectancy = avg_return / unit_risk_pct

    if periods_per_year is None:
        periods_per_year = trades_per_year(trade_list)
    else:
        periods_per_year = validate_positive(periods_per_year, "periods_per_year")
    sharpe = annualized_sharpe([p / 100 for p in pnl_pcts], periods_per_year)

    metrics = BacktestMetrics(
        total_trades=n,
        win_rate=win_rate,
        avg_return=avg_return,
        max_drawdown=max_drawdown(frame["drawdown"]),
        expectancy=expectancy,
        sharpe_ratio=sharpe,
        profit_factor=profit_factor(pnls),
        total_return=total_return(frame["equity"]),
        unit_risk_pct=unit_risk_pct,
    )
    logger.debug(
        f"Metrics: {n} trades, win rate {win_rate:.1f}%, "
        f"total return {metrics.total_return:.2f}%, max DD {metrics.max_drawdown:.2f}%"
    )
    return metrics
