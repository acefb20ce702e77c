"""
Trade analysis helpers: aggregate closed trades by signal kind.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd

from ..shared.types import SignalKind
from .trades import Trade


def _metrics_for_trades(pnls: List[float], pnl_pcts: List[float]) -> Dict[str, Any]:
    n = len(pnls)
    if n == 0:
        return {
            "count": 0,
            "win_rate_pct": 0.0,
            "total_pnl": 0.0,
            "avg_pnl_pct": 0.0,
            "avg_win_pct": 0.0,
            "avg_loss_pct": 0.0,
        }
    winners = [p for p in pnl_pcts if p > 0]
    losers = [p for p in pnl_pcts if p < 0]
    return {
        "count": n,
        "win_rate_pct": sum(1 for p in pnls if p > 0) / n * 100,
        "total_pnl": sum(pnls),
        "avg_pnl_pct": sum(pnl_pcts) / n,
        "avg_win_pct": (sum(winners) / len(winners)) if winners else 0.0,
        "avg_loss_pct": (sum(losers) / len(losers)) if losers else 0.0,
    }


def aggregate_by_signal_kind(trades: Iterable[Trade]) -> Dict[str, Dict[str, Any]]:
    """
    Aggregate trades by the rule that opened them.

    Returns a dict keyed by every SignalKind value (MA_PULLBACK, RSI_OVERSOLD,
    AI_ENHANCED) with count, win_rate_pct, total_pnl, avg_pnl_pct,
    avg_win_pct and avg_loss_pct. Kinds without trades report zeros.
    """
    trade_list = list(trades)
    out: Dict[str, Dict[str, Any]] = {}
    for kind in SignalKind:
        subset = [t for t in trade_list if t.signal_kind is kind]
        out[kind.value] = _metrics_for_trades(
            [t.pnl for t in subset],
            [t.pnl_percent for t in subset],
        )
    return out


def aggregate_trades_dataframe_by_signal_kind(df: pd.DataFrame) -> Dict[str, Dict[str, Any]]:
    """
    Same metrics as aggregate_by_signal_kind but from a trades DataFrame.

    Expects columns: signal_kind, pnl, pnl_percent (as produced by trades_to_frame).
    """
    out: Dict[str, Dict[str, Any]] = {}
    for kind in SignalKind:
        if df.empty:
            out[kind.value] = _metrics_for_trades([], [])
            continue
        subset = df[df["signal_kind"].astype(str).str.upper() == kind.value]
        out[kind.value] = _metrics_for_trades(
            subset["pnl"].tolist(),
            subset["pnl_percent"].tolist(),
        )
    return out
