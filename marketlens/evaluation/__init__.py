"""
Performance evaluation module.

Provides equity/drawdown curves, trade types and the summary metrics
aggregator consumed by the dashboard's metric cards.
"""
from .equity import (
    EquityCurvePoint,
    equity_from_prices,
    equity_from_returns,
    drawdown,
    equity_curve,
    equity_curve_points,
)
from .trades import Trade, BacktestMetrics, trades_from_records, trades_to_frame
from .metrics import (
    compute_metrics,
    total_return,
    max_drawdown,
    profit_factor,
    annualized_sharpe,
    trades_per_year,
)
from .trade_analysis import aggregate_by_signal_kind, aggregate_trades_dataframe_by_signal_kind

__all__ = [
    'EquityCurvePoint',
    'equity_from_prices',
    'equity_from_returns',
    'drawdown',
    'equity_curve',
    'equity_curve_points',
    'Trade',
    'BacktestMetrics',
    'trades_from_records',
    'trades_to_frame',
    'compute_metrics',
    'total_return',
    'max_drawdown',
    'profit_factor',
    'annualized_sharpe',
    'trades_per_year',
    'aggregate_by_signal_kind',
    'aggregate_trades_dataframe_by_signal_kind',
]
