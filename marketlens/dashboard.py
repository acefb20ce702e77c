"""
DashboardEngine: one entry point for everything the dashboard renders.

Builds the full-history indicator table, the equity curve and the headline
metrics for a bar series, memoizing the expensive parts in an IndicatorCache.
Windowing and column projection happen last, on the finished table.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

import pandas as pd

from .cache import IndicatorCache, compute_fingerprint
from .data.bars import ensure_ohlcv_frame
from .evaluation.equity import equity_curve
from .evaluation.metrics import EquityInput, compute_metrics
from .evaluation.trades import BacktestMetrics, Trade
from .presentation.quote import QuoteSummary, quote_summary
from .presentation.table import TableSpec, build_indicator_table, select_columns, trailing_window
from .shared.defaults import INITIAL_CAPITAL, EQUITY_MULTIPLIER, EXPECTANCY_UNIT_RISK_PCT
from .shared.types import PriceBar
from .strategy.config import DEFAULT_STRATEGY_CONFIG, StrategyConfig

logger = logging.getLogger(__name__)

BarsInput = Union[pd.DataFrame, Iterable[PriceBar]]


@dataclass(frozen=True)
class DashboardResult:
    """Everything one dashboard render needs."""
    table: pd.DataFrame
    metrics: BacktestMetrics
    quote: Optional[QuoteSummary]


class DashboardEngine:
    """
    Facade over indicators, equity and metrics for one strategy config.

    The cache belongs to the engine instance; pass one in to share it
    between engines explicitly.
    """

    def __init__(
        self,
        config: Optional[StrategyConfig] = None,
        spec: Optional[TableSpec] = None,
        cache: Optional[IndicatorCache] = None,
        initial_capital: float = INITIAL_CAPITAL,
        multiplier: float = EQUITY_MULTIPLIER,
        unit_risk_pct: float = EXPECTANCY_UNIT_RISK_PCT,
    ):
        self.config = config or DEFAULT_STRATEGY_CONFIG
        self.spec = spec or TableSpec.from_strategy(self.config)
        self.cache = cache if cache is not None else IndicatorCache()
        self.initial_capital = initial_capital
        self.multiplier = multiplier
        self.unit_risk_pct = unit_risk_pct

    def indicator_table(self, bars: BarsInput) -> pd.DataFrame:
        """Full-history table of bars and indicators (no equity columns)."""
        frame = ensure_ohlcv_frame(bars)
        fingerprint = compute_fingerprint("table", self.spec.cache_params(), frame)
        return self.cache.get_or_compute(fingerprint, lambda: build_indicator_table(frame, self.spec))

    def equity(
        self,
        bars: BarsInput,
        initial_capital: Optional[float] = None,
        multiplier: Optional[float] = None,
    ) -> pd.DataFrame:
        """Equity, drawdown and benchmark columns for the bars' closes."""
        capital = self.initial_capital if initial_capital is None else initial_capital
        mult = self.multiplier if multiplier is None else multiplier
        close = ensure_ohlcv_frame(bars)["close"]
        fingerprint = compute_fingerprint(
            "equity", {"initial_capital": capital, "multiplier": mult}, close
        )
        return self.cache.get_or_compute(fingerprint, lambda: equity_curve(close, capital, mult))

    def metrics(self, trades: Iterable[Trade], equity: EquityInput = None) -> BacktestMetrics:
        return compute_metrics(trades, equity, unit_risk_pct=self.unit_risk_pct)

    def build(
        self,
        bars: BarsInput,
        trades: Sequence[Trade] = (),
        window: Optional[int] = None,
        enabled: Optional[Iterable[str]] = None,
    ) -> DashboardResult:
        """
        Build the table, metrics and quote header for one render.

        Args:
            bars: Full bar history (ascending dates)
            trades: Closed trades for the metric cards
            window: Trailing number of rows to expose (None = all)
            enabled: Toggle keys to project onto (None = all columns)

        Returns:
            DashboardResult
        """
        frame = ensure_ohlcv_frame(bars)
        equity = self.equity(frame)
        table = self.indicator_table(frame)
        for col in equity.columns:
            table[col] = equity[col]

        metrics = self.metrics(trades, equity)

        if window is not None:
            table = trailing_window(table, window)
        if enabled is not None:
            table = select_columns(table, enabled)

        logger.info(
            f"Dashboard built: {len(frame)} bars, {metrics.total_trades} trades, "
            f"{len(table)} rows exposed ({self.cache})"
        )
        return DashboardResult(table=table, metrics=metrics, quote=quote_summary(frame))
