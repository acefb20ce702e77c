"""
Trade and metrics types: closed trades and the headline backtest metrics.

Kept separate from the aggregator so that loaders and the presentation layer
can import these types without pulling in the metric calculations.
"""
from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from ..shared.types import SignalKind
from ..shared.validation import InvalidParameterError, validate_positive, validate_range


# Record keys accepted by Trade.from_record (dashboard JSON uses camelCase)
_RECORD_ALIASES = {
    "entryDate": "entry_date",
    "exitDate": "exit_date",
    "entryPrice": "entry_price",
    "exitPrice": "exit_price",
    "signal": "signal_kind",
    "signalKind": "signal_kind",
    "aiConfidence": "ai_confidence",
}


@dataclass(frozen=True)
class Trade:
    """A single closed long trade."""
    id: str
    entry_date: str
    exit_date: str
    entry_price: float
    exit_price: float
    shares: int
    signal_kind: SignalKind
    ai_confidence: Optional[float] = None  # Required iff signal_kind is AI_ENHANCED
    symbol: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.signal_kind, str):
            try:
                object.__setattr__(self, "signal_kind", SignalKind(self.signal_kind.upper()))
            except ValueError:
                raise InvalidParameterError(
                    f"Unknown signal kind {self.signal_kind!r}; "
                    f"expected one of {[k.value for k in SignalKind]}"
                ) from None
        if isinstance(self.shares, bool) or not isinstance(self.shares, numbers.Integral) or self.shares < 1:
            raise InvalidParameterError(f"shares must be a positive integer, got {self.shares!r}")
        validate_positive(self.entry_price, "entry_price")
        validate_positive(self.exit_price, "exit_price")
        if self.signal_kind is SignalKind.AI_ENHANCED:
            if self.ai_confidence is None:
                raise InvalidParameterError(f"Trade {self.id}: ai_confidence is required for AI_ENHANCED trades")
            validate_range(self.ai_confidence, (0.0, 1.0), f"Trade {self.id}: ai_confidence")
        elif self.ai_confidence is not None:
            raise InvalidParameterError(
                f"Trade {self.id}: ai_confidence is only allowed for AI_ENHANCED trades"
            )

    @property
    def pnl(self) -> float:
        """Profit/loss in currency units."""
        return (self.exit_price - self.entry_price) * self.shares

    @property
    def pnl_percent(self) -> float:
        """Return on the entry price, in percent."""
        return (self.exit_price - self.entry_price) / self.entry_price * 100

    @property
    def is_winner(self) -> bool:
        return self.pnl > 0

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Trade":
        """
        Build a trade from a dict record.

        Accepts camelCase (entryDate, aiConfidence, signal) or snake_case keys.
        Stored pnl/pnlPercent values are ignored; they are always derived.
        """
        data = {_RECORD_ALIASES.get(k, k): v for k, v in record.items()}
        ai_confidence = data.get("ai_confidence")
        if ai_confidence is not None and pd.isna(ai_confidence):
            ai_confidence = None
        symbol = data.get("symbol")
        if symbol is not None and pd.isna(symbol):
            symbol = None
        try:
            return cls(
                id=str(data["id"]),
                entry_date=str(data["entry_date"]),
                exit_date=str(data["exit_date"]),
                entry_price=float(data["entry_price"]),
                exit_price=float(data["exit_price"]),
                shares=int(data["shares"]),
                signal_kind=data["signal_kind"],
                ai_confidence=None if ai_confidence is None else float(ai_confidence),
                symbol=symbol,
            )
        except KeyError as e:
            raise InvalidParameterError(f"Trade record is missing field {e.args[0]!r}") from None

    def to_dict(self) -> Dict[str, Any]:
        """camelCase record including the derived pnl fields."""
        out: Dict[str, Any] = {
            "id": self.id,
            "entryDate": self.entry_date,
            "exitDate": self.exit_date,
            "entryPrice": self.entry_price,
            "exitPrice": self.exit_price,
            "shares": self.shares,
            "pnl": self.pnl,
            "pnlPercent": self.pnl_percent,
            "signal": self.signal_kind.value,
        }
        if self.ai_confidence is not None:
            out["aiConfidence"] = self.ai_confidence
        if self.symbol is not None:
            out["symbol"] = self.symbol
        return out


def trades_from_records(records: Iterable[Dict[str, Any]]) -> List[Trade]:
    return [Trade.from_record(r) for r in records]


def trades_to_frame(trades: Iterable[Trade]) -> pd.DataFrame:
    """One row per trade with snake_case columns, pnl and pnl_percent included."""
    rows = [
        {
            "id": t.id,
            "symbol": t.symbol,
            "entry_date": t.entry_date,
            "exit_date": t.exit_date,
            "entry_price": t.entry_price,
            "exit_price": t.exit_price,
            "shares": t.shares,
            "pnl": t.pnl,
            "pnl_percent": t.pnl_percent,
            "signal_kind": t.signal_kind.value,
            "ai_confidence": t.ai_confidence,
        }
        for t in trades
    ]
    columns = [
        "id", "symbol", "entry_date", "exit_date", "entry_price", "exit_price",
        "shares", "pnl", "pnl_percent", "signal_kind", "ai_confidence",
    ]
    return pd.DataFrame(rows, columns=columns)


@dataclass(frozen=True)
class BacktestMetrics:
    """Headline statistics derived from a trade list and an equity curve."""
    total_trades: int = 0
    win_rate: float = 0.0  # % of trades with pnl > 0
    avg_return: float = 0.0  # Mean pnl_percent per trade
    max_drawdown: float = 0.0  # Largest peak-to-trough decline, %
    expectancy: float = 0.0  # Mean return per trade in R-multiples
    sharpe_ratio: float = 0.0  # Annualized, from per-trade returns
    profit_factor: float = 0.0  # Gross profit / gross loss (inf when no losses)
    total_return: float = 0.0  # First to last equity, %
    unit_risk_pct: float = field(default=100.0, compare=False)  # Size of 1R used for expectancy

    def to_dict(self) -> Dict[str, Any]:
        """camelCase mapping consumed by the dashboard's metric cards."""
        return {
            "totalTrades": self.total_trades,
            "winRate": self.win_rate,
            "avgReturn": self.avg_return,
            "maxDrawdown": self.max_drawdown,
            "expectancy": self.expectancy,
            "sharpeRatio": self.sharpe_ratio,
            "profitFactor": self.profit_factor,
            "totalReturn": self.total_return,
        }
