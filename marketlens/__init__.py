"""
marketlens: indicator and performance analytics for a market-data dashboard.

Subpackages:
- shared: value types, validation and defaults
- indicators: SMA, EMA, RSI, MACD
- evaluation: equity curve, drawdown, trades and summary metrics
- presentation: aligned indicator table, windowing and quote header
- strategy: validated strategy configuration and YAML loading
- data: bar conversion and CSV loading
"""
from .cache import IndicatorCache, compute_fingerprint
from .dashboard import DashboardEngine, DashboardResult

__version__ = "0.1.0"

__all__ = [
    'IndicatorCache',
    'compute_fingerprint',
    'DashboardEngine',
    'DashboardResult',
]
