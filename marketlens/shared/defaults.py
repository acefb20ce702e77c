"""
Centralized default values for indicator, strategy and equity parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
All modules should import from here to ensure consistency.

Chart defaults mirror the dashboard panels (SMA 20/50, EMA 12/26, RSI 14,
MACD 12/26/9). Strategy defaults mirror the strategy panel's initial state.
"""

# Moving averages shown on the price chart
SMA_SHORT_PERIOD = 20
SMA_LONG_PERIOD = 50
EMA_SHORT_PERIOD = 12
EMA_LONG_PERIOD = 26

# RSI (Relative Strength Index) defaults
RSI_PERIOD = 14  # Simple trailing average of gains/losses, not Wilder smoothing
RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70

# MACD (Moving Average Convergence Divergence) defaults
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

# Strategy panel defaults
SHORT_MA = 10
LONG_MA = 50
STOP_LOSS_PCT = 3.0
TAKE_PROFIT_PCT = 8.0
USE_AI = False
AI_CONFIDENCE_THRESHOLD = 0.7

# Strategy panel ranges (inclusive)
SHORT_MA_RANGE = (5, 30)
LONG_MA_RANGE = (20, 200)
RSI_PERIOD_RANGE = (7, 21)
RSI_OVERSOLD_RANGE = (15, 40)
RSI_OVERBOUGHT_RANGE = (60, 85)
STOP_LOSS_RANGE = (1.0, 10.0)
TAKE_PROFIT_RANGE = (3.0, 20.0)
AI_CONFIDENCE_RANGE = (0.5, 0.95)

# Equity curve defaults
INITIAL_CAPITAL = 100000.0
# Cosmetic participation factor applied to the raw price return. It is not a
# simulated strategy; set to 1.0 for a plain buy-and-hold curve.
EQUITY_MULTIPLIER = 1.15
BENCHMARK_MULTIPLIER = 1.0

# Presentation windows (trailing rows)
INDICATOR_WINDOW = 90  # Technical indicator panel
VOLUME_WINDOW = 60  # Volume panel and its average
QUOTE_RANGE_BARS = 252  # 52-week high/low

# Metrics
TRADING_DAYS_PER_YEAR = 252
EXPECTANCY_UNIT_RISK_PCT = 100.0  # 1R = the whole position value

# Advisory cache
CACHE_MAX_ENTRIES = 128
