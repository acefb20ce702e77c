"""
Price bar loading and conversion.
"""
from .bars import (
    OHLCV_COLUMNS,
    bars_to_frame,
    frame_to_bars,
    ensure_ohlcv_frame,
    malformed_bar_mask,
    load_bars_csv,
)

__all__ = [
    'OHLCV_COLUMNS',
    'bars_to_frame',
    'frame_to_bars',
    'ensure_ohlcv_frame',
    'malformed_bar_mask',
    'load_bars_csv',
]
