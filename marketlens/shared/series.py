"""
Positional helpers for aligning compacted series back onto a full axis.
"""
from typing import Optional

import numpy as np
import pandas as pd

from .validation import SeriesLike, as_float_series


def first_defined_position(series: pd.Series) -> Optional[int]:
    """Position of the first non-NaN value, or None if nothing is defined."""
    mask = series.notna().to_numpy()
    if not mask.any():
        return None
    return int(np.argmax(mask))


def pad_to_length(
    values: SeriesLike,
    length: int,
    index: Optional[pd.Index] = None,
) -> pd.Series:
    """
    Front-pad a compacted series with NaN so its last value lands at length - 1.

    Used to re-align an indicator that was computed over the defined suffix of
    another series. Raises ValueError if values is longer than length.
    """
    compact = as_float_series(values).to_numpy(dtype=float)
    if len(compact) > length:
        raise ValueError(f"Cannot pad {len(compact)} values to shorter length {length}")
    padded = np.concatenate([np.full(length - len(compact), np.nan), compact])
    if index is not None and len(index) != length:
        raise ValueError(f"Index length {len(index)} does not match length {length}")
    return pd.Series(padded, index=index)
