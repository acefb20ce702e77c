"""
Parameter validation and input coercion shared by all engine modules.

Parameter violations fail fast with InvalidParameterError. Data problems
(short series, non-finite values) never raise; they become undefined (NaN)
values in the output.
"""
from __future__ import annotations

import numbers
from typing import Iterable, Optional, Tuple, Union

import numpy as np
import pandas as pd


SeriesLike = Union[pd.Series, np.ndarray, Iterable[float]]


class InvalidParameterError(ValueError):
    """Raised when a period, threshold or other parameter is out of range."""
    pass


def validate_period(period, name: str = "period") -> int:
    """Return period as int; raise unless it is an integer >= 1."""
    if isinstance(period, bool) or not isinstance(period, numbers.Integral):
        raise InvalidParameterError(f"{name} must be an integer >= 1, got {period!r}")
    if period < 1:
        raise InvalidParameterError(f"{name} must be an integer >= 1, got {period}")
    return int(period)


def validate_range(
    value,
    bounds: Tuple[float, float],
    name: str,
    integer: bool = False,
) -> None:
    """Raise unless bounds[0] <= value <= bounds[1] (and integral when integer=True)."""
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if integer and not isinstance(value, numbers.Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if not (low <= value <= high):
        raise InvalidParameterError(f"{name} must be in [{low}, {high}], got {value}")


def validate_positive(value, name: str) -> float:
    """Return value as float; raise unless it is a finite number > 0."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a number > 0, got {value!r}")
    if not np.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be > 0, got {value}")
    return float(value)


def as_float_series(values: SeriesLike, index: Optional[pd.Index] = None) -> pd.Series:
    """
    Coerce input into a float64 Series with non-finite values replaced by NaN.

    A Series keeps its index; other iterables get a RangeIndex unless index is
    given. The input object is never modified.
    """
    if isinstance(values, pd.Series):
        series = pd.to_numeric(values, errors="coerce").astype("float64")
    else:
        series = pd.Series(
            pd.to_numeric(pd.Series(list(values), dtype="object"), errors="coerce"),
            dtype="float64",
        )
        if index is not None:
            series.index = index
    # copy() so callers' data is never touched; inf -> NaN keeps it undefined
    return series.copy().replace([np.inf, -np.inf], np.nan)
