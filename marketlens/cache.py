"""
IndicatorCache: fingerprint-based memoization of computed tables.

Results are keyed by a hash of the input data and the parameters that
produced them. The cache is advisory: a hit returns exactly what a
recomputation would, and correctness never depends on it being present.
"""
from __future__ import annotations

import hashlib
import json
import logging
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional

import pandas as pd

from .shared.defaults import CACHE_MAX_ENTRIES
from .shared.validation import validate_period

logger = logging.getLogger(__name__)


def compute_fingerprint(
    kind: str,
    params: Dict[str, Any],
    data: Optional[pd.DataFrame | pd.Series] = None,
) -> str:
    """
    Compute content-addressable fingerprint for a computation.

    The fingerprint is a hash of:
    - kind: What is computed (table, equity, ...)
    - params: Parameters (sorted for stability)
    - data: Input frame/series, hashed by index and values

    Returns:
        SHA256 hex string (first 16 chars)
    """
    fp_input = {"kind": kind, "params": params}
    h = hashlib.sha256(json.dumps(fp_input, sort_keys=True, default=str).encode())
    if data is not None:
        h.update(pd.util.hash_pandas_object(data, index=True).to_numpy().tobytes())
        columns = list(data.columns) if isinstance(data, pd.DataFrame) else [data.name]
        h.update(json.dumps(columns, default=str).encode())
    return h.hexdigest()[:16]


class IndicatorCache:
    """
    Bounded in-memory cache (least recently used entries are evicted).

    Stored frames are copied on the way in and out so callers can never
    alter a cached result.
    """

    def __init__(self, max_entries: int = CACHE_MAX_ENTRIES):
        self.max_entries = validate_period(max_entries, "max_entries")
        self._entries: "OrderedDict[str, Any]" = OrderedDict()

        # Track stats
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _copy(value: Any) -> Any:
        return value.copy() if isinstance(value, (pd.DataFrame, pd.Series)) else value

    def get(self, fingerprint: str) -> Optional[Any]:
        """Cached value for fingerprint, or None if not present."""
        if fingerprint not in self._entries:
            self.misses += 1
            return None
        self._entries.move_to_end(fingerprint)
        self.hits += 1
        return self._copy(self._entries[fingerprint])

    def put(self, fingerprint: str, value: Any) -> None:
        """Store value, evicting the least recently used entry when full."""
        self._entries[fingerprint] = self._copy(value)
        self._entries.move_to_end(fingerprint)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cache entry {evicted}")

    def get_or_compute(self, fingerprint: str, compute: Callable[[], Any]) -> Any:
        """Return the cached value or compute, store and return it."""
        cached = self.get(fingerprint)
        if cached is not None:
            return cached
        value = compute()
        self.put(fingerprint, value)
        return self._copy(value)

    def clear(self) -> None:
        """Clear all cached results."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total = self.hits + self.misses
        hit_rate = (self.hits / total * 100) if total > 0 else 0

        return {
            "hits": self.hits,
            "misses": self.misses,
            "total_requests": total,
            "hit_rate_pct": hit_rate,
            "entries": len(self._entries),
        }

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"IndicatorCache(entries={stats['entries']}, "
            f"hits={stats['hits']}, misses={stats['misses']}, "
            f"hit_rate={stats['hit_rate_pct']:.1f}%)"
        )
