from __future__ import annotations
from collections import deque
from typing import Iterator, Sequence, Tuple

from .bars import Bar


def extremes(bars: Sequence[Bar], low_field: str = "low", high_field: str = "high") -> Tuple[float, float]:
    """Lowest ``low_field`` and highest ``high_field`` over the whole slice."""
    if not bars:
        raise ValueError("extremes() needs a non-empty window")
    lo = min(getattr(b, low_field) for b in bars)
    hi = max(getattr(b, high_field) for b in bars)
    return lo, hi


def rolling_extremes(lows: Sequence[float], highs: Sequence[float], window: int) -> Iterator[Tuple[float, float]]:
    """Yield (min low, max high) for each full window, left to right.

    Monotonic deques of indices: ``lo_q`` keeps lows increasing, ``hi_q`` keeps
    highs decreasing, so the front of each is the current extremum. Results are
    identical to calling ``extremes`` on every window.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if len(lows) != len(highs):
        raise ValueError(f"lows/highs length mismatch: {len(lows)} != {len(highs)}")
    lo_q: deque = deque()
    hi_q: deque = deque()
    for i in range(len(lows)):
        while lo_q and lows[lo_q[-1]] >= lows[i]:
            lo_q.pop()
        lo_q.append(i)
        while hi_q and highs[hi_q[-1]] <= highs[i]:
            hi_q.pop()
        hi_q.append(i)

        start = i - window + 1
        if lo_q[0] < start:
            lo_q.popleft()
        if hi_q[0] < start:
            hi_q.popleft()
        if start >= 0:
            yield lows[lo_q[0]], highs[hi_q[0]]
