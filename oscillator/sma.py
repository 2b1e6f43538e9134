from __future__ import annotations
from typing import Sequence
import numpy as np


def sma(samples: Sequence[float], period: int) -> np.ndarray:
    """Simple moving average, one mean per full window (no warm-up padding).

    ``len(out) == len(samples) - period + 1``, empty when there are fewer than
    ``period`` samples. A NaN only poisons the windows that contain it.
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")
    x = np.asarray(samples, dtype=float)
    if x.size < period:
        return np.empty(0, dtype=float)
    return np.lib.stride_tricks.sliding_window_view(x, period).mean(axis=1)
