"""Stochastic oscillator (%K / %D).

%K = 100 * (close - lowest low) / (highest high - lowest low) over ``period_k`` bars
%D = SMA(%K, ``period_d``)

Output starts at bar ``period_k - 1`` and has one record per bar from there on.
%D is ``None`` until ``period_d`` %K values exist. A flat window (highest high
equal to lowest low) gives a NaN %K, and every %D whose window holds that NaN is
NaN as well; neither is replaced by a default.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union
import logging
import math

import pandas as pd

from .bars import Periods, Series
from .data import series_from_frame
from .errors import InsufficientDataError, MalformedSeriesError
from .extremes import extremes, rolling_extremes
from .sma import sma

logger = logging.getLogger(__name__)

PeriodsLike = Union[Periods, Sequence[int]]


@dataclass(frozen=True)
class OutputRecord:
    timestamp: float
    k: float
    d: Optional[float]


@dataclass(frozen=True)
class StochasticResult:
    timestamps: Tuple[float, ...]
    k_values: Tuple[float, ...]
    pairs: Tuple[Tuple[float, Optional[float]], ...]
    periods: Periods

    @property
    def records(self) -> Tuple[OutputRecord, ...]:
        return tuple(OutputRecord(t, k, d) for t, (k, d) in zip(self.timestamps, self.pairs))

    @property
    def d_values(self) -> Tuple[Optional[float], ...]:
        return tuple(d for _, d in self.pairs)

    def __len__(self) -> int:
        return len(self.timestamps)

    def to_frame(self) -> pd.DataFrame:
        # object dtype keeps None (not ready) apart from NaN (flat window)
        return pd.DataFrame({
            "timestamp": list(self.timestamps),
            "k": pd.Series(self.k_values, dtype=float),
            "d": pd.Series(list(self.d_values), dtype=object),
        })


def _raw_k(close: float, lowest: float, highest: float) -> float:
    hl = highest - lowest
    if hl == 0:
        return math.nan
    return (close - lowest) / hl * 100


def _window_extremes(series: Series, period_k: int, method: str) -> Iterable[Tuple[float, float]]:
    if method == "deque":
        return rolling_extremes(series.column("low"), series.column("high"), period_k)
    if method == "brute":
        bars = series.bars
        return (extremes(bars[i - period_k + 1:i + 1]) for i in range(period_k - 1, len(bars)))
    raise ValueError(f"method must be 'deque' or 'brute', got {method!r}")


def compute(series: Series, periods: PeriodsLike = Periods(), method: str = "deque") -> StochasticResult:
    # shape first: a malformed input is rejected before its length is looked at
    if not isinstance(series, Series):
        raise MalformedSeriesError(
            f"expected a validated Series, got {type(series).__name__}; "
            "build one with Series.from_rows(timestamps, rows)"
        )
    p = Periods.coerce(periods)
    n = len(series)
    if n < p.period_k:
        raise InsufficientDataError(n, p.period_k)

    bars = series.bars
    timestamps: List[float] = []
    k_values: List[float] = []

    # Pass 1: raw %K for every full window
    for i, (lowest, highest) in enumerate(_window_extremes(series, p.period_k, method), start=p.period_k - 1):
        timestamps.append(bars[i].timestamp)
        k_values.append(_raw_k(bars[i].close, lowest, highest))

    # Pass 2: %D from the trailing period_d raw values; records exist only after this
    d_values: List[Optional[float]] = []
    for j in range(len(k_values)):
        if j < p.period_d - 1:
            d_values.append(None)
        else:
            d_values.append(float(sma(k_values[j - p.period_d + 1:j + 1], p.period_d)[0]))

    flat = sum(1 for k in k_values if math.isnan(k))
    if flat:
        logger.warning("stochastic: %d flat window(s) (high == low) produced NaN %%K", flat)
    logger.debug("stochastic(%d, %d): %d bars -> %d records", p.period_k, p.period_d, n, len(k_values))

    return StochasticResult(
        timestamps=tuple(timestamps),
        k_values=tuple(k_values),
        pairs=tuple(zip(k_values, d_values)),
        periods=p,
    )


def compute_from_rows(timestamps: Iterable[Any], rows: Iterable[Any], periods: PeriodsLike = Periods()) -> StochasticResult:
    """Validate loose ``(open, high, low, close)`` rows, then compute."""
    return compute(Series.from_rows(timestamps, rows), periods)


def compute_frame(df: pd.DataFrame, periods: PeriodsLike = Periods()) -> pd.DataFrame:
    return compute(series_from_frame(df), periods).to_frame()
