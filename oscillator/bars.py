from __future__ import annotations
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Iterable, Iterator, Mapping, Sequence, Tuple, Union, overload
import math

from .errors import MalformedSeriesError

OHLC_FIELDS = ("open", "high", "low", "close")


def _is_number(x: Any) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool)


@dataclass(frozen=True)
class Bar:
    timestamp: float
    open: float
    high: float
    low: float
    close: float


@dataclass(frozen=True)
class Periods:
    period_k: int = 14
    period_d: int = 3

    def __post_init__(self):
        for name in ("period_k", "period_d"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, Integral) or v < 1:
                raise ValueError(f"{name} must be a positive integer, got {v!r}")
            object.__setattr__(self, name, int(v))

    @classmethod
    def coerce(cls, value: Union["Periods", Sequence[int]]) -> "Periods":
        if isinstance(value, Periods):
            return value
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 2:
            raise ValueError(f"periods must be (period_k, period_d), got {value!r}")
        k, d = value
        return cls(period_k=k, period_d=d)


def _check_row(i: int, ts: Any, row: Any) -> Bar:
    if isinstance(row, (str, bytes, Mapping)) or not hasattr(row, "__len__") or not hasattr(row, "__iter__"):
        raise MalformedSeriesError(f"row {i}: expected (open, high, low, close), got {type(row).__name__}")
    if len(row) != len(OHLC_FIELDS):
        raise MalformedSeriesError(f"row {i}: expected 4 fields (open, high, low, close), got {len(row)}")
    if not _is_number(ts) or not math.isfinite(ts):
        raise MalformedSeriesError(f"row {i}: timestamp {ts!r} is not a finite number")
    for name, v in zip(OHLC_FIELDS, row):
        if not _is_number(v) or not math.isfinite(v):
            raise MalformedSeriesError(f"row {i}: {name}={v!r} is not a finite number")
    o, h, l, c = (float(v) for v in row)
    return Bar(timestamp=ts, open=o, high=h, low=l, close=c)


class Series:
    """Ordered, validated, read-only run of bars.

    Every bar is checked up front; the first bad one raises
    ``MalformedSeriesError`` and nothing is built. ``from_rows`` takes loose
    ``(open, high, low, close)`` rows with a parallel run of timestamps.
    """

    __slots__ = ("_bars",)

    def __init__(self, bars: Iterable[Bar] = ()):
        out = []
        for i, b in enumerate(bars):
            if not isinstance(b, Bar):
                raise MalformedSeriesError(f"row {i}: expected Bar, got {type(b).__name__}")
            out.append(_check_row(i, b.timestamp, (b.open, b.high, b.low, b.close)))
        self._bars: Tuple[Bar, ...] = tuple(out)

    @classmethod
    def from_rows(cls, timestamps: Iterable[Any], rows: Iterable[Any]) -> "Series":
        ts = list(timestamps)
        rs = list(rows)
        if len(ts) != len(rs):
            raise MalformedSeriesError(f"{len(ts)} timestamps for {len(rs)} rows")
        return cls([_check_row(i, t, r) for i, (t, r) in enumerate(zip(ts, rs))])

    @classmethod
    def from_bars(cls, bars: Iterable[Bar]) -> "Series":
        return cls(bars)

    @property
    def bars(self) -> Tuple[Bar, ...]:
        return self._bars

    @property
    def timestamps(self) -> Tuple[float, ...]:
        return tuple(b.timestamp for b in self._bars)

    def column(self, name: str) -> Tuple[float, ...]:
        return tuple(getattr(b, name) for b in self._bars)

    def __len__(self) -> int:
        return len(self._bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._bars)

    @overload
    def __getitem__(self, i: int) -> Bar: ...
    @overload
    def __getitem__(self, i: slice) -> Tuple[Bar, ...]: ...

    def __getitem__(self, i):
        return self._bars[i]

    def __repr__(self) -> str:
        return f"Series(n={len(self._bars)})"
