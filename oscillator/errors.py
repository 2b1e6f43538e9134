from __future__ import annotations


class OscillatorError(Exception):
    """Base class for structural errors raised before any output is produced."""


class MalformedSeriesError(OscillatorError, ValueError):
    pass


class InsufficientDataError(OscillatorError, ValueError):
    def __init__(self, length: int, period_k: int):
        super().__init__(f"Series has {length} bars; period_k={period_k} needs at least {period_k}")
        self.length = length
        self.period_k = period_k
