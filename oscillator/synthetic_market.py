import numpy as np
import pandas as pd

def _gbm(n, s0=100.0, mu=0.0, sigma=0.01):
    dt = 1.0
    returns = np.random.normal((mu - 0.5*sigma**2)*dt, sigma*np.sqrt(dt), size=n)
    return s0 * np.exp(np.cumsum(returns))

def synthetic_bars(n=500, seed=123, s0=100.0, sigma=0.01, start_ms=1_600_000_000_000, step_ms=60_000):
    """OHLC bars around a GBM close path; each bar's range covers its open and close."""
    np.random.seed(seed)
    close = _gbm(n, s0=s0, sigma=sigma)
    open_ = np.concatenate([[s0], close[:-1]])
    body_hi = np.maximum(open_, close)
    body_lo = np.minimum(open_, close)
    wick = np.abs(np.random.normal(0.0, sigma / 2, size=(2, n)))
    high = body_hi * (1.0 + wick[0])
    low = body_lo * (1.0 - wick[1])
    ts = start_ms + step_ms * np.arange(n, dtype=np.int64)
    return pd.DataFrame({"timestamp": ts, "open": open_, "high": high, "low": low, "close": close})

def flat_bars(n, price=10.0, start_ms=0, step_ms=1):
    """Bars with high == low == close; every window is degenerate."""
    ts = start_ms + step_ms * np.arange(n, dtype=np.int64)
    p = np.full(n, float(price))
    return pd.DataFrame({"timestamp": ts, "open": p, "high": p, "low": p, "close": p})
