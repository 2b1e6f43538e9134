"""Bar ingestion from CSV files and pandas DataFrames.

Expected columns (case-insensitive): one of timestamp, time, date; plus open,
high, low, close. Extra columns (volume, symbol, ...) are ignored.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from .bars import OHLC_FIELDS, Series
from .errors import MalformedSeriesError

TIME_COLUMNS = ("timestamp", "time", "date")


def _timestamps(col: pd.Series) -> pd.Series:
    if pd.api.types.is_numeric_dtype(col):
        return col
    parsed = pd.to_datetime(col, errors="coerce", utc=True)
    if parsed.isna().any():
        bad = int(parsed.isna().idxmax())
        raise MalformedSeriesError(f"row {bad}: unparseable timestamp {col.iloc[bad]!r}")
    # epoch milliseconds
    return (parsed - pd.Timestamp(0, tz="UTC")) // pd.Timedelta(milliseconds=1)


def _resolve_columns(df: pd.DataFrame) -> Dict[str, str]:
    cols = {str(c).lower(): c for c in df.columns}
    out: Dict[str, str] = {}
    for cand in TIME_COLUMNS:
        if cand in cols:
            out["timestamp"] = cols[cand]
            break
    else:
        raise MalformedSeriesError(f"missing time column; expected one of {TIME_COLUMNS}")
    missing = [f for f in OHLC_FIELDS if f not in cols]
    if missing:
        raise MalformedSeriesError(f"missing OHLC column(s): {missing}")
    out.update({f: cols[f] for f in OHLC_FIELDS})
    return out


def series_from_frame(df: pd.DataFrame) -> Series:
    cols = _resolve_columns(df)
    df = df.reset_index(drop=True)
    ts = _timestamps(df[cols["timestamp"]])
    # text cells become NaN here and are rejected row by row in Series.from_rows
    ohlc = pd.DataFrame({f: pd.to_numeric(df[cols[f]], errors="coerce") for f in OHLC_FIELDS})
    rows = ohlc.to_numpy(dtype=object).tolist()
    return Series.from_rows(ts.tolist(), rows)


def load_bars_csv(path: Union[str, Path]) -> Series:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Data file not found: {p}")
    df = pd.read_csv(p)
    if df.empty:
        raise MalformedSeriesError(f"{p}: CSV appears empty.")
    return series_from_frame(df)
