from pathlib import Path

import pandas as pd
import pytest

from oscillator.data import load_bars_csv, series_from_frame
from oscillator.errors import MalformedSeriesError

SAMPLE = Path(__file__).resolve().parent.parent / "data" / "sample_bars.csv"

def test_sample_file_loads():
    s = load_bars_csv(SAMPLE)
    assert len(s) == 40
    assert s[0].timestamp == 1700000000000
    assert s[0].open == pytest.approx(100.0)
    assert all(b.low <= b.close <= b.high for b in s)

def test_headers_case_insensitive_extra_columns_ignored(tmp_path):
    p = tmp_path / "bars.csv"
    p.write_text("Time,Open,High,Low,Close,Volume\n1,5,6,4,5,10\n2,7,8,5,7,11\n")
    s = load_bars_csv(p)
    assert s.timestamps == (1, 2)
    assert s[1].high == 8.0

def test_datetime_timestamps_become_epoch_ms():
    df = pd.DataFrame({
        "date": ["2024-01-01T00:00:00Z", "2024-01-01T00:01:00Z"],
        "open": [1.0, 2.0], "high": [2.0, 3.0], "low": [0.5, 1.5], "close": [1.5, 2.5],
    })
    s = series_from_frame(df)
    assert s.timestamps == (1704067200000, 1704067260000)

def test_bad_timestamp_rejected():
    df = pd.DataFrame({"time": ["2024-01-01", "not a date"], "open": [1, 1], "high": [1, 1], "low": [1, 1], "close": [1, 1]})
    with pytest.raises(MalformedSeriesError):
        series_from_frame(df)

def test_missing_column_rejected(tmp_path):
    p = tmp_path / "bars.csv"
    p.write_text("timestamp,open,high,low\n1,5,6,4\n")
    with pytest.raises(MalformedSeriesError, match="close"):
        load_bars_csv(p)

def test_missing_time_column_rejected():
    df = pd.DataFrame({"open": [1.0], "high": [1.0], "low": [1.0], "close": [1.0]})
    with pytest.raises(MalformedSeriesError):
        series_from_frame(df)

def test_non_numeric_or_missing_value_rejected(tmp_path):
    p = tmp_path / "bars.csv"
    p.write_text("timestamp,open,high,low,close\n1,5,6,4,5\n2,7,8,5,abc\n")
    with pytest.raises(MalformedSeriesError, match="row 1"):
        load_bars_csv(p)
    p.write_text("timestamp,open,high,low,close\n1,5,6,4,5\n2,7,,5,7\n")
    with pytest.raises(MalformedSeriesError, match="row 1"):
        load_bars_csv(p)

def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_bars_csv(tmp_path / "nope.csv")

def test_empty_csv_rejected(tmp_path):
    p = tmp_path / "bars.csv"
    p.write_text("timestamp,open,high,low,close\n")
    with pytest.raises(MalformedSeriesError):
        load_bars_csv(p)
