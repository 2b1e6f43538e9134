import json
import logging
from pathlib import Path

import pandas as pd
import pytest

import cli

ROOT = Path(__file__).resolve().parent.parent

@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    lg = logging.getLogger("oscillator")
    for h in list(lg.handlers):
        lg.removeHandler(h)
    lg.setLevel(logging.NOTSET)

def test_synthetic_json(capsys):
    assert cli.main(["--synthetic", "50", "--period-k", "5", "--period-d", "3"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["periods"] == [5, 3]
    assert out["n_records"] == 46
    recs = out["records"]
    assert [r["d_ready"] for r in recs[:3]] == [False, False, True]
    assert recs[0]["d"] is None
    assert all(0 <= r["k"] <= 100 for r in recs)

def test_flat_window_serialized_as_null(tmp_path, capsys):
    p = tmp_path / "flat.csv"
    p.write_text("timestamp,open,high,low,close\n1,10,10,10,10\n2,10,10,10,10\n3,10,10,10,10\n")
    assert cli.main(["--data", str(p), "--period-k", "3", "--period-d", "1"]) == 0
    (rec,) = json.loads(capsys.readouterr().out)["records"]
    assert rec == {"timestamp": 3, "k": None, "d": None, "d_ready": True}

def test_config_and_env_data_path(tmp_path, monkeypatch, capsys):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("indicator:\n  stochastic:\n    periods: [10, 4]\n")
    monkeypatch.setenv("DATA_PATH", str(ROOT / "data" / "sample_bars.csv"))
    assert cli.main(["--config", str(cfg), "--period-d", "2"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["periods"] == [10, 2]
    assert out["n_records"] == 31

def test_out_csv(tmp_path, capsys):
    dest = tmp_path / "stoch.csv"
    assert cli.main(["--synthetic", "30", "--out", str(dest)]) == 0
    assert json.loads(capsys.readouterr().out)["n_records"] == 17
    df = pd.read_csv(dest)
    assert list(df.columns) == ["timestamp", "k", "d"]
    assert len(df) == 17

def test_short_series_exit_code(capsys):
    assert cli.main(["--synthetic", "3", "--period-k", "5"]) == 2
    assert "period_k=5" in capsys.readouterr().err

def test_bad_period_exit_code(capsys):
    assert cli.main(["--synthetic", "30", "--period-k", "0"]) == 2
    assert "period_k" in capsys.readouterr().err

@pytest.mark.parametrize("n", ["0", "-4"])
def test_synthetic_count_must_be_positive(n, monkeypatch, capsys):
    monkeypatch.setenv("DATA_PATH", str(ROOT / "data" / "sample_bars.csv"))
    assert cli.main(["--synthetic", n]) == 2
    captured = capsys.readouterr()
    assert "--synthetic" in captured.err
    assert captured.out == ""
