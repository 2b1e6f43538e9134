import os, sys, json, argparse, math
import logging

from oscillator.bars import Periods
from oscillator.config_loader import load_config, get_periods, DEFAULT_PERIODS
from oscillator.data import load_bars_csv, series_from_frame
from oscillator.engine import compute
from oscillator.errors import OscillatorError
from oscillator.logging_config import setup_logging
from oscillator.synthetic_market import synthetic_bars

logger = logging.getLogger("oscillator.cli")

def _num(x):
    return None if x is None or math.isnan(x) else x

def result_to_json(result):
    return {
        "periods": [result.periods.period_k, result.periods.period_d],
        "n_records": len(result),
        "records": [
            {"timestamp": r.timestamp, "k": _num(r.k), "d": _num(r.d), "d_ready": r.d is not None}
            for r in result.records
        ],
    }

def resolve_periods(args, spec):
    if spec:
        p = get_periods(spec)
        k, d = p.period_k, p.period_d
    else:
        k, d = DEFAULT_PERIODS
    if args.period_k is not None:
        k = args.period_k
    if args.period_d is not None:
        d = args.period_d
    return Periods(period_k=k, period_d=d)

def load_series(args, spec):
    if args.synthetic is not None:
        if args.synthetic < 1:
            raise ValueError(f"--synthetic needs at least 1 bar, got {args.synthetic}")
        return series_from_frame(synthetic_bars(n=args.synthetic, seed=args.seed))
    path = args.data or (spec.data_path if spec else None) or os.environ.get("DATA_PATH", "data/sample_bars.csv")
    logger.info("Loading bars from %s", path)
    return load_bars_csv(path)

def main(argv=None):
    ap = argparse.ArgumentParser(description="Stochastic oscillator (%K / %D) over OHLC bars")
    ap.add_argument("--data", metavar="CSV", help="OHLC CSV (default: $DATA_PATH or data/sample_bars.csv).")
    ap.add_argument("--synthetic", type=int, metavar="N", help="Use N synthetic bars instead of a CSV.")
    ap.add_argument("--seed", type=int, default=123, help="Seed for --synthetic.")
    ap.add_argument("--config", help="Indicator config (YAML/JSON).")
    ap.add_argument("--period-k", type=int, help="Lookback period for %%K (overrides config).")
    ap.add_argument("--period-d", type=int, help="Smoothing period for %%D (overrides config).")
    ap.add_argument("--out", metavar="CSV", help="Write records to CSV instead of printing JSON.")
    ap.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"))
    ap.add_argument("--log-dir", default=os.environ.get("LOG_DIR"), help="Also write rotating log files here.")
    args = ap.parse_args(argv)

    setup_logging("oscillator", args.log_level, log_dir=args.log_dir)

    try:
        spec = load_config(args.config) if args.config else None
        periods = resolve_periods(args, spec)
        series = load_series(args, spec)
        result = compute(series, periods)
    except (OscillatorError, FileNotFoundError, ValueError) as e:
        logger.error("%s: %s", type(e).__name__, e)
        print(f"error: {e}", file=sys.stderr)
        return 2

    logger.info("stochastic(%d, %d): %d bars -> %d records",
                periods.period_k, periods.period_d, len(series), len(result))

    if args.out:
        result.to_frame().to_csv(args.out, index=False)
        print(json.dumps({"out": args.out, "n_records": len(result)}, indent=2))
    else:
        print(json.dumps(result_to_json(result), indent=2))
    return 0

if __name__=="__main__":
    sys.exit(main())
