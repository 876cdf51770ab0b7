#!/usr/bin/env python3
"""Compare TA-Lib Hilbert Transform outputs vs pandas_ta_hilbert.

Runs every registered kind over a synthetic OHLCV frame and prints the
absolute / relative differences against the matching TA-Lib function,
ignoring the warm-up rows (NaN in TA-Lib, 0.0 here).
"""
from __future__ import annotations

import argparse
import importlib.util
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pandas as pd
import pandas_ta_hilbert as hta


# kind -> (TA-Lib function name, TA-Lib keyword arguments)
DEFAULT_SPECS = {
    "ht_dcperiod": ("HT_DCPERIOD", {}),
    "ht_dcphase": ("HT_DCPHASE", {}),
    "ht_phasor": ("HT_PHASOR", {}),
    "ht_sine": ("HT_SINE", {}),
    "ht_trendmode": ("HT_TRENDMODE", {}),
    "ht_trendline": ("HT_TRENDLINE", {}),
    "mama": ("MAMA", {"fastlimit": 0.5, "slowlimit": 0.05}),
}


def make_ohlcv(rows: int, seed: int) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    idx = pd.date_range("2025-01-01", periods=rows, freq="1min")
    base = 100 + rng.standard_normal(rows).cumsum()
    close = base + rng.normal(0, 0.2, rows)
    open_ = base + rng.normal(0, 0.2, rows)
    high = np.maximum(open_, close) + rng.random(rows) * 0.5
    low = np.minimum(open_, close) - rng.random(rows) * 0.5
    volume = rng.integers(100, 1000, rows)
    return pd.DataFrame(
        {
            "open": open_,
            "high": high,
            "low": low,
            "close": close,
            "volume": volume,
        },
        index=idx,
    )


def compare_frames(ref: pd.DataFrame, test: pd.DataFrame, eps: float) -> pd.DataFrame:
    diff = (test - ref).abs()
    rel = diff / (ref.abs() + eps)
    return pd.DataFrame(
        {
            "nan_ref": ref.isna().sum(),
            "nan_test": test.isna().sum(),
            "max_abs": diff.max(),
            "mean_abs": diff.mean(),
            "mean_rel": rel.mean(),
        }
    )


def talib_frame(talib, kind: str, close: pd.Series, columns) -> pd.DataFrame:
    fn_name, kwargs = DEFAULT_SPECS[kind]
    out = getattr(talib, fn_name)(close.to_numpy(dtype=float), **kwargs)
    if not isinstance(out, tuple):
        out = (out,)
    return pd.DataFrame(
        {col: np.asarray(values, dtype=float) for col, values in zip(columns, out)},
        index=close.index,
    )


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--rows", type=int, default=2000)
    ap.add_argument("--tail", type=int, default=500, help="rows compared, counted from the end")
    ap.add_argument("--seed", type=int, default=11)
    ap.add_argument("--eps", type=float, default=1e-12)
    args = ap.parse_args()

    if importlib.util.find_spec("talib") is None:
        raise SystemExit("[X] TA-Lib not available. Install ta-lib to run this script.")
    import talib

    if args.tail > args.rows - hta.LONG_LOOKBACK:
        raise SystemExit(f"--tail must be <= rows - {hta.LONG_LOOKBACK}")

    df = make_ohlcv(args.rows, args.seed)
    mama_params = DEFAULT_SPECS["mama"][1]

    refs, tests = [], []
    for kind in DEFAULT_SPECS:
        params = mama_params if kind == "mama" else {}
        ours = df.ht(kind, **params)
        refs.append(talib_frame(talib, kind, df["close"], ours.columns))
        tests.append(ours)

    ref = pd.concat(refs, axis=1).iloc[-args.tail:]
    test = pd.concat(tests, axis=1).iloc[-args.tail:]
    summary = compare_frames(ref, test, args.eps)

    print("[i] rows:", args.rows)
    print("[i] compare rows:", len(ref))
    print("[i] indicator columns:", len(ref.columns))
    print("\nBy max_abs:")
    print(summary.sort_values("max_abs", ascending=False))


if __name__ == "__main__":
    main()
