#!/usr/bin/env python3
"""Benchmark pandas_ta_hilbert indicators as history grows.

Every indicator is a single pass over the full input, so the time per row
should stay flat across sizes.  Optionally times TA-Lib alongside.
"""
from __future__ import annotations

import argparse
import importlib.util
import os
import sys
from time import perf_counter
from typing import List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pandas as pd
import pandas_ta_hilbert as hta


TALIB_NAMES = {
    "ht_dcperiod": "HT_DCPERIOD",
    "ht_dcphase": "HT_DCPHASE",
    "ht_phasor": "HT_PHASOR",
    "ht_sine": "HT_SINE",
    "ht_trendmode": "HT_TRENDMODE",
    "ht_trendline": "HT_TRENDLINE",
    "mama": "MAMA",
}


def make_close(rows: int, seed: int) -> pd.Series:
    rng = np.random.default_rng(seed)
    idx = pd.date_range("2025-01-01", periods=rows, freq="1min")
    base = 100 + rng.standard_normal(rows).cumsum()
    return pd.Series(base + rng.normal(0, 0.2, rows), index=idx, name="close")


def parse_list(value: str) -> List[int]:
    return [int(v.strip()) for v in value.split(",") if v.strip()]


def parse_kinds(value: str | None) -> List[str]:
    if not value:
        return hta.supported_kinds()
    kinds = [v.strip().lower() for v in value.split(",") if v.strip()]
    for kind in kinds:
        hta.get_indicator(kind)
    return kinds


def time_call(fn, runs: int) -> float:
    times = []
    for _ in range(max(runs, 1)):
        start = perf_counter()
        fn()
        times.append(perf_counter() - start)
    return sum(times) / len(times)


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--sizes",
        type=str,
        default="1000,10000,50000,100000",
        help="comma-separated total row counts",
    )
    ap.add_argument("--kinds", type=str, default="", help="comma-separated kinds (default: all)")
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--warmup", type=int, default=1, help="warmup runs (not timed)")
    ap.add_argument("--runs", type=int, default=3, help="timed runs")
    ap.add_argument("--talib", action="store_true", help="also time the TA-Lib equivalent")
    args = ap.parse_args()

    sizes = parse_list(args.sizes)
    kinds = parse_kinds(args.kinds)

    talib = None
    if args.talib:
        if importlib.util.find_spec("talib") is None:
            raise SystemExit("[X] TA-Lib not available. Install ta-lib or drop --talib.")
        import talib

    print(f"[i] sizes: {sizes}")
    print(f"[i] kinds: {kinds}")
    print(f"[i] runs: {args.runs} (warmup: {args.warmup})")

    rows_out = []
    for rows in sizes:
        if rows < hta.LONG_LOOKBACK:
            print(f"[i] skip rows={rows} (need >= {hta.LONG_LOOKBACK})")
            continue
        close = make_close(rows, args.seed)
        frame = close.to_frame()

        for kind in kinds:
            def run_ours():
                return hta.run_indicator(kind, frame)

            for _ in range(args.warmup):
                run_ours()
            ours = time_call(run_ours, args.runs)

            record = {
                "rows": rows,
                "kind": kind,
                "sec": ours,
                "us_per_row": ours / rows * 1e6,
            }
            if talib is not None:
                fn = getattr(talib, TALIB_NAMES[kind])
                values = close.to_numpy()
                record["talib_sec"] = time_call(lambda: fn(values), args.runs)
            rows_out.append(record)

    if not rows_out:
        return
    summary = pd.DataFrame(rows_out).set_index(["rows", "kind"])
    print()
    print(summary.to_string(float_format=lambda x: f"{x:.6f}"))


if __name__ == "__main__":
    main()
