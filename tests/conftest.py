# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd
import pytest

import pandas_ta_hilbert  # noqa: F401  registers df.ht

from . import reference_data as ref


def _series(values, name="close"):
    idx = pd.date_range("2024-01-01", periods=len(values), freq="1D")
    return pd.Series(values, index=idx, name=name, dtype=float)


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


@pytest.fixture
def close_45():
    return _series(ref.CLOSE_45)


@pytest.fixture
def close_60():
    return _series(ref.CLOSE_60)


@pytest.fixture
def close_100():
    return _series(ref.CLOSE_100)


@pytest.fixture
def close_120():
    return _series(ref.CLOSE_120)


@pytest.fixture
def ohlcv():
    return make_ohlcv(400, seed=11)
