# -*- coding: utf-8 -*-
import math

import numpy as np
import pandas as pd
import pytest

from pandas_ta_hilbert import (
    HilbertError,
    InvalidInputError,
    Phasor,
    SineWave,
    ht_dcperiod,
    ht_dcphase,
    ht_phasor,
    ht_sine,
    ht_trendmode,
)
from pandas_ta_hilbert.hilbert._engine import DEG2RAD

from . import reference_data as ref

TOL = 1e-9


def assert_reference(result, expected):
    np.testing.assert_allclose(result.to_numpy(), np.asarray(expected), rtol=0, atol=TOL)


class TestDcPeriod:
    def test_reference(self, close_45):
        result = ht_dcperiod(close_45)
        assert isinstance(result, pd.Series)
        assert result.name == "HT_DCPERIOD"
        assert result.index.equals(close_45.index)
        assert_reference(result, ref.HT_DCPERIOD_45)

    def test_first_value(self, close_45):
        result = ht_dcperiod(close_45)
        assert (result.iloc[:32] == 0.0).all()
        assert result.iloc[32] == pytest.approx(11.01413133149039, abs=TOL)

    def test_accepts_plain_sequences(self, close_45):
        expected = ht_dcperiod(close_45).to_numpy()
        np.testing.assert_array_equal(ht_dcperiod(ref.CLOSE_45).to_numpy(), expected)
        np.testing.assert_array_equal(ht_dcperiod(np.array(ref.CLOSE_45)).to_numpy(), expected)

    def test_integer_series(self):
        close = pd.Series(range(100, 160))
        result = ht_dcperiod(close)
        assert result.dtype == np.float64
        assert len(result) == 60

    def test_idempotent(self, close_100):
        pd.testing.assert_series_equal(ht_dcperiod(close_100), ht_dcperiod(close_100))

    def test_short_input(self):
        with pytest.raises(InvalidInputError, match="32"):
            ht_dcperiod(ref.CLOSE_45[:31])

    def test_exact_lookback_is_all_zero(self):
        result = ht_dcperiod(ref.CLOSE_45[:32])
        assert len(result) == 32
        assert (result == 0.0).all()

    def test_rejects_2d_input(self):
        with pytest.raises(InvalidInputError):
            ht_dcperiod(np.ones((40, 2)))
        with pytest.raises(InvalidInputError):
            ht_dcperiod(pd.DataFrame({"close": ref.CLOSE_45}))

    def test_error_hierarchy(self):
        with pytest.raises(ValueError):
            ht_dcperiod([1.0, 2.0])
        assert issubclass(InvalidInputError, HilbertError)

    def test_nan_warns(self, close_100):
        close_100.iloc[50] = np.nan
        with pytest.warns(UserWarning, match="NaN"):
            result = ht_dcperiod(close_100)
        assert result.iloc[40] != 0.0
        assert np.isnan(result.iloc[-1])


class TestDcPhase:
    def test_reference(self, close_100):
        result = ht_dcphase(close_100)
        assert result.name == "HT_DCPHASE"
        assert_reference(result, ref.HT_DCPHASE_100)

    def test_range(self, ohlcv):
        result = ht_dcphase(ohlcv["close"]).iloc[63:]
        assert (result > -45.0).all()
        assert (result <= 315.0).all()

    def test_short_input(self, close_60):
        with pytest.raises(InvalidInputError, match="63"):
            ht_dcphase(close_60)


class TestPhasor:
    def test_reference(self, close_100):
        result = ht_phasor(close_100)
        assert isinstance(result, Phasor)
        assert result.inphase.name == "HT_PHASORi"
        assert result.quadrature.name == "HT_PHASORq"
        assert_reference(result.inphase, ref.HT_PHASOR_INPHASE_100)
        assert_reference(result.quadrature, ref.HT_PHASOR_QUADRATURE_100)

    def test_to_frame(self, close_100):
        frame = ht_phasor(close_100).to_frame()
        assert list(frame.columns) == ["HT_PHASORi", "HT_PHASORq"]
        assert frame.index.equals(close_100.index)

    def test_zero_prefix(self, ohlcv):
        result = ht_phasor(ohlcv["close"])
        assert (result.inphase.iloc[:32] == 0.0).all()
        assert (result.quadrature.iloc[:32] == 0.0).all()


class TestSine:
    def test_reference(self, close_100):
        result = ht_sine(close_100)
        assert isinstance(result, SineWave)
        assert_reference(result.sine, ref.HT_SINE_100)
        assert_reference(result.leadsine, ref.HT_LEADSINE_100)

    def test_follows_dcphase(self, ohlcv):
        close = ohlcv["close"]
        phase = ht_dcphase(close)
        result = ht_sine(close)
        for t in range(63, len(close)):
            assert result.sine.iloc[t] == pytest.approx(math.sin(phase.iloc[t] * DEG2RAD), abs=1e-12)
            assert result.leadsine.iloc[t] == pytest.approx(
                math.sin((phase.iloc[t] + 45.0) * DEG2RAD), abs=1e-12)

    def test_bounded(self, ohlcv):
        frame = ht_sine(ohlcv["close"]).to_frame()
        assert list(frame.columns) == ["HT_SINE", "HT_LEADSINE"]
        assert (frame.abs() <= 1.0).all().all()
        assert (frame.iloc[:63] == 0.0).all().all()

    def test_nan_propagates(self, close_100):
        close_100.iloc[70] = np.nan
        with pytest.warns(UserWarning):
            result = ht_sine(close_100)
        assert not np.isnan(result.sine.iloc[69])
        assert np.isnan(result.sine.iloc[-1])


class TestTrendMode:
    def test_reference(self, close_100):
        result = ht_trendmode(close_100)
        assert result.name == "HT_TRENDMODE"
        assert_reference(result, ref.HT_TRENDMODE_100)

    def test_binary(self, ohlcv):
        result = ht_trendmode(ohlcv["close"])
        assert set(result.unique()) <= {0.0, 1.0}
        assert (result.iloc[:63] == 0.0).all()

    def test_short_input(self):
        with pytest.raises(InvalidInputError):
            ht_trendmode(ref.CLOSE_60)
