# -*- coding: utf-8 -*-
import math

import numpy as np
import pytest

from pandas_ta_hilbert.hilbert import (
    LONG_LOOKBACK,
    SHORT_LOOKBACK,
    CycleState,
    HilbertEngine,
)
from pandas_ta_hilbert.hilbert._engine import (
    A,
    B,
    PERIOD_MAX,
    PERIOD_MIN,
    HilbertTap,
    hilbert_transform,
    stabilize_period,
)

from . import reference_data as ref


def _cycle_with_angle(prev_period, degrees):
    # Re/Im pair whose phase angle is *degrees*
    return CycleState(period=prev_period, re=1.0, im=math.tan(math.radians(degrees)))


class TestHilbertTransform:
    def test_first_step_scales_input(self):
        tap = HilbertTap()
        assert hilbert_transform(tap, 10.0, 0, 1.0) == pytest.approx(A * 10.0)
        assert tap.ring == [A * 10.0, 0.0, 0.0]
        assert tap.prev_input == 10.0

    def test_previous_input_feeds_back(self):
        tap = HilbertTap()
        hilbert_transform(tap, 10.0, 0, 1.0)
        assert hilbert_transform(tap, 0.0, 1, 2.0) == pytest.approx(2.0 * B * 10.0)

    def test_delay_slot_is_subtracted(self):
        tap = HilbertTap()
        hilbert_transform(tap, 10.0, 0, 1.0)
        tap.prev = tap.prev_input = 0.0
        assert hilbert_transform(tap, 0.0, 0, 1.0) == pytest.approx(-A * 10.0)


class TestStabilizePeriod:
    def test_inside_band(self):
        cycle = _cycle_with_angle(10.0, 45.0)
        stabilize_period(cycle)
        assert cycle.raw_period == pytest.approx(8.0)
        assert cycle.period == pytest.approx(0.2 * 8.0 + 0.8 * 10.0)
        assert cycle.smooth_period == pytest.approx(0.33 * cycle.period)

    def test_upper_rate_limit(self):
        cycle = _cycle_with_angle(10.0, 5.0)
        stabilize_period(cycle)
        assert cycle.raw_period == pytest.approx(15.0)

    def test_lower_rate_limit(self):
        cycle = _cycle_with_angle(10.0, 80.0)
        stabilize_period(cycle)
        assert cycle.raw_period == pytest.approx(6.7)

    def test_absolute_limits(self):
        cycle = _cycle_with_angle(40.0, 5.0)
        stabilize_period(cycle)
        assert cycle.raw_period == PERIOD_MAX

        cycle = _cycle_with_angle(0.0, 45.0)
        stabilize_period(cycle)
        assert cycle.raw_period == PERIOD_MIN
        assert cycle.period == pytest.approx(1.2)

    def test_flat_discriminator_keeps_previous(self):
        cycle = CycleState(period=20.0, re=0.0, im=0.0)
        stabilize_period(cycle)
        assert cycle.raw_period == 20.0
        assert cycle.period == pytest.approx(20.0)


class TestHilbertEngine:
    def test_rejects_unknown_lookback(self):
        with pytest.raises(ValueError):
            HilbertEngine(ref.CLOSE_120, 40)

    @pytest.mark.parametrize("lookback, first_bar", [(SHORT_LOOKBACK, 12), (LONG_LOOKBACK, 37)])
    def test_priming(self, lookback, first_bar):
        engine = HilbertEngine(ref.CLOSE_120, lookback)
        assert engine.today == first_bar
        assert not engine.emitting
        assert engine.advance().today == first_bar

    def test_run_visits_every_remaining_bar(self):
        engine = HilbertEngine(ref.CLOSE_100, SHORT_LOOKBACK)
        days = [taps.today for taps in engine.run()]
        assert days == list(range(12, 100))
        assert engine.emitting
        assert len(engine) == 100

    def test_smoothing_is_4_bar_wma(self):
        prices = ref.CLOSE_120
        for taps in HilbertEngine(prices, SHORT_LOOKBACK).run():
            t = taps.today
            expected = (4 * prices[t] + 3 * prices[t - 1] + 2 * prices[t - 2] + prices[t - 3]) / 10
            assert taps.smoothed == pytest.approx(expected, abs=1e-9)

    def test_constant_input_smooths_to_itself(self):
        for taps in HilbertEngine([25.0] * 80, LONG_LOOKBACK).run():
            assert taps.smoothed == pytest.approx(25.0)

    def test_only_even_bars_advance_the_delay_index(self):
        engine = HilbertEngine(ref.CLOSE_120, SHORT_LOOKBACK)
        while engine.today < len(engine):
            before = engine.hilbert_idx
            taps = engine.advance()
            if taps.today % 2 == 0:
                assert engine.hilbert_idx == (before + 1) % 3
            else:
                assert engine.hilbert_idx == before

    def test_in_phase_is_detrender_three_bars_back(self):
        taps = list(HilbertEngine(ref.CLOSE_100, SHORT_LOOKBACK).run())
        assert [t.in_phase for t in taps[:3]] == [0.0, 0.0, 0.0]
        for k in range(3, len(taps)):
            assert taps[k].in_phase == taps[k - 3].detrender

    @pytest.mark.parametrize("lookback", [SHORT_LOOKBACK, LONG_LOOKBACK])
    def test_period_bounds(self, ohlcv, lookback):
        engine = HilbertEngine(ohlcv["close"].tolist(), lookback)
        for _ in engine.run():
            cycle = engine.cycle
            assert PERIOD_MIN <= cycle.raw_period <= PERIOD_MAX
            assert 0.0 < cycle.period <= PERIOD_MAX
            assert cycle.smooth_period > 0.0
            assert not np.isnan(cycle.smooth_period)

    def test_deterministic(self):
        first = [t for t in HilbertEngine(ref.CLOSE_120, LONG_LOOKBACK).run()]
        second = [t for t in HilbertEngine(ref.CLOSE_120, LONG_LOOKBACK).run()]
        assert first == second
