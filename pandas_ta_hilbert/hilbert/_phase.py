# -*- coding: utf-8 -*-
"""pandas-ta hilbert -- dominant cycle phase and trendline helpers.

Shared tails for the long-lookback consumers:
  * ``SmoothedPriceRing`` + ``PhaseState``  -> HT_DCPHASE, HT_SINE, HT_TRENDMODE
  * ``TrendTapState`` + ``trendline_update`` -> HT_TRENDLINE, HT_TRENDMODE
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from ._engine import DEG2RAD, DEG2RAD_BY_360, RAD2DEG

RING_SIZE = 50


@dataclass
class SmoothedPriceRing:
    """Last 50 smoothed prices; ``idx`` points at the current bar's slot."""
    values: List[float] = field(default_factory=lambda: [0.0] * RING_SIZE)
    idx: int = 0

    def put(self, value: float) -> None:
        self.values[self.idx] = value

    def current(self) -> float:
        return self.values[self.idx]

    def step(self) -> None:
        self.idx += 1
        if self.idx > RING_SIZE - 1:
            self.idx = 0


@dataclass
class PhaseState:
    dc_phase: float = 0.0
    prev_dc_phase: float = 0.0
    sine: float = 0.0
    lead_sine: float = 0.0
    prev_sine: float = 0.0
    prev_lead_sine: float = 0.0


@dataclass
class TrendTapState:
    i_trend1: float = 0.0
    i_trend2: float = 0.0
    i_trend3: float = 0.0
    days_in_trend: int = 0


def dc_period_int(smooth_period: float) -> int:
    """Correlation window: ``smooth_period`` rounded half up (0 for NaN)."""
    if math.isnan(smooth_period):
        return 0
    return math.floor(smooth_period + 0.5)


def phase_update(state: PhaseState, ring: SmoothedPriceRing, smooth_period: float) -> float:
    """Correlate the ring against one cycle of sine/cosine -> dc phase (deg).

    Keeps the previous phase and sine pair in *state* for crossover checks.
    """
    state.prev_dc_phase = state.dc_phase
    window = dc_period_int(smooth_period)

    real_part = 0.0
    imag_part = 0.0
    idx = ring.idx
    for j in range(window):
        angle = (j * DEG2RAD_BY_360) / window
        price = ring.values[idx]
        real_part += math.sin(angle) * price
        imag_part += math.cos(angle) * price
        if idx == 0:
            idx = RING_SIZE - 1
        else:
            idx -= 1

    dc_phase = state.dc_phase
    if abs(imag_part) > 0.0:
        dc_phase = math.atan(real_part / imag_part) * RAD2DEG
    elif abs(imag_part) <= 0.01:
        if real_part < 0.0:
            dc_phase -= 90.0
        elif real_part > 0.0:
            dc_phase += 90.0

    dc_phase += 90.0
    # compensate for the one bar lag of the WMA
    dc_phase += 360.0 / smooth_period
    if imag_part < 0.0:
        dc_phase += 180.0
    if dc_phase > 315.0:
        dc_phase -= 360.0

    state.dc_phase = dc_phase
    state.prev_sine = state.sine
    state.prev_lead_sine = state.lead_sine
    state.sine = math.sin(dc_phase * DEG2RAD)
    state.lead_sine = math.sin((dc_phase + 45.0) * DEG2RAD)
    return dc_phase


def raw_average(prices: Sequence[float], today: int, window: int) -> float:
    """Mean of the last *window* raw prices ending at *today*.

    Never reads before index 0; still divides by the full *window*.
    """
    total = 0.0
    for j in range(min(window, today + 1)):
        total += prices[today - j]
    if window > 0:
        total = total / window
    return total


def trendline_update(taps: TrendTapState, average: float) -> float:
    """4-tap FIR (4,3,2,1)/10 over the instantaneous trend averages."""
    trendline = (4.0 * average + 3.0 * taps.i_trend1 + 2.0 * taps.i_trend2 + taps.i_trend3) / 10.0
    taps.i_trend3 = taps.i_trend2
    taps.i_trend2 = taps.i_trend1
    taps.i_trend1 = average
    return trendline
