# -*- coding: utf-8 -*-
"""pandas-ta hilbert -- shared Hilbert Transform core.

Every Hilbert-family indicator runs the same per-bar pipeline:

  1. Smoothing       -- 4-bar WMA (weights 1,2,3,4) kept as running sums.
  2. Hilbert filter  -- detrender, Q1, jI and jQ, each the same
                        a/b all-pass idiom over a 3-slot delay line.
                        Even and odd bars keep separate state.
  3. Homodyne discriminator -- I2/Q2 smoothing, Re/Im products.
  4. Period stabilizer      -- raw period clamped and blended into
                               ``period`` and ``smooth_period``.

``HilbertEngine`` owns all of it; consumers call ``advance()`` once per
bar and add their own small tail on top of the returned ``HilbertTaps``.

The even-bar branch advances the shared delay-line index, the odd-bar
branch does not, as in TA-Lib.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple


# Hilbert filter coefficients
A = 0.0962
B = 0.5769

RAD2DEG = 45.0 / math.atan(1.0)
DEG2RAD = 1.0 / RAD2DEG
DEG2RAD_BY_360 = math.atan(1.0) * 8.0

PERIOD_MIN = 6.0
PERIOD_MAX = 50.0

# Lookback -> number of WMA-only bars after the 3 priming bars.
SHORT_LOOKBACK = 32
LONG_LOOKBACK = 63
_WMA_ONLY_BARS = {SHORT_LOOKBACK: 9, LONG_LOOKBACK: 34}


# ---------------------------------------------------------------------------
# State aggregates
# ---------------------------------------------------------------------------

@dataclass
class WMAState:
    """Running sums of the 4-bar weighted moving average."""
    period_sub: float = 0.0
    period_sum: float = 0.0
    trailing_idx: int = 0
    trailing_value: float = 0.0


@dataclass
class HilbertTap:
    """One a/b all-pass stage: 3-slot delay line + decayed previous input."""
    ring: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    prev: float = 0.0
    prev_input: float = 0.0


@dataclass
class ParityFilterState:
    """Filter state for one bar parity (even or odd)."""
    detrender: HilbertTap = field(default_factory=HilbertTap)
    q1: HilbertTap = field(default_factory=HilbertTap)
    ji: HilbertTap = field(default_factory=HilbertTap)
    jq: HilbertTap = field(default_factory=HilbertTap)


@dataclass
class CycleState:
    """Homodyne discriminator and period stabilizer state.

    ``raw_period`` is the clamped estimate (always in [6, 50] once the
    first bar is processed); ``period`` is its 0.2/0.8 blend.
    """
    period: float = 0.0
    smooth_period: float = 0.0
    raw_period: float = 0.0
    re: float = 0.0
    im: float = 0.0
    prev_i2: float = 0.0
    prev_q2: float = 0.0


@dataclass(frozen=True)
class HilbertTaps:
    """Intermediate values of one ``advance()`` step."""
    today: int
    price: float
    smoothed: float
    detrender: float
    q1: float
    in_phase: float
    ji: float
    jq: float


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

def wma_update(state: WMAState, prices: Sequence[float], value: float) -> float:
    """Push *value* into the running sums, return the smoothed price."""
    state.period_sub += value
    state.period_sub -= state.trailing_value
    state.period_sum += value * 4.0
    state.trailing_value = prices[state.trailing_idx]
    state.trailing_idx += 1
    smoothed = state.period_sum * 0.1
    state.period_sum -= state.period_sub
    return smoothed


def hilbert_transform(tap: HilbertTap, value: float, idx: int, adjusted_period: float) -> float:
    """Single all-pass stage over *tap*'s delay slot *idx*."""
    hilbert_temp = A * value
    out = -tap.ring[idx]
    tap.ring[idx] = hilbert_temp
    out += hilbert_temp
    out -= tap.prev
    tap.prev = B * tap.prev_input
    out += tap.prev
    tap.prev_input = value
    out *= adjusted_period
    return out


def homodyne_update(cycle: CycleState, i2: float, q2: float) -> None:
    """Re/Im products of the smoothed I2/Q2 against the previous bar."""
    cycle.re = (0.2 * ((i2 * cycle.prev_i2) + (q2 * cycle.prev_q2))) + (0.8 * cycle.re)
    cycle.im = (0.2 * ((i2 * cycle.prev_q2) - (q2 * cycle.prev_i2))) + (0.8 * cycle.im)
    cycle.prev_q2 = q2
    cycle.prev_i2 = i2


def stabilize_period(cycle: CycleState) -> None:
    """Turn Re/Im into a bounded, smoothed dominant cycle period."""
    prev_period = cycle.period
    period = prev_period
    if cycle.im != 0.0 and cycle.re != 0.0:
        period = 360.0 / (math.atan(cycle.im / cycle.re) * RAD2DEG)

    upper = 1.5 * prev_period
    if period > upper:
        period = upper
    lower = 0.67 * prev_period
    if period < lower:
        period = lower

    if period < PERIOD_MIN:
        period = PERIOD_MIN
    elif period > PERIOD_MAX:
        period = PERIOD_MAX

    cycle.raw_period = period
    cycle.period = (0.2 * period) + (0.8 * prev_period)
    cycle.smooth_period = (0.33 * cycle.period) + (0.67 * cycle.smooth_period)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class HilbertEngine:
    """Per-call Hilbert Transform state machine over one price list.

    Construction primes the WMA (``Warmup``); each ``advance()`` then runs
    the full pipeline for the next bar.  ``emitting`` turns True once the
    current bar is at or past ``lookback`` and never turns back.
    """

    def __init__(self, prices: Sequence[float], lookback: int = SHORT_LOOKBACK):
        if lookback not in _WMA_ONLY_BARS:
            raise ValueError(f"lookback must be one of {sorted(_WMA_ONLY_BARS)}")
        self.prices = prices
        self.lookback = lookback
        self.wma = WMAState()
        self.parity: Tuple[ParityFilterState, ParityFilterState] = (
            ParityFilterState(), ParityFilterState(),
        )
        self.cycle = CycleState()
        self.hilbert_idx = 0
        # i1 delay registers, indexed by the parity that *reads* them.
        self.i1_prev2 = [0.0, 0.0]
        self.i1_prev3 = [0.0, 0.0]
        self.today = 0
        self._prime(_WMA_ONLY_BARS[lookback])

    def _prime(self, wma_only_bars: int) -> None:
        prices, wma = self.prices, self.wma
        wma.period_sub = prices[0]
        wma.period_sum = prices[0]
        wma.period_sub += prices[1]
        wma.period_sum += prices[1] * 2.0
        wma.period_sub += prices[2]
        wma.period_sum += prices[2] * 3.0
        self.today = 3
        for _ in range(wma_only_bars):
            wma_update(wma, prices, prices[self.today])
            self.today += 1

    @property
    def emitting(self) -> bool:
        return self.today >= self.lookback

    def __len__(self) -> int:
        return len(self.prices)

    def advance(self) -> HilbertTaps:
        """Process ``prices[today]``; return this bar's taps."""
        today = self.today
        cycle = self.cycle
        adjusted_period = (0.075 * cycle.period) + 0.54
        price = self.prices[today]
        smoothed = wma_update(self.wma, self.prices, price)

        odd = today % 2
        state = self.parity[odd]
        idx = self.hilbert_idx
        in_phase = self.i1_prev3[odd]

        detrender = hilbert_transform(state.detrender, smoothed, idx, adjusted_period)
        q1 = hilbert_transform(state.q1, detrender, idx, adjusted_period)
        ji = hilbert_transform(state.ji, in_phase, idx, adjusted_period)
        jq = hilbert_transform(state.jq, q1, idx, adjusted_period)
        if not odd:
            self.hilbert_idx = (idx + 1) % 3

        q2 = (0.2 * (q1 + ji)) + (0.8 * cycle.prev_q2)
        i2 = (0.2 * (in_phase - jq)) + (0.8 * cycle.prev_i2)

        # This bar's detrender feeds the other parity's in-phase delay.
        other = 1 - odd
        self.i1_prev3[other] = self.i1_prev2[other]
        self.i1_prev2[other] = detrender

        homodyne_update(cycle, i2, q2)
        stabilize_period(cycle)

        taps = HilbertTaps(
            today=today, price=price, smoothed=smoothed, detrender=detrender,
            q1=q1, in_phase=in_phase, ji=ji, jq=jq,
        )
        self.today = today + 1
        return taps

    def run(self) -> Iterator[HilbertTaps]:
        """Advance through every remaining bar."""
        while self.today < len(self.prices):
            yield self.advance()
