# -*- coding: utf-8 -*-
"""pandas-ta hilbert -- cycle indicators.

Registered kinds
----------------
ht_dcperiod, ht_dcphase, ht_phasor, ht_sine, ht_trendmode

Each section follows the pattern:
  1. Result dataclass  (two-output indicators only)
  2. public function over a ``close`` Series
  3. INDICATOR_REGISTRY["<kind>"] = HilbertIndicator(...)

Every function returns outputs indexed like ``close`` with the first
``lookback`` values set to ``0.0``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd

from ._base import (
    _pair,
    _prices,
    HilbertIndicator,
    INDICATOR_REGISTRY,
    verify_series,
)
from ._engine import LONG_LOOKBACK, SHORT_LOOKBACK, HilbertEngine
from ._phase import (
    PhaseState,
    SmoothedPriceRing,
    TrendTapState,
    dc_period_int,
    phase_update,
    raw_average,
    trendline_update,
)


# ===========================================================================
# HT_DCPERIOD  -- Dominant Cycle Period
# ===========================================================================

def ht_dcperiod(close: Any, **kwargs: Any) -> pd.Series:
    """Hilbert Transform - Dominant Cycle Period

    Smoothed period (in bars) of the dominant cycle estimated by the
    homodyne discriminator.

    Sources:
        * John F. Ehlers, "Rocket Science for Traders"
        * TA-Lib HT_DCPERIOD

    Parameters:
        close (Series): ```close``` Series

    Returns:
        (Series): 1 column, first 32 values ```0.0```
    """
    close = verify_series(close, SHORT_LOOKBACK, "ht_dcperiod")
    prices = _prices(close)
    out = [0.0] * len(prices)

    engine = HilbertEngine(prices, SHORT_LOOKBACK)
    for taps in engine.run():
        if taps.today >= engine.lookback:
            out[taps.today] = engine.cycle.smooth_period

    return pd.Series(out, index=close.index, name="HT_DCPERIOD")


INDICATOR_REGISTRY["ht_dcperiod"] = HilbertIndicator(
    kind="ht_dcperiod",
    inputs=("close",),
    compute=lambda close, **p: [ht_dcperiod(close, **p)],
    output_names=lambda p: ["HT_DCPERIOD"],
    lookback=SHORT_LOOKBACK,
)


# ===========================================================================
# HT_DCPHASE  -- Dominant Cycle Phase
# ===========================================================================
# Needs the 50-bar smoothed price ring, so it shares the 63-bar warm-up of
# HT_SINE; sin(HT_DCPHASE) == HT_SINE bar for bar.

def ht_dcphase(close: Any, **kwargs: Any) -> pd.Series:
    """Hilbert Transform - Dominant Cycle Phase

    Phase (degrees, in (-45, 315]) of the dominant cycle, found by
    correlating the last ``round(smooth_period)`` smoothed prices with one
    sine/cosine cycle.

    Parameters:
        close (Series): ```close``` Series

    Returns:
        (Series): 1 column, first 63 values ```0.0```
    """
    close = verify_series(close, LONG_LOOKBACK, "ht_dcphase")
    prices = _prices(close)
    out = [0.0] * len(prices)

    engine = HilbertEngine(prices, LONG_LOOKBACK)
    ring = SmoothedPriceRing()
    phase = PhaseState()
    for taps in engine.run():
        ring.put(taps.smoothed)
        dc_phase = phase_update(phase, ring, engine.cycle.smooth_period)
        if taps.today >= engine.lookback:
            out[taps.today] = dc_phase
        ring.step()

    return pd.Series(out, index=close.index, name="HT_DCPHASE")


INDICATOR_REGISTRY["ht_dcphase"] = HilbertIndicator(
    kind="ht_dcphase",
    inputs=("close",),
    compute=lambda close, **p: [ht_dcphase(close, **p)],
    output_names=lambda p: ["HT_DCPHASE"],
    lookback=LONG_LOOKBACK,
)


# ===========================================================================
# HT_PHASOR  -- Phasor Components
# ===========================================================================

@dataclass(frozen=True)
class Phasor:
    inphase: pd.Series
    quadrature: pd.Series

    def to_frame(self) -> pd.DataFrame:
        return pd.concat([self.inphase, self.quadrature], axis=1)


def ht_phasor(close: Any, **kwargs: Any) -> Phasor:
    """Hilbert Transform - Phasor Components

    The in-phase (detrender delayed 3 bars on the same parity) and
    quadrature (Q1) components straight out of the Hilbert filter.

    Parameters:
        close (Series): ```close``` Series

    Returns:
        (Phasor): ```inphase``` and ```quadrature``` Series, first 32
        values ```0.0```
    """
    close = verify_series(close, SHORT_LOOKBACK, "ht_phasor")
    prices = _prices(close)
    inphase = [0.0] * len(prices)
    quadrature = [0.0] * len(prices)

    engine = HilbertEngine(prices, SHORT_LOOKBACK)
    for taps in engine.run():
        if taps.today >= engine.lookback:
            inphase[taps.today] = taps.in_phase
            quadrature[taps.today] = taps.q1

    return Phasor(
        inphase=pd.Series(inphase, index=close.index, name="HT_PHASORi"),
        quadrature=pd.Series(quadrature, index=close.index, name="HT_PHASORq"),
    )


INDICATOR_REGISTRY["ht_phasor"] = HilbertIndicator(
    kind="ht_phasor",
    inputs=("close",),
    compute=lambda close, **p: _pair(ht_phasor(close, **p)),
    output_names=lambda p: ["HT_PHASORi", "HT_PHASORq"],
    lookback=SHORT_LOOKBACK,
)


# ===========================================================================
# HT_SINE  -- SineWave
# ===========================================================================

@dataclass(frozen=True)
class SineWave:
    sine: pd.Series
    leadsine: pd.Series

    def to_frame(self) -> pd.DataFrame:
        return pd.concat([self.sine, self.leadsine], axis=1)


def ht_sine(close: Any, **kwargs: Any) -> SineWave:
    """Hilbert Transform - SineWave

    ``sin(dc_phase)`` and the 45 degree lead ``sin(dc_phase + 45)``.
    Crossings of the two lines mark cycle turning points.

    Parameters:
        close (Series): ```close``` Series

    Returns:
        (SineWave): ```sine``` and ```leadsine``` Series, first 63 values
        ```0.0```
    """
    close = verify_series(close, LONG_LOOKBACK, "ht_sine")
    prices = _prices(close)
    sine = [0.0] * len(prices)
    leadsine = [0.0] * len(prices)

    engine = HilbertEngine(prices, LONG_LOOKBACK)
    ring = SmoothedPriceRing()
    phase = PhaseState()
    for taps in engine.run():
        ring.put(taps.smoothed)
        phase_update(phase, ring, engine.cycle.smooth_period)
        if taps.today >= engine.lookback:
            sine[taps.today] = phase.sine
            leadsine[taps.today] = phase.lead_sine
        ring.step()

    return SineWave(
        sine=pd.Series(sine, index=close.index, name="HT_SINE"),
        leadsine=pd.Series(leadsine, index=close.index, name="HT_LEADSINE"),
    )


INDICATOR_REGISTRY["ht_sine"] = HilbertIndicator(
    kind="ht_sine",
    inputs=("close",),
    compute=lambda close, **p: _pair(ht_sine(close, **p)),
    output_names=lambda p: ["HT_SINE", "HT_LEADSINE"],
    lookback=LONG_LOOKBACK,
)


# ===========================================================================
# HT_TRENDMODE  -- Trend vs Cycle Mode
# ===========================================================================
# Rules, in order (the last one wins):
#   a. sine / lead sine crossover     -> cycle, days_in_trend = 0
#   b. days_in_trend < smooth_period/2 -> cycle
#   c. phase advanced by roughly one cycle's worth per bar -> cycle
#   d. smoothed price >= 1.5% away from the trendline      -> trend

def _trend_mode(
    phase: PhaseState, taps: TrendTapState, smooth_period: float,
    price: float, trendline: float,
) -> int:
    trend = 1
    if ((phase.sine > phase.lead_sine and phase.prev_sine <= phase.prev_lead_sine)
            or (phase.sine < phase.lead_sine and phase.prev_sine >= phase.prev_lead_sine)):
        taps.days_in_trend = 0
        trend = 0
    taps.days_in_trend += 1

    if taps.days_in_trend < (0.5 * smooth_period):
        trend = 0

    delta = phase.dc_phase - phase.prev_dc_phase
    if smooth_period != 0.0 and (
            0.67 * 360.0 / smooth_period < delta < 1.5 * 360.0 / smooth_period):
        trend = 0

    if trendline != 0.0 and abs((price - trendline) / trendline) >= 0.015:
        trend = 1
    return trend


def ht_trendmode(close: Any, **kwargs: Any) -> pd.Series:
    """Hilbert Transform - Trend vs Cycle Mode

    ``1.0`` while the market trends, ``0.0`` while it cycles.

    Parameters:
        close (Series): ```close``` Series

    Returns:
        (Series): 1 column of 0.0 / 1.0, first 63 values ```0.0```
    """
    close = verify_series(close, LONG_LOOKBACK, "ht_trendmode")
    prices = _prices(close)
    out = [0.0] * len(prices)

    engine = HilbertEngine(prices, LONG_LOOKBACK)
    ring = SmoothedPriceRing()
    phase = PhaseState()
    trend_taps = TrendTapState()
    for taps in engine.run():
        ring.put(taps.smoothed)
        smooth_period = engine.cycle.smooth_period
        phase_update(phase, ring, smooth_period)

        average = raw_average(prices, taps.today, dc_period_int(smooth_period))
        trendline = trendline_update(trend_taps, average)
        trend = _trend_mode(phase, trend_taps, smooth_period, ring.current(), trendline)

        if taps.today >= engine.lookback:
            out[taps.today] = float(trend)
        ring.step()

    return pd.Series(out, index=close.index, name="HT_TRENDMODE")


INDICATOR_REGISTRY["ht_trendmode"] = HilbertIndicator(
    kind="ht_trendmode",
    inputs=("close",),
    compute=lambda close, **p: [ht_trendmode(close, **p)],
    output_names=lambda p: ["HT_TRENDMODE"],
    lookback=LONG_LOOKBACK,
)
