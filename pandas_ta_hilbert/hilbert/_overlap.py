# -*- coding: utf-8 -*-
"""pandas-ta hilbert -- overlap indicators.

Registered kinds
----------------
ht_trendline, mama
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List

import pandas as pd

from ._base import (
    _as_float,
    _pair,
    _param,
    _prices,
    HilbertIndicator,
    INDICATOR_REGISTRY,
    verify_series,
)
from ._engine import LONG_LOOKBACK, RAD2DEG, SHORT_LOOKBACK, HilbertEngine
from ._phase import TrendTapState, dc_period_int, raw_average, trendline_update


# ===========================================================================
# HT_TRENDLINE  -- Instantaneous Trendline
# ===========================================================================
# Mean of the last round(smooth_period) raw closes, then a (4,3,2,1)/10
# FIR over those means.  No phase state needed.

def ht_trendline(close: Any, **kwargs: Any) -> pd.Series:
    """Hilbert Transform - Instantaneous Trendline

    Averaging the close over exactly one dominant cycle removes the cycle
    component and leaves the trend.

    Sources:
        * John F. Ehlers, "Rocket Science for Traders"
        * TA-Lib HT_TRENDLINE

    Parameters:
        close (Series): ```close``` Series

    Returns:
        (Series): 1 column, first 63 values ```0.0```
    """
    close = verify_series(close, LONG_LOOKBACK, "ht_trendline")
    prices = _prices(close)
    out = [0.0] * len(prices)

    engine = HilbertEngine(prices, LONG_LOOKBACK)
    trend_taps = TrendTapState()
    for taps in engine.run():
        window = dc_period_int(engine.cycle.smooth_period)
        trendline = trendline_update(trend_taps, raw_average(prices, taps.today, window))
        if taps.today >= engine.lookback:
            out[taps.today] = trendline

    return pd.Series(out, index=close.index, name="HT_TL")


INDICATOR_REGISTRY["ht_trendline"] = HilbertIndicator(
    kind="ht_trendline",
    inputs=("close",),
    compute=lambda close, **p: [ht_trendline(close, **p)],
    output_names=lambda p: ["HT_TL"],
    lookback=LONG_LOOKBACK,
)


# ===========================================================================
# MAMA  -- MESA Adaptive Moving Average
# ===========================================================================
# Outputs: MAMA, FAMA.  Defaults: fastlimit=0.5, slowlimit=0.05
# alpha = fastlimit / delta_phase, floored at slowlimit; fastlimit when
# the phase moved less than one degree.

@dataclass
class AdaptiveState:
    fastlimit: float
    slowlimit: float
    mama: float = 0.0
    fama: float = 0.0
    prev_phase: float = 0.0


@dataclass(frozen=True)
class MesaAdaptive:
    mama: pd.Series
    fama: pd.Series

    def to_frame(self) -> pd.DataFrame:
        return pd.concat([self.mama, self.fama], axis=1)


def _mama_limits(params: Dict[str, Any]) -> List[float]:
    fl = _as_float(_param(params, "fastlimit", 0.5), 0.5)
    sl = _as_float(_param(params, "slowlimit", 0.05), 0.05)
    return [fl, sl]


def mama_alpha(state: AdaptiveState, q1: float, in_phase: float) -> float:
    """Smoothing constant from the bar-to-bar change of the I/Q phase."""
    if in_phase != 0.0:
        phase = math.atan(q1 / in_phase) * RAD2DEG
    else:
        phase = 0.0
    delta = state.prev_phase - phase
    state.prev_phase = phase
    if delta < 1.0:
        delta = 1.0

    if delta > 1.0:
        alpha = state.fastlimit / delta
        if alpha < state.slowlimit:
            alpha = state.slowlimit
    else:
        alpha = state.fastlimit
    return alpha


def mama_update(state: AdaptiveState, alpha: float, price: float) -> None:
    state.mama = (alpha * price) + ((1.0 - alpha) * state.mama)
    alpha *= 0.5
    state.fama = (alpha * state.mama) + ((1.0 - alpha) * state.fama)


def mama(
    close: Any, fastlimit: float = None, slowlimit: float = None,
    **kwargs: Any
) -> MesaAdaptive:
    """MESA Adaptive Moving Average (MAMA)

    An EMA whose smoothing constant follows the rate of change of the
    Hilbert Transform phase: fast while the phase turns slowly (trend),
    slow while it spins (cycle).  FAMA follows MAMA with half the constant.

    Sources:
        * John F. Ehlers, "MESA Adaptive Moving Averages"
        * TA-Lib MAMA

    Parameters:
        close (Series): ```close``` Series
        fastlimit (float): Upper bound of the constant. Default: ```0.5```
        slowlimit (float): Lower bound of the constant. Default: ```0.05```

    Returns:
        (MesaAdaptive): ```mama``` and ```fama``` Series, first 32 values
        ```0.0```

    Note:
        With ```fastlimit == slowlimit``` MAMA is a plain EMA with that
        constant, seeded at ```0.0``` on bar 12.
    """
    fl, sl = _mama_limits({"fastlimit": fastlimit, "slowlimit": slowlimit})
    close = verify_series(close, SHORT_LOOKBACK, "mama")
    prices = _prices(close)
    out_mama = [0.0] * len(prices)
    out_fama = [0.0] * len(prices)

    engine = HilbertEngine(prices, SHORT_LOOKBACK)
    state = AdaptiveState(fastlimit=fl, slowlimit=sl)
    for taps in engine.run():
        alpha = mama_alpha(state, taps.q1, taps.in_phase)
        mama_update(state, alpha, taps.price)
        if taps.today >= engine.lookback:
            out_mama[taps.today] = state.mama
            out_fama[taps.today] = state.fama

    _props = f"_{fl}_{sl}"
    return MesaAdaptive(
        mama=pd.Series(out_mama, index=close.index, name=f"MAMA{_props}"),
        fama=pd.Series(out_fama, index=close.index, name=f"FAMA{_props}"),
    )


def _mama_output_names(params: Dict[str, Any]) -> List[str]:
    fl, sl = _mama_limits(params)
    _props = f"_{fl}_{sl}"
    return [f"MAMA{_props}", f"FAMA{_props}"]


INDICATOR_REGISTRY["mama"] = HilbertIndicator(
    kind="mama",
    inputs=("close",),
    compute=lambda close, **p: _pair(mama(close, **p)),
    output_names=_mama_output_names,
    lookback=SHORT_LOOKBACK,
)
