# -*- coding: utf-8 -*-
"""pandas-ta.hilbert – Hilbert Transform indicator package.

Consumer modules populate INDICATOR_REGISTRY at import time.  This
package re-exports the indicators plus the shared base API.
"""
from __future__ import annotations

# Base API (always available)
from ._base import (
    HilbertError,
    InvalidInputError,
    ColumnNotFoundError,
    HilbertIndicator,
    INDICATOR_REGISTRY,
    get_indicator,
    lookback,
    supported_kinds,
    resolve_output_names,
    run_indicator,
    verify_series,
)
from ._engine import (
    SHORT_LOOKBACK,
    LONG_LOOKBACK,
    CycleState,
    HilbertEngine,
    HilbertTaps,
    ParityFilterState,
)

# ---------------------------------------------------------------------------
# Consumer modules – each populates the shared registry on import
# ---------------------------------------------------------------------------
from ._cycle import (       # ht_dcperiod, ht_dcphase, ht_phasor, …
    Phasor,
    SineWave,
    ht_dcperiod,
    ht_dcphase,
    ht_phasor,
    ht_sine,
    ht_trendmode,
)
from ._overlap import (     # ht_trendline, mama
    MesaAdaptive,
    ht_trendline,
    mama,
)

__all__ = [
    # base
    "HilbertError",
    "InvalidInputError",
    "ColumnNotFoundError",
    "HilbertIndicator",
    "INDICATOR_REGISTRY",
    "get_indicator",
    "lookback",
    "supported_kinds",
    "resolve_output_names",
    "run_indicator",
    "verify_series",
    # engine
    "SHORT_LOOKBACK",
    "LONG_LOOKBACK",
    "CycleState",
    "HilbertEngine",
    "HilbertTaps",
    "ParityFilterState",
    # indicators
    "Phasor",
    "SineWave",
    "MesaAdaptive",
    "ht_dcperiod",
    "ht_dcphase",
    "ht_phasor",
    "ht_sine",
    "ht_trendmode",
    "ht_trendline",
    "mama",
]
