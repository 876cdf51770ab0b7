# -*- coding: utf-8 -*-
"""pandas-ta hilbert – shared base: errors, helpers, registry.

All consumer modules (``_cycle``, ``_overlap``) import from here
and populate the registry at load time.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import warnings

import numpy as np
import pandas as pd


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class HilbertError(Exception):
    """Base class for every error raised by pandas-ta hilbert."""


class InvalidInputError(HilbertError, ValueError):
    """Input series too short for the indicator's lookback, or malformed."""


class ColumnNotFoundError(HilbertError, KeyError):
    """A named input column is missing from the frame."""

    def __init__(self, name: str, available: Sequence[str] = ()):
        self.name = name
        self.available = list(available)
        super().__init__(name)

    def __str__(self) -> str:
        return f"column '{self.name}' not found; available: {self.available}"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _param(params: Dict[str, Any], key: str, default: Any) -> Any:
    """Pull *key* from *params*; treat None as missing → default."""
    value = params.get(key, default)
    return default if value is None else value


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def _prices(close: pd.Series) -> List[float]:
    """Plain float list of *close*; list indexing keeps the bar loops fast."""
    return close.to_numpy(dtype=float).tolist()


def _pair(result: Any) -> List[pd.Series]:
    """Output Series of a two-output result dataclass, in field order."""
    return [getattr(result, f.name) for f in fields(result)]


def verify_series(series: Any, lookback: int, kind: str) -> pd.Series:
    """Return *series* as a float ``Series`` at least *lookback* long.

    Plain sequences and 1-D arrays are wrapped.  Raises
    ``InvalidInputError`` when the data is not one-dimensional or is too
    short to get through the warm-up; warns once when it holds NaN.
    """
    if isinstance(series, pd.DataFrame):
        raise InvalidInputError(f"{kind}: expected a single column, got a DataFrame")
    if not isinstance(series, pd.Series):
        values = np.asarray(series, dtype=float)
        if values.ndim != 1:
            raise InvalidInputError(f"{kind}: expected 1-D input, got {values.ndim}-D")
        series = pd.Series(values)
    elif series.dtype != np.float64:
        series = series.astype(float)

    if series.size < lookback:
        raise InvalidInputError(
            f"{kind}: needs at least {lookback} samples, got {series.size}"
        )
    if series.isna().any():
        warnings.warn(
            f"{kind}: input contains NaN; it propagates through the recursive filters.",
            UserWarning,
            stacklevel=3,
        )
    return series


# ---------------------------------------------------------------------------
# Indicator descriptor & registry  (populated by consumer modules)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HilbertIndicator:
    """Immutable descriptor for a single Hilbert-family indicator."""
    kind:         str
    inputs:       Tuple[str, ...]
    compute:      Callable[..., List[pd.Series]]
    output_names: Callable[[Dict[str, Any]], List[str]]
    lookback:     int


# Populated by consumer modules at import time.
INDICATOR_REGISTRY: Dict[str, HilbertIndicator] = {}


def get_indicator(kind: str) -> HilbertIndicator:
    indicator = INDICATOR_REGISTRY.get(kind.lower())
    if indicator is None:
        raise ValueError(f"Indicator '{kind}' not found in INDICATOR_REGISTRY")
    return indicator


def lookback(kind: str) -> int:
    """Number of leading ``0.0`` outputs *kind* produces."""
    return get_indicator(kind).lookback


def supported_kinds() -> List[str]:
    """Return sorted list of registered indicator kinds."""
    return sorted(INDICATOR_REGISTRY.keys())


# ---------------------------------------------------------------------------
# Output-name helpers
# ---------------------------------------------------------------------------

SPEC_EXCLUDES = frozenset({
    "kind", "append", "prefix", "suffix", "delimiter",
    "col_names", "close", "name", "description",
})


def resolve_output_names(
        base_names: List[str], spec: Dict[str, Any]
) -> Tuple[Optional[List[str]], Optional[str]]:
    """Apply prefix / suffix / col_names overrides from *spec*."""
    names = list(base_names)
    delimiter = spec.get("delimiter", "_")
    prefix = spec.get("prefix") or ""
    suffix = spec.get("suffix") or ""
    if prefix:
        prefix = f"{prefix}{delimiter}"
    if suffix:
        suffix = f"{delimiter}{suffix}"
    if prefix or suffix:
        names = [f"{prefix}{n}{suffix}" for n in names]
    col_names = spec.get("col_names")
    if col_names is not None:
        if not isinstance(col_names, tuple):
            col_names = (col_names,)
        if len(col_names) < len(names):
            return None, f"[!] col_names too short: {len(col_names)} < {len(names)}"
        names = list(col_names[: len(names)])
    return names, None


def indicator_params(spec: Dict[str, Any]) -> Dict[str, Any]:
    """Strip naming / meta keys, leaving the indicator's own parameters."""
    return {k: v for k, v in spec.items() if k not in SPEC_EXCLUDES}


def run_indicator(kind: str, frame: Any, **spec: Any) -> pd.DataFrame:
    """Compute *kind* over the input columns of *frame*.

    *frame* is anything with a ``get_column(name)`` method (the ``df.ht``
    accessor) or a ``DataFrame``.  Input columns can be remapped with
    e.g. ``close="adj_close"``.  Returns a ``DataFrame`` of the outputs.
    """
    indicator = get_indicator(kind)
    if isinstance(frame, pd.DataFrame):
        frame = frame.ht

    inputs = [frame.get_column(spec.get(name) or name) for name in indicator.inputs]
    params = indicator_params(spec)
    results = indicator.compute(*inputs, **params)

    names, err = resolve_output_names(indicator.output_names(params), spec)
    if err is not None:
        raise ValueError(err)
    out = pd.concat(results, axis=1)
    out.columns = names
    out.name = kind.upper()
    return out
