# -*- coding: utf-8 -*-
"""``df.ht`` DataFrame extension.

    >>> import pandas_ta_hilbert
    >>> df.ht.dcperiod()                      # Series
    >>> df.ht.mama(fastlimit=0.4, append=True)  # adds MAMA/FAMA columns
    >>> df.ht("ht_sine", prefix="D1")           # DataFrame via the registry
"""
from __future__ import annotations

from typing import Any, Union

import pandas as pd

from pandas_ta_hilbert.hilbert import (
    ColumnNotFoundError,
    ht_dcperiod,
    ht_dcphase,
    ht_phasor,
    ht_sine,
    ht_trendline,
    ht_trendmode,
    mama,
    run_indicator,
)

Result = Union[pd.Series, pd.DataFrame]


@pd.api.extensions.register_dataframe_accessor("ht")
class HilbertAccessor:
    """Hilbert Transform indicators over the columns of a DataFrame."""

    def __init__(self, pandas_obj: pd.DataFrame):
        self._df = pandas_obj

    def __call__(self, kind: str, append: bool = False, **kwargs: Any) -> pd.DataFrame:
        result = run_indicator(kind, self, **kwargs)
        return self._post_process(result, append)

    # Column access -------------------------------------------------------

    def get_column(self, name: str) -> pd.Series:
        """Float column *name*; exact match first, then case-insensitive."""
        df = self._df
        if name in df.columns:
            return df[name].astype(float)
        lowered = {str(c).lower(): c for c in df.columns}
        if name.lower() in lowered:
            return df[lowered[name.lower()]].astype(float)
        raise ColumnNotFoundError(name, [str(c) for c in df.columns])

    def row_count(self) -> int:
        return len(self._df.index)

    def _post_process(self, result: Result, append: bool) -> Result:
        if append:
            if isinstance(result, pd.Series):
                self._df[result.name] = result
            else:
                for col in result.columns:
                    self._df[col] = result[col]
        return result

    # Indicators ----------------------------------------------------------

    def dcperiod(self, close: str = "close", append: bool = False, **kwargs: Any) -> pd.Series:
        return self._post_process(ht_dcperiod(self.get_column(close), **kwargs), append)

    def dcphase(self, close: str = "close", append: bool = False, **kwargs: Any) -> pd.Series:
        return self._post_process(ht_dcphase(self.get_column(close), **kwargs), append)

    def phasor(self, close: str = "close", append: bool = False, **kwargs: Any) -> pd.DataFrame:
        result = ht_phasor(self.get_column(close), **kwargs).to_frame()
        return self._post_process(result, append)

    def sine(self, close: str = "close", append: bool = False, **kwargs: Any) -> pd.DataFrame:
        result = ht_sine(self.get_column(close), **kwargs).to_frame()
        return self._post_process(result, append)

    def trendmode(self, close: str = "close", append: bool = False, **kwargs: Any) -> pd.Series:
        return self._post_process(ht_trendmode(self.get_column(close), **kwargs), append)

    def trendline(self, close: str = "close", append: bool = False, **kwargs: Any) -> pd.Series:
        return self._post_process(ht_trendline(self.get_column(close), **kwargs), append)

    def mama(
        self, close: str = "close", fastlimit: float = None, slowlimit: float = None,
        append: bool = False, **kwargs: Any
    ) -> pd.DataFrame:
        result = mama(self.get_column(close), fastlimit=fastlimit, slowlimit=slowlimit, **kwargs)
        return self._post_process(result.to_frame(), append)
