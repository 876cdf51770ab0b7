# -*- coding: utf-8 -*-
from importlib.metadata import version
version = version("pandas_ta_hilbert")

from pandas_ta_hilbert.hilbert import *
from pandas_ta_hilbert.hilbert import __all__ as hilbert_all

# Enable "ht" DataFrame Extension
from pandas_ta_hilbert.core import HilbertAccessor

__all__ = [
    "version",
    "HilbertAccessor",
]

__all__ += hilbert_all
