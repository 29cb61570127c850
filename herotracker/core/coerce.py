"""
Numeric input coercion.

Badge levels and goals arrive from hand-edited documents, so anything that is
not a usable count is turned into 0 here instead of raising further in.
"""

import math
from numbers import Real
from typing import Any


def as_non_negative_int(value: Any) -> int:
    """
    Coerce a numeric input to a non-negative int.

    Finite reals are truncated towards zero; negatives, NaN, infinities,
    booleans and non-numeric values become 0.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0
    if isinstance(value, int):
        return value if value > 0 else 0
    as_float = float(value)
    if not math.isfinite(as_float) or as_float <= 0:
        return 0
    return int(as_float)


__all__ = ['as_non_negative_int']
