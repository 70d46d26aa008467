"""
Numeric helpers shared by the scoring and projection modules.

``round_half_up`` rounds .5 away from zero for positive values (the
convention dashboards and spreadsheets use), unlike Python's built-in
``round`` which rounds half to even.
"""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round ``value`` to ``ndigits`` decimals with halves rounded upward.

    Examples::

        round_half_up(2.5)        -> 3.0
        round_half_up(-2.5)       -> -2.0
        round_half_up(1.25, 1)    -> 1.3

    Non-finite inputs are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10.0 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
