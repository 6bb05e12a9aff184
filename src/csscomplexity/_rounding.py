"""Half-up rounding, matching the rounding used by historical reports."""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> int | float:
    """Round *value* to *digits* decimals, with .5 always rounding up.

    Python's built-in ``round`` rounds half to even, which would shift
    scores such as ``2.5`` relative to earlier reports. Whole results come
    back as ``int`` so reports serialize ``2`` rather than ``2.0``.
    """
    if digits == 0:
        return math.floor(value + 0.5)
    factor = 10**digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if rounded.is_integer() else rounded
