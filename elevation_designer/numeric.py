"""Small numeric helpers shared by the shadow engine."""
from __future__ import annotations

import math
from typing import Any


def is_real_number(value: Any) -> bool:
    """Return ``True`` for ints and floats, booleans excluded."""

    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    """Return ``True`` for real numbers that fit a finite float.

    Ints too large for a float count as non-finite.
    """

    if not is_real_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def finite_or(value: Any, default: float) -> float:
    return float(value) if is_finite_number(value) else default


def clamp(lo: float, hi: float, n: float) -> float:
    return max(lo, min(hi, n))


def clamp01(n: float) -> float:
    return clamp(0.0, 1.0, n)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def remap01(x: float, in_min: float, in_max: float) -> float:
    """Map ``x`` from ``[in_min, in_max]`` onto ``[0, 1]``, clamped."""

    denom = in_max - in_min
    if not math.isfinite(denom) or denom == 0:
        return 0.0
    return clamp01((x - in_min) / denom)


def round_half_up(n: float, digits: int = 0) -> float:
    """Round ties towards positive infinity, as browsers do.

    The result never carries a negative zero.
    """

    scale = 10 ** digits
    return math.floor(n * scale + 0.5) / scale + 0.0


def sign(n: float) -> float:
    if n > 0:
        return 1.0
    if n < 0:
        return -1.0
    return 0.0
