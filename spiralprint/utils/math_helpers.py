"""Scalar and array helpers shared by the feed and toolpath code."""

from __future__ import annotations

import numpy as np


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a scalar such as a flow scale to [*low*, *high*] as a Python float."""
    if low > high:
        raise ValueError(f"empty interval [{low}, {high}]")
    return float(np.clip(value, low, high))


def lerp(start, end, t):
    """Blend from *start* (t=0) to *end* (t=1).

    *t* may be an array of blend fractions, e.g. one per sampled angle; the
    result then has the same shape.
    """
    return start + (end - start) * t
