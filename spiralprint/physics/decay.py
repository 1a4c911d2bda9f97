"""Radius-dependent flow taper for the outer rim of a disc."""

from __future__ import annotations

from spiralprint.utils.math_helpers import clamp

DEFAULT_DECAY_SHAPE = 1.0


def decay_factor(radius: float, diameter: float, shape: float = DEFAULT_DECAY_SHAPE) -> float:
    """Return ``1 - (shape * radius / diameter) ** 2``.

    The factor is 1.0 at the centre and falls to zero at
    ``radius == diameter / shape``. Beyond that it goes negative; use
    :func:`clamped_decay_factor` before scaling a feed.
    """
    return 1.0 - (shape * radius / diameter) ** 2


def clamped_decay_factor(
    radius: float, diameter: float, shape: float = DEFAULT_DECAY_SHAPE
) -> float:
    """:func:`decay_factor` clamped to [0, 1]."""
    return clamp(decay_factor(radius, diameter, shape), 0.0, 1.0)
