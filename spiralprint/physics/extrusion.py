"""Volumetric feed model: filament length needed to lay down a bead."""

from __future__ import annotations

import logging
import math

from spiralprint.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


def extrusion_ratio(
    layer_height: float,
    line_width: float,
    filament_diameter: float,
) -> float:
    """Filament mm fed per mm of head travel.

    Uses volumetric equivalence with the bead approximated as a rectangle:
        deposited = layer_height * line_width          (mm^3 per travel mm)
        supplied  = pi * (filament_diameter / 2) ** 2  (mm^3 per feed mm)
        ratio     = deposited / supplied

    Raises
    ------
    InvalidConfiguration
        If ``filament_diameter`` is zero or negative.
    """
    if filament_diameter <= 0:
        raise InvalidConfiguration(
            f"filament_diameter must be positive, got {filament_diameter}"
        )
    deposited = layer_height * line_width
    supplied = math.pi * (filament_diameter / 2.0) ** 2
    return deposited / supplied


def required_feed(
    travel_distance: float,
    layer_height: float,
    line_width: float,
    filament_diameter: float,
    flow_multiplier: float = 1.0,
) -> float:
    """Filament length to feed while travelling ``travel_distance`` mm.

    Linear in travel distance and in flow multiplier.

    >>> round(required_feed(10.0, 0.2, 0.4, 1.75), 4)
    0.3326
    """
    ratio = extrusion_ratio(layer_height, line_width, filament_diameter)
    return travel_distance * ratio * flow_multiplier


class ExtrusionModel:
    """Feed model with the extrusion ratio cached for the current bead.

    The ratio depends only on layer height, line width and filament
    diameter, and is recomputed the moment either bead dimension changes.
    The flow multiplier is not part of the cache; it is applied per call.
    """

    def __init__(
        self,
        layer_height: float,
        line_width: float,
        filament_diameter: float,
    ) -> None:
        if filament_diameter <= 0:
            raise InvalidConfiguration(
                f"filament_diameter must be positive, got {filament_diameter}"
            )
        self.filament_diameter = filament_diameter
        self._layer_height = layer_height
        self._line_width = line_width
        self.ratio: float = 0.0
        self._recompute()

    @property
    def layer_height(self) -> float:
        return self._layer_height

    @layer_height.setter
    def layer_height(self, value: float) -> None:
        self._layer_height = value
        self._recompute()

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, value: float) -> None:
        self._line_width = value
        self._recompute()

    def feed_for(self, travel_distance: float, flow_multiplier: float = 1.0) -> float:
        """Feed length for a move of ``travel_distance`` mm at the cached ratio."""
        return travel_distance * self.ratio * flow_multiplier

    def _recompute(self) -> None:
        self.ratio = extrusion_ratio(
            self._layer_height, self._line_width, self.filament_diameter
        )
        logger.debug(
            "extrusion ratio %.6f (layer %.3f mm, width %.3f mm, filament %.3f mm)",
            self.ratio,
            self._layer_height,
            self._line_width,
            self.filament_diameter,
        )
