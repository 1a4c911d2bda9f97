"""Motion and extrusion tracker for one print job."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from spiralprint.config import PrintConfig, DEFAULT_CONFIG
from spiralprint.errors import InvalidConfiguration
from spiralprint.gcode.commands import (
    AbsoluteExtrusionMode,
    Comment,
    ExtrudeMove,
    FeedMove,
    Home,
    SetAbsoluteFeed,
    SetBedTemp,
    SetFan,
    SetHotendTemp,
    Travel,
)
from spiralprint.gcode.writer import CommandBuffer
from spiralprint.physics.extrusion import ExtrusionModel
from spiralprint.utils.math_helpers import clamp

if TYPE_CHECKING:
    from spiralprint.gcode.commands import Command

logger = logging.getLogger(__name__)


def point3(x: float, y: float, z: float) -> np.ndarray:
    """Build a 3-D point (mm) as a float array."""
    return np.array([x, y, z], dtype=float)


@dataclass(frozen=True)
class MotionParameters:
    """Feedrates and bead geometry a MotionState starts with."""

    travel_feedrate: float = DEFAULT_CONFIG.travel_feedrate  # mm/min
    print_feedrate: float = DEFAULT_CONFIG.print_feedrate  # mm/min
    layer_height: float = DEFAULT_CONFIG.layer_height  # mm
    line_width: float = DEFAULT_CONFIG.line_width  # mm
    filament_diameter: float = DEFAULT_CONFIG.filament_diameter  # mm
    flow_multiplier: float = DEFAULT_CONFIG.flow_multiplier
    retract_feedrate: float = DEFAULT_CONFIG.retract_feedrate  # mm/min

    def __post_init__(self) -> None:
        for name in (
            "travel_feedrate",
            "print_feedrate",
            "layer_height",
            "line_width",
            "filament_diameter",
            "flow_multiplier",
            "retract_feedrate",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidConfiguration(f"{name} must be positive, got {value}")

    @classmethod
    def from_config(cls, config: PrintConfig = DEFAULT_CONFIG) -> MotionParameters:
        return cls(
            travel_feedrate=config.travel_feedrate,
            print_feedrate=config.print_feedrate,
            layer_height=config.layer_height,
            line_width=config.line_width,
            filament_diameter=config.filament_diameter,
            flow_multiplier=config.flow_multiplier,
            retract_feedrate=config.retract_feedrate,
        )


class MotionState:
    """Current head position and extruder feed, plus the motion settings.

    Every motion call updates the tracked position / feed and forwards a
    finished command to ``sink``. Extruder positions are absolute (M82);
    :meth:`set_extrusion` renumbers them to keep values small.
    """

    def __init__(
        self,
        params: MotionParameters | None = None,
        sink: CommandBuffer | None = None,
    ) -> None:
        params = params if params is not None else MotionParameters()
        self.sink = sink if sink is not None else CommandBuffer()

        # --- Tracked state ---
        self.position: np.ndarray = point3(0, 0, 0)
        self.extruder: float = 0.0

        # --- Motion settings ---
        self.travel_feedrate: float = params.travel_feedrate
        self.print_feedrate: float = params.print_feedrate
        self.retract_feedrate: float = params.retract_feedrate
        self.flow_multiplier: float = params.flow_multiplier
        self.extrusion = ExtrusionModel(
            params.layer_height, params.line_width, params.filament_diameter
        )
        logger.debug("motion state ready, extrusion ratio %.6f", self.extrusion.ratio)

    # ------------------------------------------------------------------ #
    #  Derived configuration                                              #
    # ------------------------------------------------------------------ #

    @property
    def layer_height(self) -> float:
        return self.extrusion.layer_height

    @property
    def line_width(self) -> float:
        return self.extrusion.line_width

    @property
    def filament_diameter(self) -> float:
        return self.extrusion.filament_diameter

    @property
    def extrusion_ratio(self) -> float:
        return self.extrusion.ratio

    def set_layer_height(self, layer_height: float) -> None:
        self.extrusion.layer_height = layer_height

    def set_line_width(self, line_width: float) -> None:
        self.extrusion.line_width = line_width

    def set_flow_multiplier(self, flow_multiplier: float) -> None:
        self.flow_multiplier = flow_multiplier

    def set_travel_feedrate(self, travel_feedrate: float) -> None:
        self.travel_feedrate = travel_feedrate

    def set_print_feedrate(self, print_feedrate: float) -> None:
        self.print_feedrate = print_feedrate

    # ------------------------------------------------------------------ #
    #  Motion                                                             #
    # ------------------------------------------------------------------ #

    def required_feed(self, point: np.ndarray) -> float:
        """Feed :meth:`extrude_to` would add for a move to ``point``."""
        distance = float(np.linalg.norm(np.asarray(point, dtype=float) - self.position))
        return self.extrusion.feed_for(distance, self.flow_multiplier)

    def travel_to(self, point: np.ndarray) -> None:
        """Rapid move; the extruder is not touched."""
        point = np.asarray(point, dtype=float)
        self._emit(Travel(*map(float, point), feedrate=self.travel_feedrate))
        self.position = point.copy()

    def extrude_to(self, point: np.ndarray) -> None:
        """Printing move with the feed derived from the travelled distance."""
        self.extrude_with_explicit_flow(point, self.required_feed(point))

    def extrude_with_explicit_flow(self, point: np.ndarray, feed_delta: float) -> None:
        """Printing move adding ``feed_delta`` to the extruder as given."""
        point = np.asarray(point, dtype=float)
        self.extruder += feed_delta
        self._emit(
            ExtrudeMove(
                *map(float, point), feed=self.extruder, feedrate=self.print_feedrate
            )
        )
        self.position = point.copy()

    def move_extruder(self, delta: float) -> None:
        """Feed-only move; negative ``delta`` retracts."""
        self.extruder += delta
        self._emit(FeedMove(feed=self.extruder, feedrate=self.retract_feedrate))

    def set_extrusion(self, value: float) -> None:
        """Renumber the current extruder position to ``value``."""
        self._emit(SetAbsoluteFeed(value=value))
        self.extruder = value

    def home(self) -> None:
        self._emit(Home())
        self.position = point3(0, 0, 0)

    # ------------------------------------------------------------------ #
    #  Machine setup                                                      #
    # ------------------------------------------------------------------ #

    def absolute_extrusion(self) -> None:
        self._emit(AbsoluteExtrusionMode())

    def set_hotend_temp(self, temp: float, wait: bool = False) -> None:
        self._emit(SetHotendTemp(temp=temp, wait=wait))

    def set_bed_temp(self, temp: float, wait: bool = False) -> None:
        self._emit(SetBedTemp(temp=temp, wait=wait))

    def set_fan(self, speed: float) -> None:
        """Set part-cooling fan from a 0-1 fraction."""
        self._emit(SetFan(value=int(round(clamp(speed * 255.0, 0.0, 255.0)))))

    def comment(self, text: str) -> None:
        self._emit(Comment(text=text))

    def _emit(self, cmd: Command) -> None:
        self.sink.emit(cmd)
