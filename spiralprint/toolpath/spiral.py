"""Spiral-wound cylinder toolpaths.

Each layer is an outward Archimedean spiral ``r = spacing / (2 pi) * theta``
swept in fixed angular steps from the centre. Once the spiral reaches the
used radius (at ``last_full_theta``) the path hands over to the rim: any
further sweep follows the averaged radius
``((spacing / (2 pi)) * theta + used_radius) / 2`` with a narrowing bead.
Optionally the feed is tapered with the rim decay factor.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from spiralprint.errors import InvalidConfiguration
from spiralprint.physics.decay import DEFAULT_DECAY_SHAPE, clamped_decay_factor
from spiralprint.printer.state import MotionState, point3
from spiralprint.utils.math_helpers import lerp

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi

# Grid angles closer than this to the end angle are dropped so the end
# sample is not duplicated.
_ANGLE_EPS = 1e-9

# Slack on height / layer_height so 0.6 / 0.2 counts as 3 layers, not 2.
_LAYER_EPS = 1e-9


def spiral_radius(theta, spacing: float):
    """Archimedean spiral radius; adjacent turns are ``spacing`` apart."""
    return spacing / TWO_PI * theta


def blend_radius(theta, spacing: float, used_radius: float):
    """Average of the continuing spiral and the rim circle."""
    return (spacing / TWO_PI * theta + used_radius) / 2.0


def blend_width(theta, spacing: float, last_full_theta: float):
    """Bead width past the handover angle.

    Past ``last_full_theta`` the blended radius grows by only half a
    spacing per turn, so the width narrows linearly from ``spacing`` to
    ``spacing / 2`` over one turn and stays there.
    """
    t = np.clip((np.asarray(theta, dtype=float) - last_full_theta) / TWO_PI, 0.0, 1.0)
    return lerp(spacing, spacing / 2.0, t)


@dataclass(frozen=True)
class ShapeSpec:
    """Target cylinder for one generator run.

    Attributes:
        diameter: Outer diameter of the printed disc (mm)
        height: Total height to build (mm)
        starting_location: Centre of the base (x, y, z) in mm; layer ``n``
            is printed at ``z + n * layer_height``
        spacing: Centre-to-centre distance between adjacent spiral turns (mm)
        layer_height: Layer height (mm)
        decay: Taper the feed towards the rim
        decay_shape: k in the rim decay factor ``1 - (k r / d)^2``
        angle_step_deg: Angular sweep increment in degrees
        closing_angle: Sweep past the spiral/circle handover (rad)
        lift_retract: Filament retracted around each z-lift (mm); 0 disables
    """

    diameter: float
    height: float
    starting_location: tuple[float, float, float]
    spacing: float
    layer_height: float
    decay: bool = False
    decay_shape: float = DEFAULT_DECAY_SHAPE
    angle_step_deg: float = 5.0
    closing_angle: float = 0.0
    lift_retract: float = 0.0

    def __post_init__(self) -> None:
        for name in ("diameter", "height", "spacing", "layer_height",
                     "decay_shape", "angle_step_deg"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidConfiguration(f"{name} must be positive, got {value}")
        if self.closing_angle < 0:
            raise InvalidConfiguration(
                f"closing_angle must be non-negative, got {self.closing_angle}"
            )
        if self.lift_retract < 0:
            raise InvalidConfiguration(
                f"lift_retract must be non-negative, got {self.lift_retract}"
            )
        if self.used_radius <= 0:
            raise InvalidConfiguration(
                f"spacing {self.spacing} leaves no printable radius "
                f"for diameter {self.diameter}"
            )
        if self.layer_count < 1:
            raise InvalidConfiguration(
                f"height {self.height} is less than one layer of {self.layer_height}"
            )

    @property
    def used_radius(self) -> float:
        """Radius of the outermost bead centre.

        Half a bead is taken off the diameter so the outer edge of the bead
        lands on the target diameter.
        """
        return (self.diameter - self.spacing / 2.0) / 2.0

    @property
    def last_full_theta(self) -> float:
        """Angle at which the spiral reaches :attr:`used_radius`."""
        return self.used_radius / self.spacing * TWO_PI

    @property
    def end_theta(self) -> float:
        return self.last_full_theta + self.closing_angle

    @property
    def layer_count(self) -> int:
        """Whole layers that fit in :attr:`height`.

        ``floor(height / layer_height)`` with a small tolerance so a height
        that is an exact multiple of the layer height in decimal is not
        cut short by binary rounding.
        """
        return math.floor(self.height / self.layer_height + _LAYER_EPS)


@dataclass(frozen=True)
class PathPoint:
    x: float
    y: float
    z: float
    feed: float  # filament fed on the move into this point (mm)


@dataclass
class LayerPass:
    """All printing moves of one layer, in emission order."""

    index: int  # 1-based
    z: float
    points: list[PathPoint] = field(default_factory=list)


def sweep_angles(end_theta: float, step_deg: float) -> np.ndarray:
    """Angles from 0 in ``step_deg`` increments, ending exactly at ``end_theta``."""
    grid = np.deg2rad(np.arange(0.0, math.degrees(end_theta), step_deg))
    grid = grid[grid < end_theta - _ANGLE_EPS]
    return np.append(grid, end_theta)


def plan_layer(spec: ShapeSpec) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Angles, radii and bead widths of one layer's sweep.

    Widths are ``nan`` on the pure spiral, meaning "keep the current line
    width"; only the blend region overrides it.
    """
    theta = sweep_angles(spec.end_theta, spec.angle_step_deg)
    on_spiral = theta <= spec.last_full_theta
    radius = np.where(
        on_spiral,
        spiral_radius(theta, spec.spacing),
        blend_radius(theta, spec.spacing, spec.used_radius),
    )
    width = np.where(
        on_spiral, np.nan, blend_width(theta, spec.spacing, spec.last_full_theta)
    )
    return theta, radius, width


class SpiralCylinderGenerator:
    """Drives a :class:`MotionState` through a spiral-wound cylinder.

    Typical usage::

        generator = SpiralCylinderGenerator(state)
        for layer in generator.generate(spec):
            ...

    The layer sequence is lazy: commands for a layer are emitted when that
    layer is requested. The current position and feed of ``state`` are the
    starting context; nothing else carries over between runs.
    """

    def __init__(self, state: MotionState) -> None:
        self.state = state

    def generate(self, spec: ShapeSpec) -> Iterator[LayerPass]:
        """Plan the sweep and return the lazy sequence of layer passes.

        ``spec`` is validated when it is built, so a bad shape raises
        :class:`InvalidConfiguration` before this is ever reached.
        """
        theta, radius, width = plan_layer(spec)
        logger.info(
            "spiral cylinder d=%.2f h=%.2f: %d layers x %d points, used radius %.3f",
            spec.diameter,
            spec.height,
            spec.layer_count,
            theta.size,
            spec.used_radius,
        )
        return self._layers(spec, theta, radius, width)

    def _layers(
        self,
        spec: ShapeSpec,
        theta: np.ndarray,
        radius: np.ndarray,
        width: np.ndarray,
    ) -> Iterator[LayerPass]:
        state = self.state
        cx, cy, cz = spec.starting_location
        xs = cx + radius * np.cos(theta)
        ys = cy + radius * np.sin(theta)
        if spec.decay:
            scales = [clamped_decay_factor(r, spec.diameter, spec.decay_shape) for r in radius]
        else:
            scales = [None] * radius.size

        for layer in range(1, spec.layer_count + 1):
            z = cz + layer * spec.layer_height
            state.comment(f"layer {layer}/{spec.layer_count} z={z:.3f}")
            self._raise_to(point3(cx, cy, z), spec.lift_retract)

            base_width = state.line_width
            points: list[PathPoint] = []
            for x, y, w, scale in zip(xs, ys, width, scales):
                if not np.isnan(w):
                    state.set_line_width(float(w))
                target = point3(x, y, z)
                feed = state.required_feed(target)
                if scale is None:
                    state.extrude_to(target)
                else:
                    feed *= scale
                    state.extrude_with_explicit_flow(target, feed)
                points.append(PathPoint(float(x), float(y), z, feed))

            if state.line_width != base_width:
                state.set_line_width(base_width)
            state.set_flow_multiplier(1.0)
            yield LayerPass(index=layer, z=z, points=points)

    def _raise_to(self, target: np.ndarray, retract: float) -> None:
        """Move to the next layer start, retracting around the lift."""
        if retract > 0:
            self.state.move_extruder(-retract)
            self.state.travel_to(target)
            self.state.move_extruder(retract)
        else:
            self.state.travel_to(target)


def print_cylinder(state: MotionState, spec: ShapeSpec) -> list[LayerPass]:
    """Run the generator to completion and return every layer pass."""
    return list(SpiralCylinderGenerator(state).generate(spec))
