"""Abstract machine commands emitted by the motion state.

Commands carry values only; :mod:`spiralprint.gcode.writer` decides how
they look as G-code text.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Travel:
    """Rapid move without extrusion."""

    x: float
    y: float
    z: float
    feedrate: float  # mm/min


@dataclass(frozen=True)
class ExtrudeMove:
    """Coordinated move ending at absolute extruder position ``feed``."""

    x: float
    y: float
    z: float
    feed: float  # absolute extruder position after the move (mm)
    feedrate: float  # mm/min


@dataclass(frozen=True)
class FeedMove:
    """Extruder-only move (retract or prime) to absolute position ``feed``."""

    feed: float
    feedrate: float


@dataclass(frozen=True)
class SetAbsoluteFeed:
    """Redefine the current extruder position without moving it."""

    value: float


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class SetHotendTemp:
    temp: float  # °C
    wait: bool = False


@dataclass(frozen=True)
class SetBedTemp:
    temp: float  # °C
    wait: bool = False


@dataclass(frozen=True)
class SetFan:
    value: int  # 0-255


@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class AbsoluteExtrusionMode:
    pass


Command = (
    Travel
    | ExtrudeMove
    | FeedMove
    | SetAbsoluteFeed
    | Comment
    | SetHotendTemp
    | SetBedTemp
    | SetFan
    | Home
    | AbsoluteExtrusionMode
)
