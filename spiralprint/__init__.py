"""Spiral-wound cylinder toolpaths and G-code for FDM printers."""

from spiralprint.config import DEFAULT_CONFIG, PrintConfig
from spiralprint.errors import InvalidConfiguration, IOFailure
from spiralprint.printer.state import MotionParameters, MotionState
from spiralprint.toolpath.spiral import ShapeSpec, SpiralCylinderGenerator

__all__ = [
    "DEFAULT_CONFIG",
    "PrintConfig",
    "InvalidConfiguration",
    "IOFailure",
    "MotionParameters",
    "MotionState",
    "ShapeSpec",
    "SpiralCylinderGenerator",
]
