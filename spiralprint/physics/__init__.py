from spiralprint.physics.extrusion import ExtrusionModel, extrusion_ratio, required_feed
from spiralprint.physics.decay import clamped_decay_factor, decay_factor

__all__ = [
    "ExtrusionModel",
    "extrusion_ratio",
    "required_feed",
    "decay_factor",
    "clamped_decay_factor",
]
