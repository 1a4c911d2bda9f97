"""PrintConfig — process and shape defaults for the spool print."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PrintConfig:
    """Process settings and shape targets for a spiral-wound spool print."""

    # --- Bead geometry (mm) ---
    layer_height: float = 0.2
    line_width: float = 0.4
    filament_diameter: float = 1.75

    # --- Temperatures (°C) ---
    hotend_temp: float = 195.0
    bed_temp: float = 55.0

    # --- Feedrates (mm/min) ---
    travel_feedrate: float = 2000.0
    print_feedrate: float = 1000.0
    overhang_feedrate: float = 300.0
    retract_feedrate: float = 300.0

    # --- Flow ---
    flow_multiplier: float = 1.0
    overhang_flow: float = 1.2
    purge_flow: float = 2.0

    # --- Spool geometry (mm) ---
    disc_diameter: float = 30.0
    axle_diameter: float = 10.0
    section_height: float = 5.0
    center_x: float = 150.0
    center_y: float = 150.0
    first_layer_offset: float = 0.1  # z of the spool base

    # --- Purge line (mm) ---
    purge_start: tuple[float, float, float] = (30.0, 35.0, 0.3)
    purge_end: tuple[float, float, float] = (190.0, 35.0, 0.25)

    # --- Spiral sweep ---
    angle_step_deg: float = 5.0
    decay_shape: float = 1.0  # k in 1 - (k*r/d)^2
    closing_angle: float = 2.0 * math.pi  # one blend turn past the spiral/circle handover (rad)

    # --- Moves between shapes (mm) ---
    lift_retract: float = 0.8  # filament pulled back around each z-lift
    clearance_lift: float = 5.0
    park_lift: float = 20.0
    park_y: float = 10.0


# Singleton default config
DEFAULT_CONFIG = PrintConfig()
