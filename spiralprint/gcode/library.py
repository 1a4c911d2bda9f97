"""Ready-made print programs.

Provides the setup / purge / spool sequence for the spiral-wound spool:
a decayed disc, an axle on top of it, and a second disc printed as an
overhang at reduced speed and raised flow.
"""

from __future__ import annotations

from dataclasses import replace

from spiralprint.config import PrintConfig, DEFAULT_CONFIG
from spiralprint.gcode.commands import Command
from spiralprint.gcode.writer import CommandBuffer, render_program
from spiralprint.printer.state import MotionParameters, MotionState, point3
from spiralprint.toolpath.spiral import LayerPass, ShapeSpec, print_cylinder


def preamble(state: MotionState, config: PrintConfig = DEFAULT_CONFIG) -> None:
    """Heat up, home and zero the extruder."""
    state.set_bed_temp(config.bed_temp, wait=False)
    state.set_hotend_temp(config.hotend_temp, wait=False)
    state.set_bed_temp(config.bed_temp, wait=True)
    state.set_hotend_temp(config.hotend_temp, wait=True)
    state.home()
    state.absolute_extrusion()
    state.set_extrusion(0.0)


def purge_line(state: MotionState, config: PrintConfig = DEFAULT_CONFIG) -> None:
    """Prime the nozzle with an over-extruded line along the bed edge."""
    state.comment("purge line")
    state.set_flow_multiplier(config.purge_flow)
    state.travel_to(point3(*config.purge_start))
    state.extrude_to(point3(*config.purge_end))
    state.set_flow_multiplier(1.0)
    state.set_extrusion(0.0)
    state.travel_to(state.position + point3(0, 0, config.clearance_lift))


def spool_shapes(
    config: PrintConfig = DEFAULT_CONFIG,
) -> tuple[ShapeSpec, ShapeSpec, ShapeSpec]:
    """Disc, axle and overhang disc specs, all based at the first layer offset."""

    def shape(diameter: float, decay: bool) -> ShapeSpec:
        return ShapeSpec(
            diameter=diameter,
            height=config.section_height,
            starting_location=(config.center_x, config.center_y, config.first_layer_offset),
            spacing=config.line_width,
            layer_height=config.layer_height,
            decay=decay,
            decay_shape=config.decay_shape,
            angle_step_deg=config.angle_step_deg,
            closing_angle=config.closing_angle,
            lift_retract=config.lift_retract,
        )

    return (
        shape(config.disc_diameter, True),
        shape(config.axle_diameter, False),
        shape(config.disc_diameter, False),
    )


def _stacked_on(spec: ShapeSpec, state: MotionState) -> ShapeSpec:
    """Move ``spec`` so its base sits at the current head height."""
    x, y, _ = spec.starting_location
    return replace(spec, starting_location=(x, y, float(state.position[2])))


def spool_job(
    state: MotionState,
    shapes: tuple[ShapeSpec, ShapeSpec, ShapeSpec],
    config: PrintConfig = DEFAULT_CONFIG,
) -> list[LayerPass]:
    """Print disc, axle and overhang disc stacked on one centre.

    ``shapes`` comes from :func:`spool_shapes`, built before the first
    command so a bad section is rejected up front. Each section starts
    from the z where the previous one ended. The overhang disc runs at
    ``overhang_feedrate`` with ``overhang_flow``.
    """
    disc, axle, overhang = shapes
    state.travel_to(point3(config.center_x, config.center_y, state.position[2]))

    layers = print_cylinder(state, disc)
    layers += print_cylinder(state, _stacked_on(axle, state))

    state.set_print_feedrate(config.overhang_feedrate)
    state.set_flow_multiplier(config.overhang_flow)
    layers += print_cylinder(state, _stacked_on(overhang, state))

    # park above the part, then clear the print head off towards the front
    x, y, z = (float(v) for v in state.position)
    state.travel_to(point3(x, y, z + config.park_lift))
    state.travel_to(point3(x, config.park_y, z + config.park_lift))
    return layers


def spool_program(
    config: PrintConfig = DEFAULT_CONFIG, sink: CommandBuffer | None = None
) -> list[Command]:
    """Full spool print as a command list.

    Raises :class:`InvalidConfiguration` before anything reaches ``sink``.
    """
    shapes = spool_shapes(config)
    params = MotionParameters.from_config(config)

    sink = sink if sink is not None else CommandBuffer()
    state = MotionState(params, sink=sink)
    preamble(state, config)
    purge_line(state, config)
    spool_job(state, shapes, config)
    return sink.drain()


def spool_gcode(config: PrintConfig = DEFAULT_CONFIG) -> str:
    """Full spool print as G-code text."""
    return render_program(spool_program(config))
