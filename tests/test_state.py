"""Tests for the motion / extrusion tracker."""
import numpy as np
import pytest

from spiralprint.config import DEFAULT_CONFIG
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
from spiralprint.printer.state import MotionParameters, MotionState, point3

REFERENCE_FEED = 10.0 * 0.2 * 0.4 / (np.pi * 0.875 ** 2)


class TestMotionParameters:
    def test_defaults_from_config(self):
        params = MotionParameters.from_config(DEFAULT_CONFIG)
        assert params.layer_height == DEFAULT_CONFIG.layer_height
        assert params.filament_diameter == DEFAULT_CONFIG.filament_diameter
        assert params.print_feedrate == DEFAULT_CONFIG.print_feedrate

    @pytest.mark.parametrize(
        "field", ["filament_diameter", "layer_height", "line_width", "print_feedrate"]
    )
    def test_non_positive_rejected(self, field):
        with pytest.raises(InvalidConfiguration):
            MotionParameters(**{field: 0.0})


class TestMotionState:
    def setup_method(self):
        self.state = MotionState(
            MotionParameters(
                travel_feedrate=2000,
                print_feedrate=1000,
                layer_height=0.2,
                line_width=0.4,
                filament_diameter=1.75,
                flow_multiplier=1.0,
            )
        )
        self.commands = self.state.sink.commands

    def test_starts_at_origin(self):
        assert np.allclose(self.state.position, [0.0, 0.0, 0.0])
        assert self.state.extruder == 0.0
        assert self.commands == []

    def test_travel_does_not_extrude(self):
        self.state.travel_to(point3(10, 20, 5))
        assert np.allclose(self.state.position, [10.0, 20.0, 5.0])
        assert self.state.extruder == 0.0
        assert self.commands == [Travel(10.0, 20.0, 5.0, feedrate=2000)]

    def test_extrude_to_uses_model(self):
        self.state.extrude_to(point3(10, 0, 0))
        assert self.state.extruder == pytest.approx(REFERENCE_FEED)
        cmd = self.commands[-1]
        assert isinstance(cmd, ExtrudeMove)
        assert cmd.feed == pytest.approx(REFERENCE_FEED)
        assert cmd.feedrate == 1000
        assert np.allclose(self.state.position, [10.0, 0.0, 0.0])

    def test_extruder_accumulates(self):
        self.state.extrude_to(point3(10, 0, 0))
        self.state.extrude_to(point3(10, 10, 0))
        assert self.state.extruder == pytest.approx(2.0 * REFERENCE_FEED)

    def test_required_feed_does_not_emit(self):
        feed = self.state.required_feed(point3(0, 10, 0))
        assert feed == pytest.approx(REFERENCE_FEED)
        assert self.commands == []

    def test_explicit_flow_bypasses_model(self):
        self.state.set_extrusion(1.0)
        self.state.extrude_with_explicit_flow(point3(10, 0, 0), 0.05)
        assert self.state.extruder == pytest.approx(1.05)
        cmd = self.commands[-1]
        assert (cmd.x, cmd.y, cmd.z) == (10.0, 0.0, 0.0)
        assert cmd.feed == pytest.approx(1.05)

    def test_set_extrusion_resets_feed(self):
        self.state.extrude_to(point3(10, 0, 0))
        self.state.set_extrusion(0.0)
        assert self.state.extruder == 0.0
        assert self.commands[-1] == SetAbsoluteFeed(0.0)

    def test_layer_height_recomputes_ratio(self):
        ratio = self.state.extrusion_ratio
        self.state.set_layer_height(0.1)
        assert self.state.extrusion_ratio == pytest.approx(ratio / 2.0)

    def test_line_width_recomputes_ratio(self):
        ratio = self.state.extrusion_ratio
        self.state.set_line_width(0.6)
        assert self.state.extrusion_ratio == pytest.approx(ratio * 1.5)

    def test_flow_multiplier_scales_feed_not_ratio(self):
        ratio = self.state.extrusion_ratio
        self.state.set_flow_multiplier(2.0)
        assert self.state.extrusion_ratio == ratio
        self.state.extrude_to(point3(10, 0, 0))
        assert self.state.extruder == pytest.approx(2.0 * REFERENCE_FEED)

    def test_feedrate_setters(self):
        self.state.set_travel_feedrate(3000)
        self.state.set_print_feedrate(300)
        self.state.travel_to(point3(1, 0, 0))
        self.state.extrude_to(point3(2, 0, 0))
        assert self.commands[0].feedrate == 3000
        assert self.commands[1].feedrate == 300

    def test_retract_and_prime(self):
        self.state.set_extrusion(5.0)
        self.state.move_extruder(-0.8)
        self.state.move_extruder(0.8)
        assert self.state.extruder == pytest.approx(5.0)
        retract, prime = self.commands[1:]
        assert isinstance(retract, FeedMove)
        assert retract.feed == pytest.approx(4.2)
        assert retract.feedrate == 300
        assert prime.feed == pytest.approx(5.0)

    def test_home_resets_position(self):
        self.state.travel_to(point3(50, 50, 10))
        self.state.home()
        assert np.allclose(self.state.position, [0.0, 0.0, 0.0])
        assert self.commands[-1] == Home()

    def test_machine_setup_commands(self):
        self.state.set_hotend_temp(195.0, wait=True)
        self.state.set_bed_temp(55.0)
        self.state.absolute_extrusion()
        self.state.comment("hello")
        assert self.commands == [
            SetHotendTemp(195.0, wait=True),
            SetBedTemp(55.0, wait=False),
            AbsoluteExtrusionMode(),
            Comment("hello"),
        ]

    def test_fan_scaled_and_clamped(self):
        self.state.set_fan(0.5)
        self.state.set_fan(1.5)
        self.state.set_fan(-1.0)
        assert self.commands == [SetFan(128), SetFan(255), SetFan(0)]

    def test_position_is_copied(self):
        p = point3(1, 2, 3)
        self.state.travel_to(p)
        p[0] = 100.0
        assert self.state.position[0] == 1.0
