"""Tests for the volumetric feed model."""
import math

import pytest

from spiralprint.errors import InvalidConfiguration
from spiralprint.physics.extrusion import ExtrusionModel, extrusion_ratio, required_feed


class TestRequiredFeed:
    def test_reference_feed(self):
        """10 mm of 0.2 x 0.4 bead from 1.75 mm filament is about 0.333 mm."""
        feed = required_feed(10.0, 0.2, 0.4, 1.75, 1.0)
        assert feed == pytest.approx(10.0 * 0.2 * 0.4 / (math.pi * 0.875 ** 2))
        assert feed == pytest.approx(0.333, abs=1e-3)

    def test_linear_in_distance(self):
        f1 = required_feed(5.0, 0.2, 0.4, 1.75)
        f2 = required_feed(15.0, 0.2, 0.4, 1.75)
        assert f2 == pytest.approx(3.0 * f1)

    def test_linear_in_flow_multiplier(self):
        f1 = required_feed(10.0, 0.2, 0.4, 1.75, 1.0)
        f2 = required_feed(10.0, 0.2, 0.4, 1.75, 1.2)
        assert f2 == pytest.approx(1.2 * f1)

    def test_scales_with_bead_over_filament_area(self):
        f1 = required_feed(10.0, 0.2, 0.4, 1.75)
        f2 = required_feed(10.0, 0.3, 0.5, 2.85)
        expected = (0.3 * 0.5 / (math.pi * (2.85 / 2) ** 2)) / (
            0.2 * 0.4 / (math.pi * (1.75 / 2) ** 2)
        )
        assert f2 / f1 == pytest.approx(expected)

    def test_zero_distance(self):
        assert required_feed(0.0, 0.2, 0.4, 1.75) == 0.0

    @pytest.mark.parametrize("diameter", [0.0, -1.75])
    def test_bad_filament_diameter(self, diameter):
        with pytest.raises(InvalidConfiguration):
            required_feed(10.0, 0.2, 0.4, diameter)


class TestExtrusionModel:
    def setup_method(self):
        self.model = ExtrusionModel(layer_height=0.2, line_width=0.4, filament_diameter=1.75)

    def test_ratio_matches_function(self):
        assert self.model.ratio == pytest.approx(extrusion_ratio(0.2, 0.4, 1.75))

    def test_layer_height_recomputes_ratio(self):
        before = self.model.ratio
        self.model.layer_height = 0.4
        assert self.model.ratio == pytest.approx(2.0 * before)

    def test_line_width_recomputes_ratio(self):
        before = self.model.ratio
        self.model.line_width = 0.2
        assert self.model.ratio == pytest.approx(0.5 * before)

    def test_flow_multiplier_applied_per_call(self):
        ratio = self.model.ratio
        assert self.model.feed_for(10.0, 2.0) == pytest.approx(20.0 * ratio)
        assert self.model.ratio == ratio

    def test_zero_filament_fails_fast(self):
        with pytest.raises(InvalidConfiguration):
            ExtrusionModel(0.2, 0.4, 0.0)
