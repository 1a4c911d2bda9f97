"""Tests for PrintConfig defaults."""
from dataclasses import FrozenInstanceError, replace

import pytest

from spiralprint.config import DEFAULT_CONFIG, PrintConfig


class TestPrintConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.layer_height == 0.2
        assert DEFAULT_CONFIG.line_width == 0.4
        assert DEFAULT_CONFIG.filament_diameter == 1.75
        assert DEFAULT_CONFIG.angle_step_deg == 5.0

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.layer_height = 0.3

    def test_replace(self):
        config = replace(DEFAULT_CONFIG, disc_diameter=40.0)
        assert isinstance(config, PrintConfig)
        assert config.disc_diameter == 40.0
        assert DEFAULT_CONFIG.disc_diameter == 30.0
