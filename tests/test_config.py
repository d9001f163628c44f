"""Tests for RenderConfig and the pinhole camera.

Tests cover:
- Default values and validation
- Light direction normalization
- Dictionary round trip and unknown keys
- Primary ray directions through the image plane
"""

from dataclasses import FrozenInstanceError, replace

import pytest

from aotracer.camera.pinhole import PinholeCamera
from aotracer.core.config import (
    DEFAULT_AO_SAMPLES,
    DEFAULT_HEIGHT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_WIDTH,
    RenderConfig,
)
from aotracer.core.vector import Vec3


class TestRenderConfigDefaults:
    """Tests for default settings."""

    def test_defaults(self):
        """Test the reference image size and shading constants."""
        config = RenderConfig()
        assert (config.width, config.height) == (DEFAULT_WIDTH, DEFAULT_HEIGHT)
        assert config.ao_samples == DEFAULT_AO_SAMPLES
        assert config.max_depth == DEFAULT_MAX_DEPTH
        assert config.ambient == 0.2
        assert config.self_intersection_epsilon == 1e-7
        assert config.seed is None

    def test_light_dir_is_normalized(self):
        """Test that the light direction is stored as a unit vector."""
        config = RenderConfig(light_dir=Vec3(0.0, -3.0, 4.0))
        assert abs(config.light_dir.length() - 1.0) < 1e-12
        assert abs(config.light_dir.y + 0.6) < 1e-12

    def test_focal_length_defaults_to_half_width(self):
        """Test the 90 degree horizontal field of view default."""
        assert RenderConfig(width=640).image_plane_distance == 320.0
        assert RenderConfig(focal_length=100.0).image_plane_distance == 100.0

    def test_frozen(self):
        """Test that configurations are immutable."""
        config = RenderConfig()
        with pytest.raises(FrozenInstanceError):
            config.width = 10

    def test_replace_keeps_validation(self):
        """Test that derived configs are validated too."""
        with pytest.raises(ValueError):
            replace(RenderConfig(), ao_samples=0)


class TestRenderConfigValidation:
    """Tests for rejected settings."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"width": 0},
            {"height": -5},
            {"ao_samples": 0},
            {"ao_cutoff": -1.0},
            {"max_depth": -1},
            {"workers": 0},
            {"focal_length": 0.0},
            {"light_dir": Vec3(0.0, 0.0, 0.0)},
        ],
    )
    def test_invalid_values(self, overrides):
        """Test that out-of-range settings raise ValueError."""
        with pytest.raises(ValueError):
            RenderConfig(**overrides)

    def test_zero_depth_allowed(self):
        """Test that max_depth=0 is valid."""
        assert RenderConfig(max_depth=0).max_depth == 0


class TestRenderConfigSerialization:
    """Tests for the dictionary form."""

    def test_round_trip(self):
        """Test to_dict followed by from_dict."""
        config = RenderConfig(width=64, height=48, ao_samples=4, seed=3, workers=2)
        data = config.to_dict()
        assert data["eye"] == [0.0, 0.0, 0.0]
        restored = RenderConfig.from_dict(data)
        assert (restored.light_dir - config.light_dir).length() < 1e-12
        assert replace(restored, light_dir=config.light_dir) == replace(
            config, light_dir=config.light_dir
        )

    def test_partial_dict_keeps_defaults(self):
        """Test that missing keys fall back to defaults."""
        config = RenderConfig.from_dict({"width": 32, "sky_color": [0, 0, 0]})
        assert config.width == 32
        assert config.height == DEFAULT_HEIGHT
        assert config.sky_color == Vec3(0.0, 0.0, 0.0)

    def test_unknown_key(self):
        """Test that misspelled settings are reported."""
        with pytest.raises(ValueError, match="Unknown"):
            RenderConfig.from_dict({"widht": 32})


class TestPinholeCamera:
    """Tests for primary ray generation."""

    def test_center_pixel_looks_forward(self):
        """Test that the middle pixel looks straight down +Z."""
        camera = PinholeCamera.from_config(RenderConfig(width=33, height=25))
        assert camera.primary_direction(16, 12) == Vec3(0.0, 0.0, 1.0)

    def test_reference_sweep(self):
        """Test the corner rays of the 1023 x 767 reference image."""
        camera = PinholeCamera.from_config(RenderConfig())
        first = camera.primary_direction(0, 0)
        last = camera.primary_direction(1022, 766)
        expected_first = Vec3(-511.0, -383.0, 511.5).normalized()
        expected_last = Vec3(511.0, 383.0, 511.5).normalized()
        assert (first - expected_first).length() < 1e-12
        assert (last - expected_last).length() < 1e-12

    def test_directions_are_unit(self):
        """Test that every primary direction is normalized."""
        camera = PinholeCamera(Vec3(0.0, 0.0, 0.0), 8, 6, 4.0)
        for row in range(6):
            for column in range(8):
                assert abs(camera.primary_direction(column, row).length() - 1.0) < 1e-12

    def test_eye_from_config(self):
        """Test that the configured eye position is used."""
        camera = PinholeCamera.from_config(RenderConfig(eye=Vec3(1.0, 2.0, 3.0)))
        assert camera.eye == Vec3(1.0, 2.0, 3.0)
