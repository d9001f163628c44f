"""Tests for nearest-hit search, shading, ambient occlusion and display mapping.

Tests cover:
- trace_ray nearest-hit policy and tie breaking
- Sky color for rays that miss everything
- Ambient occlusion for isolated and fully enclosed points
- The local Phong shading formula and reflectance blending
- Recursion depth cutoff between two facing mirrors
- Gamma correction and 8-bit quantization
"""

from dataclasses import replace

import pytest

from aotracer.core import tracer
from aotracer.core.config import RenderConfig
from aotracer.core.tracer import (
    ambient_occlusion,
    gamma_correct,
    get_color,
    quantize,
    to_display,
    trace_ray,
)
from aotracer.core.vector import Vec3
from aotracer.geometry import Plane, Sphere
from aotracer.materials.phong import Material
from aotracer.scene.scene import Scene

ORIGIN = Vec3(0.0, 0.0, 0.0)
FORWARD = Vec3(0.0, 0.0, 1.0)


def _assert_vec_close(actual, expected, tol=1e-9):
    for a, e in zip(actual, expected):
        assert abs(a - e) < tol, f"{actual!r} != {expected!r}"


class TestTraceRay:
    """Tests for the nearest-hit policy."""

    def test_empty_scene_misses(self):
        """Test that an empty scene never reports a hit."""
        assert trace_ray(Scene([]), ORIGIN, FORWARD) is None

    def test_nearest_primitive_wins(self, white_material):
        """Test that the closer sphere is returned regardless of scene order."""
        far = Sphere(Vec3(0.0, 0.0, 100.0), 10.0, white_material)
        near = Sphere(Vec3(0.0, 0.0, 50.0), 10.0, white_material)
        record = trace_ray(Scene([far, near]), ORIGIN, FORWARD)
        assert record.primitive is near
        assert abs(record.distance - 40.0) < 1e-9

    def test_ties_keep_scene_order(self, white_material):
        """Test that equal distances resolve to the first primitive in the scene."""
        first = Sphere(Vec3(0.0, 0.0, 50.0), 10.0, white_material)
        second = Sphere(Vec3(0.0, 0.0, 50.0), 10.0, white_material)
        record = trace_ray(Scene([first, second]), ORIGIN, FORWARD)
        assert record.primitive is first

    def test_accepts_plain_list(self, white_material):
        """Test that any iterable of primitives works as the scene."""
        sphere = Sphere(Vec3(0.0, 0.0, 50.0), 10.0, white_material)
        assert trace_ray([sphere], ORIGIN, FORWARD).primitive is sphere


class TestAmbientOcclusion:
    """Tests for the Monte Carlo visibility estimate."""

    @pytest.mark.parametrize("num_samples", [1, 10, 100])
    def test_isolated_point_is_fully_visible(self, white_material, rng, num_samples):
        """Test that geometry beyond the cutoff never occludes."""
        scene = Scene([Sphere(Vec3(0.0, 500.0, 0.0), 10.0, white_material)])
        visibility = ambient_occlusion(
            scene, ORIGIN, Vec3(0.0, 1.0, 0.0), rng, num_samples, cutoff=100.0
        )
        assert visibility == 1.0

    def test_enclosed_point_is_fully_occluded(self, white_material, rng):
        """Test that a point inside a sphere sees no sky within the cutoff."""
        scene = Scene([Sphere(ORIGIN, 5.0, white_material)])
        visibility = ambient_occlusion(
            scene, ORIGIN, Vec3(0.0, 0.0, 1.0), rng, 50, cutoff=10.0
        )
        assert visibility == 0.0

    def test_half_space_blocker_is_partial(self, white_material, rng):
        """Test that a wall at the horizon occludes some but not all samples."""
        wall = Plane(Vec3(1.0, 0.0, 0.0), Vec3(-1.0, 0.0, 0.0), white_material)
        visibility = ambient_occlusion(
            Scene([wall]), ORIGIN, Vec3(0.0, 1.0, 0.0), rng, 400, cutoff=5.0
        )
        assert 0.0 < visibility < 1.0


class TestGetColor:
    """Tests for recursive shading."""

    def test_miss_returns_sky_color(self, rng):
        """Test that rays missing every primitive return exactly the sky color."""
        config = RenderConfig()
        color = get_color(Scene([]), ORIGIN, FORWARD, config.light_dir, rng, config=config)
        assert color == config.sky_color

    def test_miss_with_geometry_elsewhere(self, white_material, rng):
        """Test the sky color when the scene has primitives off the ray."""
        config = RenderConfig()
        scene = Scene([Sphere(Vec3(0.0, 0.0, -50.0), 10.0, white_material)])
        color = get_color(scene, ORIGIN, FORWARD, config.light_dir, rng, config=config)
        assert color == config.sky_color

    def test_depth_beyond_limit_returns_cutoff_color(self, white_material, rng):
        """Test that a call deeper than max_depth returns the neutral gray."""
        config = RenderConfig(max_depth=3)
        scene = Scene([Sphere(Vec3(0.0, 0.0, 50.0), 10.0, white_material)])
        color = get_color(scene, ORIGIN, FORWARD, config.light_dir, rng, 4, config=config)
        assert color == config.depth_limit_color

    def test_local_shading_formula(self, rng):
        """Test color * ao * (diffuse + ambient) + light_color * specular."""
        config = RenderConfig(light_dir=Vec3(0.0, 0.0, -1.0), ambient=0.2)
        material = Material(
            Vec3(0.5, 0.25, 0.1), specular_strength=0.5, specular_exponent=10.0
        )
        wall = Plane(Vec3(0.0, 0.0, 10.0), Vec3(0.0, 0.0, -1.0), material)
        color = get_color(Scene([wall]), ORIGIN, FORWARD, config.light_dir, rng, config=config)
        _assert_vec_close(color, Vec3(0.5 * 1.2 + 0.5, 0.25 * 1.2 + 0.5, 0.1 * 1.2 + 0.5))

    def test_light_behind_surface_leaves_only_ambient(self, rng):
        """Test that negative diffuse and specular terms clamp to zero."""
        config = RenderConfig(light_dir=Vec3(0.0, 0.0, 1.0), ambient=0.2)
        material = Material(Vec3(1.0, 0.5, 0.0), specular_strength=1.0)
        wall = Plane(Vec3(0.0, 0.0, 10.0), Vec3(0.0, 0.0, -1.0), material)
        color = get_color(Scene([wall]), ORIGIN, FORWARD, config.light_dir, rng, config=config)
        _assert_vec_close(color, Vec3(0.2, 0.1, 0.0))

    def test_reflectance_blends_with_reflected_ray(self, rng):
        """Test local * (1 - r) + reflected * r with a reflected ray escaping to the sky."""
        config = RenderConfig(light_dir=Vec3(0.0, 0.0, -1.0), ambient=0.2)
        material = Material(Vec3(0.5, 0.5, 0.5), reflectance=0.25)
        wall = Plane(Vec3(0.0, 0.0, 10.0), Vec3(0.0, 0.0, -1.0), material)
        color = get_color(Scene([wall]), ORIGIN, FORWARD, config.light_dir, rng, config=config)
        local = 0.5 * 1.2
        expected = Vec3(*(local * 0.75 + sky * 0.25 for sky in config.sky_color))
        _assert_vec_close(color, expected)


class TestRecursionDepth:
    """Tests for the reflection depth cutoff."""

    @pytest.fixture
    def facing_mirrors(self, mirror_material):
        """Two perfect mirrors facing each other across the origin."""
        top = Plane(Vec3(0.0, 10.0, 0.0), Vec3(0.0, -1.0, 0.0), mirror_material)
        bottom = Plane(Vec3(0.0, -10.0, 0.0), Vec3(0.0, 1.0, 0.0), mirror_material)
        return Scene([top, bottom])

    @pytest.mark.parametrize("max_depth", [0, 2, 5])
    def test_call_count_bounded(self, facing_mirrors, rng, monkeypatch, max_depth):
        """Test that recursion stops after depths 0..max_depth+1."""
        config = replace(RenderConfig(), max_depth=max_depth, ao_samples=1)
        depths = []
        original = tracer.get_color

        def counting_get_color(*args, **kwargs):
            depths.append(args[5] if len(args) > 5 else kwargs.get("depth", 0))
            return original(*args, **kwargs)

        monkeypatch.setattr(tracer, "get_color", counting_get_color)
        color = tracer.get_color(
            facing_mirrors, ORIGIN, Vec3(0.0, 1.0, 0.0), config.light_dir, rng, config=config
        )

        assert len(depths) == max_depth + 2
        assert max(depths) == max_depth + 1
        assert color == config.depth_limit_color


class TestDisplayMapping:
    """Tests for gamma correction and quantization."""

    def test_gamma_is_square_root(self):
        """Test the square-root curve."""
        assert gamma_correct(0.25) == 0.5
        assert gamma_correct(1.0) == 1.0

    def test_gamma_clamps(self):
        """Test that out-of-range channels clamp before the curve."""
        assert gamma_correct(-1.0) == 0.0
        assert gamma_correct(4.0) == 1.0

    def test_quantize_rounds(self):
        """Test round-half-up quantization to 0..255."""
        assert quantize(0.0) == 0
        assert quantize(1.0) == 255
        assert quantize(0.5) == 128
        assert quantize(0.998) == 254

    def test_to_display_is_opaque_rgba(self):
        """Test a full conversion from linear color to RGBA8."""
        assert to_display(Vec3(0.0, 0.25, 9.0)) == (0, 128, 255, 255)
