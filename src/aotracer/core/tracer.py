"""Ray tracing core: nearest-hit search, shading and ambient occlusion.

This module turns a ray into a color:

    trace_ray          brute-force nearest hit over all scene primitives
    ambient_occlusion  Monte Carlo estimate of unoccluded sky visibility
    get_color          recursive Phong shading with mirror reflection
    to_display         clamp + square-root gamma + 8-bit quantization

Shading model for a hit with normal n on a ray with direction d:

    diffuse    = clamp(dot(n, light_dir))
    specular   = clamp(dot(reflect(d, n), light_dir)) ** exponent * strength
    brightness = ambient_occlusion(...) * (diffuse + ambient)
    local      = material.color * brightness + light_color * specular
    color      = local * (1 - reflectance) + get_color(reflected) * reflectance

Recursion is bounded: any call with depth > config.max_depth returns
config.depth_limit_color, so mirror chains (e.g. two facing mirrors) stop
after max_depth + 2 calls.

All functions are pure with respect to the scene; randomness comes from the
explicit ``rng`` argument, which must be owned by the calling thread.

Example:
    >>> import numpy as np
    >>> from aotracer.core.config import RenderConfig
    >>> from aotracer.core.tracer import get_color
    >>> from aotracer.core.vector import Vec3
    >>> from aotracer.scene.scene import Scene
    >>> config = RenderConfig()
    >>> get_color(Scene([]), Vec3(0, 0, 0), Vec3(0, 0, 1), config.light_dir,
    ...           np.random.default_rng(0), config=config) == config.sky_color
    True
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from aotracer.core.config import RenderConfig
from aotracer.core.vector import RandomSource, Vec3, clamp, cosine_weighted_random_direction
from aotracer.geometry.primitive import HitRecord, Primitive

DEFAULT_CONFIG = RenderConfig()

OPAQUE_ALPHA = 255


# =============================================================================
# Intersection
# =============================================================================


def trace_ray(
    scene: Iterable[Primitive],
    origin: Vec3,
    direction: Vec3,
) -> HitRecord | None:
    """Find the nearest primitive hit along a ray.

    Every primitive is tested; the smallest distance wins and ties keep the
    primitive that comes first in scene order.

    Args:
        scene: Ordered primitives (a Scene or any iterable of primitives).
        origin: The ray origin.
        direction: The unit ray direction.

    Returns:
        The nearest HitRecord, or None if the ray misses everything.
    """
    nearest: HitRecord | None = None
    for primitive in scene:
        record = primitive.hit(origin, direction)
        if record is not None and (nearest is None or record.distance < nearest.distance):
            nearest = record
    return nearest


def ambient_occlusion(
    scene: Iterable[Primitive],
    position: Vec3,
    normal: Vec3,
    rng: RandomSource,
    num_samples: int,
    cutoff: float,
) -> float:
    """Estimate the fraction of the hemisphere above a point that sees the sky.

    Fires ``num_samples`` cosine-weighted rays around ``normal`` and counts
    those that hit geometry closer than ``cutoff``.

    Args:
        scene: Ordered primitives.
        position: Ray origin, already offset off the surface.
        normal: Unit surface normal.
        rng: Random source owned by the calling thread.
        num_samples: Number of rays (>= 1).
        cutoff: Hits at or beyond this distance do not occlude.

    Returns:
        1 - occluded / num_samples, in [0, 1].
    """
    occluded = 0
    for _ in range(num_samples):
        direction = cosine_weighted_random_direction(normal, rng)
        record = trace_ray(scene, position, direction)
        if record is not None and record.distance < cutoff:
            occluded += 1
    return 1.0 - occluded / num_samples


# =============================================================================
# Shading
# =============================================================================


def get_color(
    scene: Iterable[Primitive],
    origin: Vec3,
    direction: Vec3,
    light_dir: Vec3,
    rng: RandomSource,
    depth: int = 0,
    *,
    config: RenderConfig = DEFAULT_CONFIG,
) -> Vec3:
    """Compute the linear color seen along a ray.

    Args:
        scene: Ordered primitives.
        origin: The ray origin.
        direction: The unit ray direction.
        light_dir: Unit direction toward the light.
        rng: Random source owned by the calling thread.
        depth: Reflection depth of this ray (0 for primary rays).
        config: Shading constants (ambient, AO, sky, cutoff colors).

    Returns:
        The linear RGB color. Channels may exceed 1 before display mapping.
    """
    if depth > config.max_depth:
        return config.depth_limit_color

    record = trace_ray(scene, origin, direction)
    if record is None:
        return config.sky_color

    normal = record.normal
    material = record.primitive.material
    hit_point = origin + direction * record.distance + normal * config.self_intersection_epsilon

    diffuse = clamp(normal.dot(light_dir))
    reflected = direction.reflect(normal)
    specular = 0.0
    if material.specular_strength > 0.0:
        specular = clamp(reflected.dot(light_dir)) ** material.specular_exponent
        specular *= material.specular_strength

    occlusion = ambient_occlusion(
        scene, hit_point, normal, rng, config.ao_samples, config.ao_cutoff
    )
    brightness = occlusion * (diffuse + config.ambient)
    local = material.color * brightness + config.light_color * specular

    if material.reflectance > 0.0:
        mirrored = get_color(
            scene, hit_point, reflected, light_dir, rng, depth + 1, config=config
        )
        return local * (1.0 - material.reflectance) + mirrored * material.reflectance
    return local


# =============================================================================
# Display mapping
# =============================================================================


def gamma_correct(value: float) -> float:
    """Clamp a linear channel to [0, 1] and apply the square-root gamma curve."""
    return math.sqrt(clamp(value))


def quantize(value: float) -> int:
    """Map a display channel in [0, 1] to 0..255, rounding half up."""
    return int(value * 255.0 + 0.5)


def to_display(color: Vec3) -> tuple[int, int, int, int]:
    """Convert a linear color to an opaque RGBA8 pixel."""
    return (
        quantize(gamma_correct(color.x)),
        quantize(gamma_correct(color.y)),
        quantize(gamma_correct(color.z)),
        OPAQUE_ALPHA,
    )
