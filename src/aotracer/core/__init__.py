"""Core rendering module.

Components:
    vector: Vec3 value type and cosine-weighted hemisphere sampling
    config: RenderConfig with every render tunable
    framebuffer: RGBA8 framebuffer with disjoint row slices
    tracer: Nearest-hit search, ambient occlusion and recursive shading
    scheduler: Thread pool rendering row tasks into the framebuffer

The core treats the scene and the random generators as pre-validated inputs:
once a render starts, intersection and shading never fail.
"""

from .config import RenderConfig
from .framebuffer import Framebuffer
from .vector import (
    Vec3,
    build_onb_from_normal,
    clamp,
    cosine_weighted_random_direction,
)

# Note: tracer and scheduler are NOT imported here to avoid circular imports
# with the geometry and scene packages. Import them directly:
#   from aotracer.core.tracer import trace_ray, get_color
#   from aotracer.core.scheduler import RenderScheduler

__all__ = [
    "Vec3",
    "clamp",
    "build_onb_from_normal",
    "cosine_weighted_random_direction",
    "RenderConfig",
    "Framebuffer",
]
