"""Render configuration: every tunable the rendering core reads.

A RenderConfig is an immutable value handed to the tracer and the scheduler.
Use dataclasses.replace() to derive variants:

    >>> from dataclasses import replace
    >>> from aotracer.core.config import RenderConfig
    >>> preview = replace(RenderConfig(), width=320, height=240, ao_samples=4)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any

from aotracer.core.vector import Vec3

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_WIDTH = 1023
DEFAULT_HEIGHT = 767

# Number of ambient occlusion rays per shading point (10-1000 are useful)
DEFAULT_AO_SAMPLES = 16

# Occluders farther than this do not darken a point
DEFAULT_AO_CUTOFF = 50.0

# Ambient term added to the diffuse factor before ambient occlusion
DEFAULT_AMBIENT = 0.2

# Recursion stops once depth exceeds this value
DEFAULT_MAX_DEPTH = 5

# Offset along the normal before spawning secondary rays
SELF_INTERSECTION_EPSILON = 1e-7

_VECTOR_FIELDS = ("eye", "light_dir", "light_color", "sky_color", "depth_limit_color")


@dataclass(frozen=True)
class RenderConfig:
    """Tunables of a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        eye: Origin of every primary ray.
        focal_length: Distance from the eye to the image plane, in pixels.
            None selects width / 2 (a 90 degree horizontal field of view).
        light_dir: Direction toward the light; normalized on construction.
        light_color: Color of the specular highlight.
        ambient: Ambient constant added to the diffuse term.
        ao_samples: Ambient occlusion rays per shading point.
        ao_cutoff: Maximum occluder distance counted by ambient occlusion.
        max_depth: Maximum reflection depth; deeper calls return
            depth_limit_color.
        self_intersection_epsilon: Normal offset for secondary ray origins.
        sky_color: Color of rays that hit nothing.
        depth_limit_color: Neutral color returned at the recursion cutoff.
        workers: Number of render threads; None uses os.cpu_count().
        seed: None seeds each worker from OS entropy (non-reproducible);
            an integer gives every row its own derived stream so the image
            is identical across runs and worker counts.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    eye: Vec3 = Vec3(0.0, 0.0, 0.0)
    focal_length: float | None = None
    light_dir: Vec3 = Vec3(-1.0, -1.0, -1.0)
    light_color: Vec3 = Vec3(1.0, 1.0, 1.0)
    ambient: float = DEFAULT_AMBIENT
    ao_samples: int = DEFAULT_AO_SAMPLES
    ao_cutoff: float = DEFAULT_AO_CUTOFF
    max_depth: int = DEFAULT_MAX_DEPTH
    self_intersection_epsilon: float = SELF_INTERSECTION_EPSILON
    sky_color: Vec3 = Vec3(0.6, 0.8, 1.0)
    depth_limit_color: Vec3 = Vec3(0.5, 0.5, 0.5)
    workers: int | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.ao_samples < 1:
            raise ValueError(f"ao_samples must be at least 1, got {self.ao_samples}")
        if self.ao_cutoff < 0.0:
            raise ValueError(f"ao_cutoff must be non-negative, got {self.ao_cutoff}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.focal_length is not None and self.focal_length <= 0.0:
            raise ValueError(f"focal_length must be positive, got {self.focal_length}")
        if self.light_dir.squared_length() == 0.0:
            raise ValueError("light_dir must not be the zero vector")
        # Frozen dataclass: bypass __setattr__ to store the normalized direction
        object.__setattr__(self, "light_dir", self.light_dir.normalized())

    @property
    def image_plane_distance(self) -> float:
        """The focal length actually used for primary rays."""
        if self.focal_length is None:
            return self.width / 2.0
        return self.focal_length

    @property
    def worker_count(self) -> int:
        """The number of render threads actually started."""
        if self.workers is None:
            return os.cpu_count() or 1
        return self.workers

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a JSON-friendly dictionary."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Vec3):
                value = list(value.to_tuple())
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Load a configuration from a dictionary; missing keys keep defaults.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown render settings: {sorted(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key in _VECTOR_FIELDS:
                value = Vec3.from_sequence(value)
            kwargs[key] = value
        return cls(**kwargs)
