"""Fixed-eye pinhole camera for primary ray generation.

The eye looks down +Z through an image plane at distance ``focal_length``.
Pixel (column, row) maps to the image-plane point

    (column - width // 2, row - height // 2, focal_length)

so row 0 (the first row of the framebuffer) sees the most negative y. For a
1023 x 767 image with focal length 512 this reproduces the sweep
x in [-511, 511], y in [-383, 383].

Example:
    >>> from aotracer.camera.pinhole import PinholeCamera
    >>> from aotracer.core.config import RenderConfig
    >>> camera = PinholeCamera.from_config(RenderConfig(width=64, height=48))
    >>> camera.primary_direction(32, 24)
    Vec3(0.0, 0.0, 1.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from aotracer.core.config import RenderConfig
from aotracer.core.vector import Vec3


@dataclass(frozen=True)
class PinholeCamera:
    """A pinhole camera with a fixed forward (+Z) view direction.

    Attributes:
        eye: Origin of every primary ray.
        width: Image width in pixels.
        height: Image height in pixels.
        focal_length: Distance from the eye to the image plane, in pixels.
    """

    eye: Vec3
    width: int
    height: int
    focal_length: float

    @classmethod
    def from_config(cls, config: RenderConfig) -> PinholeCamera:
        """Create the camera described by a render configuration."""
        return cls(
            eye=config.eye,
            width=config.width,
            height=config.height,
            focal_length=config.image_plane_distance,
        )

    def primary_direction(self, column: int, row: int) -> Vec3:
        """Unit direction of the primary ray through pixel (column, row)."""
        return Vec3(
            column - self.width // 2,
            row - self.height // 2,
            self.focal_length,
        ).normalized()
