"""Sphere primitive with analytic ray-sphere intersection.

For a unit-length ray direction d and oc = origin - center the hit parameters
solve t^2 + 2 t dot(d, oc) + |oc|^2 - r^2 = 0, so with

    t1 = dot(d, oc)
    discriminant = t1^2 - |oc|^2 + r^2

the roots are -t1 - sqrt(discriminant) and -t1 + sqrt(discriminant).

Example:
    >>> from aotracer.core.vector import Vec3
    >>> from aotracer.geometry.sphere import Sphere
    >>> from aotracer.materials.phong import Material
    >>> sphere = Sphere(Vec3(0, 0, 5), 1.0, Material(Vec3(1, 1, 1)))
    >>> sphere.hit(Vec3(0, 0, 0), Vec3(0, 0, 1)).distance
    4.0
"""

from __future__ import annotations

import math
from typing import Any

from aotracer.core.vector import Vec3
from aotracer.geometry.primitive import HitRecord, Primitive
from aotracer.materials.phong import Material


class Sphere(Primitive):
    """A sphere defined by its center and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius (positive; not validated).
    """

    def __init__(self, center: Vec3, radius: float, material: Material) -> None:
        super().__init__(material)
        self.center = center
        self.radius = float(radius)

    def hit(self, origin: Vec3, direction: Vec3) -> HitRecord | None:
        """Test the ray against the sphere.

        The smaller non-negative root is reported. When the origin lies inside
        the sphere only the far root is non-negative and is used. When both
        roots are negative the sphere is entirely behind the ray.

        Args:
            origin: The ray origin.
            direction: The unit ray direction.

        Returns:
            A HitRecord with the outward normal at the hit point, or None.
        """
        oc = origin - self.center
        t1 = direction.dot(oc)
        discriminant = t1 * t1 - oc.squared_length() + self.radius * self.radius
        if discriminant < 0.0:
            return None

        t2 = math.sqrt(discriminant)
        near = -t1 - t2
        far = -t1 + t2
        if far < 0.0:
            return None

        distance = near if near >= 0.0 else far
        hit_point = origin + direction * distance
        return HitRecord(
            distance=distance,
            normal=self.normal_at(hit_point),
            primitive=self,
        )

    def normal_at(self, point: Vec3) -> Vec3:
        """Outward unit normal at a point on the surface."""
        return (point - self.center).normalized()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "sphere",
            "center": list(self.center.to_tuple()),
            "radius": self.radius,
            "material": self.material.to_dict(),
        }

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius})"
