"""Infinite plane primitive.

The plane passes through ``point`` with unit normal ``normal``. A ray hits it
at t = dot(point - origin, normal) / dot(direction, normal) whenever that
quotient is defined and non-negative.
"""

from __future__ import annotations

from typing import Any

from aotracer.core.vector import Vec3
from aotracer.geometry.primitive import HitRecord, Primitive
from aotracer.materials.phong import Material


class Plane(Primitive):
    """An infinite plane.

    Attributes:
        point: Any point on the plane.
        normal: The unit normal, reported unchanged for every hit.
    """

    def __init__(self, point: Vec3, normal: Vec3, material: Material) -> None:
        super().__init__(material)
        self.point = point
        self.normal = normal

    def hit(self, origin: Vec3, direction: Vec3) -> HitRecord | None:
        """Test the ray against the plane.

        Returns None when the ray is parallel to the plane (denominator
        exactly zero) or when the plane lies behind the origin (numerator and
        denominator differ in sign).
        """
        denom = direction.dot(self.normal)
        num = (self.point - origin).dot(self.normal)
        if denom == 0.0 or num * denom < 0.0:
            return None
        return HitRecord(distance=num / denom, normal=self.normal, primitive=self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "plane",
            "point": list(self.point.to_tuple()),
            "normal": list(self.normal.to_tuple()),
            "material": self.material.to_dict(),
        }

    def __repr__(self) -> str:
        return f"Plane(point={self.point!r}, normal={self.normal!r})"
